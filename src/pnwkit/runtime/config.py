"""
Configuration loading for the execution service.

Values can come from keyword arguments, a dict or a YAML file:

    # pnwkit.yaml
    service:
      endpoint: https://api.politicsandwar.com/graphql
      timeout: 30
      max_retries: 3
    cache:
      enabled: true
      ttl: 120
      max_size: 500
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.query_types import CacheOptions


DEFAULT_ENDPOINT = "https://api.politicsandwar.com/graphql"


@dataclass
class ServiceConfig:
    """Transport and resilience settings of the execution service."""
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 30.0  # seconds, per attempt
    max_retries: int = 3  # attempts after the first
    retry_delay: float = 1.0  # seconds, doubled per attempt
    min_request_interval: float = 0.1  # seconds between request starts
    max_query_size: int = 50_000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceConfig":
        """Create config from dictionary."""
        return cls(
            endpoint=data.get("endpoint", DEFAULT_ENDPOINT),
            timeout=float(data.get("timeout", 30.0)),
            max_retries=int(data.get("max_retries", 3)),
            retry_delay=float(data.get("retry_delay", 1.0)),
            min_request_interval=float(data.get("min_request_interval", 0.1)),
            max_query_size=int(data.get("max_query_size", 50_000)),
        )


@dataclass
class PnwKitConfig:
    """Main configuration: service settings plus cache options."""
    service: ServiceConfig = field(default_factory=ServiceConfig)
    cache: CacheOptions = field(default_factory=CacheOptions)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PnwKitConfig":
        """Create config from dictionary."""
        return cls(
            service=ServiceConfig.from_dict(data.get("service") or {}),
            cache=CacheOptions(**(data.get("cache") or {})),
        )


def load_config(path: Path | str) -> PnwKitConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        PnwKitConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the top level is not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    return PnwKitConfig.from_dict(data)
