"""Shared fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from pnwkit.runtime.config import ServiceConfig
from pnwkit.runtime.service_client import GraphQLService


class SleepRecorder:
    """Stands in for GraphQLService._sleep; records delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeService:
    """Minimal execution service double for builder tests."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response if response is not None else {}
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def query_call(self, api_key: str, query: str) -> Any:
        self.calls.append((api_key, query))
        if self.error is not None:
            raise self.error
        return self.response


def graphql_response(data: Any = None, errors: list[str] | None = None, status: int = 200) -> httpx.Response:
    body: dict[str, Any] = {}
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = [{"message": m} for m in errors]
    return httpx.Response(status, json=body)


@pytest.fixture(autouse=True)
def reset_default_service(monkeypatch):
    """Keep the process-wide default service from leaking between tests."""
    monkeypatch.setattr(GraphQLService, "_instance", None)


@pytest.fixture
def make_service() -> Callable[..., tuple[GraphQLService, SleepRecorder, list[httpx.Request]]]:
    """
    Build a GraphQLService backed by httpx.MockTransport.

    Returns (service, sleep_recorder, captured_requests). Pacing is disabled
    unless min_request_interval is passed explicitly.
    """

    def factory(handler, **config_overrides):
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request):
            requests.append(request)
            return handler(request)

        config_overrides.setdefault("min_request_interval", 0.0)
        service = GraphQLService(
            ServiceConfig(**config_overrides),
            transport=httpx.MockTransport(recording_handler),
        )
        recorder = SleepRecorder()
        service._sleep = recorder
        return service, recorder, requests

    return factory


def request_query(request: httpx.Request) -> str:
    return json.loads(request.content)["query"]
