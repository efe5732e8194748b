"""Nation-level helpers."""

from __future__ import annotations

import re


MAX_PROJECT_POSITION = 40

DIGITS_PATTERN = re.compile(r"^[0-9]+$")


def convert_bits_to_project(project_bits: str, project_position: int) -> bool:
    """
    Check whether a nation has a project.

    The API exposes owned projects as ``project_bits``, a decimal string
    whose binary digits are one flag per project.

    Args:
        project_bits: The nation's ``project_bits`` field
        project_position: Bit index of the project, 0 to 40

    Returns:
        True if the bit at project_position is set

    Raises:
        ValueError: On an out of range position or a non-numeric bit string
    """
    if (
        isinstance(project_position, bool)
        or not isinstance(project_position, int)
        or not 0 <= project_position <= MAX_PROJECT_POSITION
    ):
        raise ValueError(
            f"project_position must be an integer between 0 and {MAX_PROJECT_POSITION}"
        )

    if not isinstance(project_bits, str) or not DIGITS_PATTERN.match(project_bits):
        raise ValueError("project_bits must be a numeric string")

    return (int(project_bits) >> project_position) & 1 == 1
