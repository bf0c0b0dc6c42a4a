r"""Detect ``' @step {...}`` marker comments in PlantUML sources.

A step marker is an ordinary PlantUML comment whose body starts with the
``@step`` token followed by a JSON object describing the step:

>>> from puml_steps.parser.markers import extract_payload, is_step_marker
>>> line = "' @step {\"name\": \"Login\", \"newPage\": false}"
>>> is_step_marker(line)
True
>>> extract_payload(line)
'{"name": "Login", "newPage": false}'
>>> is_step_marker("User -> System: hi")
False
"""

from __future__ import annotations

import re

STEP_MARKER_PATTERN = re.compile(r"^\s*'\s*@step\s+(\{.*\})")


class StepMarkerError(ValueError):
    """Raised when a payload is requested from a line that is not a marker."""


def is_step_marker(line: str) -> bool:
    """Return ``True`` when ``line`` is a step marker comment."""
    return STEP_MARKER_PATTERN.search(line) is not None


def extract_payload(line: str) -> str:
    """Return the brace-delimited payload carried by a marker line.

    Parameters
    ----------
    line : str
        Source line previously accepted by :func:`is_step_marker`.

    Returns
    -------
    str
        Raw payload text including the enclosing braces.

    Raises
    ------
    StepMarkerError
        If ``line`` does not contain a step marker. Callers are expected to
        check :func:`is_step_marker` first.
    """
    match = STEP_MARKER_PATTERN.search(line)
    if match is None:
        msg = f"Line does not contain a step marker: {line!r}"
        raise StepMarkerError(msg)
    return match.group(1)


__all__ = [
    "STEP_MARKER_PATTERN",
    "StepMarkerError",
    "extract_payload",
    "is_step_marker",
]
