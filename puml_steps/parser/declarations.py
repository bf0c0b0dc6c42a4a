"""Classify PlantUML source lines as declarations, content, or noise."""

from __future__ import annotations

import enum
import re

# Covers bare names as well as ``actor "Display Name" as Alias`` forms.
DECLARATION_PATTERN = re.compile(
    r"^\s*(?:participant|actor|!include)\s+.*$", re.IGNORECASE
)
BOUNDARY_PATTERN = re.compile(r"^\s*(?:@startuml\b.*|@enduml\s*)$")


class LineKind(enum.Enum):
    """Category assigned to a non-marker source line."""

    DECLARATION = "declaration"
    CONTENT = "content"
    BLANK = "blank"
    BOUNDARY = "boundary"


def is_declaration(line: str) -> bool:
    """Return ``True`` for ``participant``, ``actor`` and ``!include`` lines."""
    return DECLARATION_PATTERN.match(line) is not None


def is_document_boundary(line: str) -> bool:
    """Return ``True`` for ``@startuml``/``@enduml`` lines.

    The wrapper that renders a step supplies its own boundaries, so these are
    never stored in a step.
    """
    return BOUNDARY_PATTERN.match(line) is not None


def classify_line(line: str) -> LineKind:
    """Return the :class:`LineKind` of ``line``; declarations take precedence."""
    if is_declaration(line):
        return LineKind.DECLARATION
    if not line.strip():
        return LineKind.BLANK
    if is_document_boundary(line):
        return LineKind.BOUNDARY
    return LineKind.CONTENT


__all__ = [
    "DECLARATION_PATTERN",
    "LineKind",
    "classify_line",
    "is_declaration",
    "is_document_boundary",
]
