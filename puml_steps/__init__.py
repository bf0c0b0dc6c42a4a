"""Turn ``@step``-annotated PlantUML diagrams into progressive step decks.

This package exposes the CLI entry points used by the ``steps`` console script
along with the parser that splits a diagram into cumulative, independently
renderable step snapshots.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``parse_steps``: Parse an iterable of source lines into ``Step`` records.

Examples
--------
>>> from puml_steps import parse_steps
>>> [step.name for step in parse_steps(["actor User", "User -> User: hi"])]
['Default Step']
"""

from __future__ import annotations

from .cli import app, main
from .parser import Step, StepMetadata, parse_file, parse_steps, parse_text

__all__ = [
    "Step",
    "StepMetadata",
    "app",
    "main",
    "parse_file",
    "parse_steps",
    "parse_text",
]
