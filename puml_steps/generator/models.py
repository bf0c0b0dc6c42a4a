"""Shared dataclasses used by the step deck generation pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


@dc.dataclass(slots=True)
class GeneratedStep:
    """Structured data passed to the step viewer template.

    Attributes
    ----------
    number : int
        1-based position of the step within the deck.
    name : str
        Display name taken from the step marker.
    slug : str
        URL-safe identifier derived from ``name``.
    new_page : bool
        Whether the step starts from an empty canvas.
    puml_path : Path
        Generated PlantUML file for this step.
    image_path : Path or None
        Rendered diagram, or ``None`` when rendering is disabled.
    notes_html : str
        Rendered HTML for the optional ``notes`` marker attribute.
    source_html : str
        Highlighted HTML of the generated PlantUML source.
    """

    number: int
    name: str
    slug: str
    new_page: bool
    puml_path: Path
    image_path: Path | None = None
    notes_html: str = ""
    source_html: str = ""


__all__ = ["GeneratedStep"]
