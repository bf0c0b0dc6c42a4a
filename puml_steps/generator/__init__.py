"""Utilities for writing, rendering, and viewing per-step PlantUML diagrams."""

from .deck_generator import (
    StepDeckGenerator,
    build_step_document,
    build_summary_document,
    group_slides,
)
from .models import GeneratedStep
from .plantuml import DiagramRenderError, PlantUmlRenderer
from .renderer import HtmlContentRenderer

__all__ = [
    "DiagramRenderError",
    "GeneratedStep",
    "HtmlContentRenderer",
    "PlantUmlRenderer",
    "StepDeckGenerator",
    "build_step_document",
    "build_summary_document",
    "group_slides",
]
