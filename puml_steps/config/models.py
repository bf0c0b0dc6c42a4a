"""Typed dataclasses describing step-deck project configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

SUPPORTED_IMAGE_FORMATS = ("svg", "png")


class ProjectConfigError(ValueError):
    """Raised when the project configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class RendererConfig:
    """How the external PlantUML renderer is invoked."""

    command: list[str] = dc.field(default_factory=lambda: ["plantuml"])
    image_format: str = "svg"
    timeout: float = 60.0
    enabled: bool = True


@dc.dataclass(slots=True)
class DeckConfig:
    """A fully resolved deck definition sourced from YAML config.

    Attributes
    ----------
    key : str
        Identifier of the deck; also the name of its output sub-directory.
    label : str
        Human-friendly title used by the viewer pages.
    source : Path
        PlantUML file annotated with ``@step`` markers.
    output_dir : Path
        Directory receiving the generated step files and viewer.
    style_path : Path or None
        Optional PlantUML snippet prepended to every step diagram.
    renderer : RendererConfig
        Renderer settings for this deck.
    pygments_style : str
        Pygments style used for the source panel of the viewer.
    """

    key: str
    label: str
    source: Path
    output_dir: Path
    style_path: Path | None
    renderer: RendererConfig
    pygments_style: str = "monokai"


@dc.dataclass(slots=True)
class ProjectConfig:
    """Collection of deck configs alongside shared defaults."""

    decks: dict[str, DeckConfig]
    output_dir: Path = Path("public")
    site_name: str = "Step Decks"
    default_deck: str | None = None

    @property
    def index_output(self) -> Path:
        """Return the path of the root viewer listing every deck."""
        return self.output_dir / "index.html"

    def get_deck(self, deck_id: str | None) -> DeckConfig:
        """Return the requested deck or fall back to the configured default."""
        if deck_id is None:
            return self._get_default_deck()
        try:
            return self.decks[deck_id]
        except KeyError as exc:
            available = ", ".join(sorted(self.decks))
            msg = f"Unknown deck '{deck_id}'. Known decks: {available}"
            raise KeyError(msg) from exc

    def _get_default_deck(self) -> DeckConfig:
        if self.default_deck and self.default_deck in self.decks:
            return self.decks[self.default_deck]
        if not self.decks:  # pragma: no cover - configuration error
            msg = "No decks configured."
            raise ProjectConfigError(msg)
        first_key = next(iter(self.decks))
        return self.decks[first_key]


__all__ = [
    "SUPPORTED_IMAGE_FORMATS",
    "DeckConfig",
    "ProjectConfig",
    "ProjectConfigError",
    "RendererConfig",
]
