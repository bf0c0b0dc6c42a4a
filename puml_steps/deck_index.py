"""Build and render the landing page listing every generated step deck.

This module takes a fully resolved :class:`~puml_steps.config.ProjectConfig`
and produces ``public/index.html`` (under the configured output directory)
linking to each deck's viewer. Decks are discovered through the metadata JSON
that :class:`~puml_steps.generator.StepDeckGenerator` writes next to each
viewer, so decks that were never generated are left out.

>>> from pathlib import Path
>>> from puml_steps.config import load_project_config
>>> from puml_steps.deck_index import DeckIndexBuilder
>>> project = load_project_config(Path("config/steps.yaml"))  # doctest: +SKIP
>>> DeckIndexBuilder(project).run()  # doctest: +SKIP
PosixPath('public/index.html')
"""

from __future__ import annotations

import datetime as dt
import json
import os
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import DECK_META_TEMPLATE

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from .config import DeckConfig, ProjectConfig


class DeckIndexBuilder:
    """Render a landing page enumerating generated step decks."""

    def __init__(
        self, project_config: ProjectConfig, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the deck index builder.

        Parameters
        ----------
        project_config : ProjectConfig
            Parsed project configuration containing all deck definitions.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to the
            ``puml_steps/templates`` directory when ``None``.
        """
        self.project = project_config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("deck_index.jinja")

    def run(self) -> Path:
        """Render the index HTML file to the configured output path."""
        output_path = self.project.index_output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {
            "site_name": self.project.site_name,
            "entries": self._gather_entries(output_path.parent),
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        output_path.write_text(html, encoding="utf-8")
        return output_path

    def _gather_entries(self, relative_to: Path) -> list[dict[str, typ.Any]]:
        """Collect one entry per deck that has been generated."""
        entries: list[dict[str, typ.Any]] = []
        for deck in self.project.decks.values():
            metadata = _read_deck_metadata(deck)
            if metadata is None:
                continue
            viewer = deck.output_dir / metadata.get("viewer", "index.html")
            entries.append(
                {
                    "key": deck.key,
                    "label": metadata.get("label") or deck.label,
                    "href": _relativize(viewer, relative_to),
                    "steps": metadata.get("steps", 0),
                }
            )
        return entries


def _read_deck_metadata(deck: DeckConfig) -> dict[str, typ.Any] | None:
    """Return the metadata recorded for ``deck`` or ``None`` when absent."""
    meta_path = deck.output_dir / DECK_META_TEMPLATE.format(key=deck.key)
    if not meta_path.exists():
        return None
    try:
        payload = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):  # pragma: no cover - IO guard
        return None
    return payload if isinstance(payload, dict) else None


def _relativize(target: Path, relative_to: Path) -> str:
    """Return the POSIX-relative path from ``relative_to`` to ``target``."""
    try:
        # os.path.relpath handles targets outside ``relative_to``.
        rel_path = Path(os.path.relpath(target, start=relative_to))
    except ValueError:  # pragma: no cover - different drives
        return target.as_posix()
    return rel_path.as_posix()


__all__ = ["DeckIndexBuilder"]
