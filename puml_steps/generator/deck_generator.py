"""High-level orchestration for step deck generation.

This module coordinates parsing an annotated PlantUML source into step
snapshots, writing one standalone ``.puml`` diagram per step (plus a summary
flow diagram), optionally rendering each diagram with PlantUML, and emitting
the themed HTML viewer that pages through the rendered steps. It exposes
:class:`StepDeckGenerator`, which consumes a
:class:`~puml_steps.config.DeckConfig`.

Example
-------
>>> from pathlib import Path
>>> from puml_steps.config import load_project_config
>>> from puml_steps.generator import StepDeckGenerator
>>> config = load_project_config(Path("config/steps.yaml"))  # doctest: +SKIP
>>> deck = config.get_deck("login-flow")  # doctest: +SKIP
>>> StepDeckGenerator(deck).run()  # doctest: +SKIP
[PosixPath('public/login-flow/step-01-user-login.puml'), ...]
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from puml_steps._constants import (
    DECK_META_TEMPLATE,
    PUML_POSTAMBLE,
    PUML_PREAMBLE,
    STEP_FILE_TEMPLATE,
    SUMMARY_STEM,
    VIEWER_FILENAME,
)
from puml_steps.generator.models import GeneratedStep
from puml_steps.generator.plantuml import PlantUmlRenderer
from puml_steps.generator.renderer import HtmlContentRenderer
from puml_steps.parser import parse_file

if typ.TYPE_CHECKING:
    from puml_steps.config import DeckConfig
    from puml_steps.parser import Step

logger = logging.getLogger(__name__)

STYLE_BOUNDARY_PATTERN = re.compile(r"@startuml\s*|@enduml\s*")
NOTES_KEY = "notes"


class StepDeckGenerator:
    """Parse one annotated diagram and emit per-step diagrams plus a viewer."""

    def __init__(
        self,
        deck_config: DeckConfig,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
        renderer: PlantUmlRenderer | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        deck_config : DeckConfig
            Deck configuration describing the source, style, and renderer.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        output_dir : Path, optional
            Override for the deck output directory.
        renderer : PlantUmlRenderer, optional
            Diagram renderer; built from ``deck_config.renderer`` when omitted.
        """
        self.deck = deck_config
        self.output_dir = output_dir or deck_config.output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.html = HtmlContentRenderer(deck_config.pygments_style)
        self.renderer = renderer or PlantUmlRenderer(deck_config.renderer)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("step_viewer.jinja")

    @property
    def render_images(self) -> bool:
        """Return ``True`` when diagrams should be rendered to images."""
        return self.deck.renderer.enabled

    def run(self) -> list[Path]:
        """Write every step diagram, the summary, and the viewer to disk.

        Returns
        -------
        list[Path]
            Paths to the generated files: per-step diagrams (and images), the
            summary diagram (and image), then the viewer page.

        Raises
        ------
        FileNotFoundError
            If the deck source file does not exist.
        DiagramRenderError
            If rendering is enabled and PlantUML fails.
        """
        steps = parse_file(self.deck.source)
        logger.info("Parsed %d step(s) from %s", len(steps), self.deck.source)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        style = self._load_style()
        written: list[Path] = []
        generated: list[GeneratedStep] = []
        for number, step in enumerate(steps, start=1):
            slug = _slugify(step.name)
            stem = STEP_FILE_TEMPLATE.format(number=number, slug=slug)
            puml_path = self.output_dir / f"{stem}.puml"
            source = build_step_document(step, style=style)
            puml_path.write_text(source, encoding="utf-8")
            written.append(puml_path)

            image_path = self._render(puml_path)
            if image_path is not None:
                written.append(image_path)

            generated.append(
                GeneratedStep(
                    number=number,
                    name=step.name,
                    slug=slug,
                    new_page=step.new_page,
                    puml_path=puml_path,
                    image_path=image_path,
                    notes_html=self._render_notes(step),
                    source_html=self.html.code_block(source, "plantuml"),
                )
            )

        summary_path = self.output_dir / f"{SUMMARY_STEM}.puml"
        summary_path.write_text(
            build_summary_document(steps, title=self.deck.source.name),
            encoding="utf-8",
        )
        written.append(summary_path)
        summary_image = self._render(summary_path)
        if summary_image is not None:
            written.append(summary_image)

        viewer_path = self._write_viewer(generated, summary_image)
        written.append(viewer_path)
        self._write_metadata(len(generated))
        return written

    def _render(self, puml_path: Path) -> Path | None:
        if not self.render_images:
            return None
        return self.renderer.render(puml_path)

    def _load_style(self) -> str:
        """Return the shared style snippet without its own diagram boundaries."""
        style_path = self.deck.style_path
        if style_path is None:
            return ""
        if not style_path.exists():
            logger.warning("Style file %s not found; continuing without it", style_path)
            return ""
        text = style_path.read_text(encoding="utf-8")
        return STYLE_BOUNDARY_PATTERN.sub("", text).strip()

    def _render_notes(self, step: Step) -> str:
        notes = step.metadata.get(NOTES_KEY)
        if not isinstance(notes, str):
            return ""
        return self.html.markdown(notes)

    def _write_viewer(
        self, generated: list[GeneratedStep], summary_image: Path | None
    ) -> Path:
        context = {
            "deck": self.deck,
            "steps": generated,
            "slides": group_slides(generated),
            "summary_image": summary_image.name if summary_image else None,
            "pygments_css": self.html.stylesheet,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        viewer_path = self.output_dir / VIEWER_FILENAME
        viewer_path.write_text(html, encoding="utf-8")
        return viewer_path

    def _metadata_path(self) -> Path:
        """Return the path to the metadata JSON file for this deck."""
        return self.output_dir / DECK_META_TEMPLATE.format(key=self.deck.key)

    def _write_metadata(self, step_count: int) -> None:
        """Persist the metadata JSON read by the deck index."""
        metadata = {
            "label": self.deck.label,
            "viewer": VIEWER_FILENAME,
            "steps": step_count,
        }
        path = self._metadata_path()
        try:
            path.write_text(json.dumps(metadata), encoding="utf-8")
        except OSError:  # pragma: no cover - IO issues
            logger.warning("Unable to write deck metadata to %s", path)


def build_step_document(step: Step, *, style: str = "") -> str:
    """Return the standalone PlantUML document for ``step``.

    The document wraps the step body between ``@startuml``/``@enduml`` and
    prefixes the optional shared style and a ``title`` line.
    """
    parts = [PUML_PREAMBLE]
    if style:
        parts.append(style)
    parts.append(f"title {step.name}")
    parts.append("")
    head = "\n".join(parts) + "\n"
    return f"{head}{step.body}{PUML_POSTAMBLE}\n"


def build_summary_document(steps: typ.Sequence[Step], *, title: str) -> str:
    """Return a PlantUML flow diagram linking every step in order."""
    lines = [
        PUML_PREAMBLE,
        "!theme plain",
        f"title {title} - Step Flow",
        "skinparam monochrome true",
        "skinparam shadowing false",
        "skinparam defaultFontName Arial",
        "skinparam defaultFontSize 12",
        "",
    ]
    for idx, step in enumerate(steps, start=1):
        label = step.name.replace('"', "'")
        lines.append(f'rectangle "{label}" as step{idx}')
    lines.extend(f"step{idx} --> step{idx + 1}" for idx in range(1, len(steps)))
    lines.append(PUML_POSTAMBLE)
    return "\n".join(lines) + "\n"


def group_slides(steps: typ.Sequence[GeneratedStep]) -> list[list[GeneratedStep]]:
    """Group steps into slides; a ``new_page`` step always opens a new slide."""
    slides: list[list[GeneratedStep]] = []
    for step in steps:
        if step.new_page or not slides:
            slides.append([])
        slides[-1].append(step)
    return slides


def _slugify(value: str) -> str:
    """Convert a step name into a lowercase hyphen-separated slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "step"


__all__ = [
    "StepDeckGenerator",
    "build_step_document",
    "build_summary_document",
    "group_slides",
]
