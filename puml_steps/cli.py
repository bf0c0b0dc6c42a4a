"""Cyclopts CLI entrypoint for turning annotated PlantUML files into step decks.

The ``steps`` console script defined here can summarise the steps found in a
single PlantUML source, generate every deck listed in ``steps.yaml``
(per-step diagrams, rendered images, and HTML viewers), or build a deck for an
ad-hoc file without any configuration.

Examples
--------
Inspect the steps of a diagram:

>>> from puml_steps.cli import app
>>> app(["parse", "diagrams/login-flow.puml"])  # doctest: +SKIP

Generate every configured deck without invoking PlantUML:

>>> app(["generate", "--no-images"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from ._constants import PUML_POSTAMBLE, PUML_PREAMBLE
from .config import DeckConfig, RendererConfig, load_project_config
from .deck_index import DeckIndexBuilder
from .generator import StepDeckGenerator
from .parser import parse_file

DEFAULT_CONFIG = Path("config/steps.yaml")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app = App(name="steps", config=cyclopts.config.Env("PUML_STEPS_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    """Attach a root handler unless the embedding application already did."""
    level = logging.DEBUG if verbose else logging.INFO
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        logging.getLogger().setLevel(level)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Summarise the steps found in an annotated PlantUML file.")
def parse(
    source: Path,
    /,
    *,
    json: typ.Annotated[
        bool, Parameter(help="Emit the steps as a JSON array")
    ] = False,
    verbose: bool = False,
) -> None:
    """Print every step parsed from ``source``.

    Parameters
    ----------
    source : Path
        PlantUML file containing ``' @step {...}`` markers.
    json : bool, optional
        When ``True`` print a JSON array (name, newPage, metadata,
        declarations, content) instead of the human-readable summary.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    FileNotFoundError
        If ``source`` does not exist.
    """
    _configure_logging(verbose)
    steps = parse_file(source)
    if json:
        payload = [
            {
                "name": step.name,
                "newPage": step.new_page,
                "metadata": dict(step.metadata),
                "declarations": list(step.declarations),
                "content": list(step.content),
            }
            for step in steps
        ]
        print(msgspec_json.encode(payload).decode("utf-8"))
        return

    print(f"Found {len(steps)} steps in {source.name}")
    for number, step in enumerate(steps, start=1):
        print(f"\nStep {number}: {step.name}")
        print(f"New Page: {str(step.new_page).lower()}")
        print(f"Declarations: {len(step.declarations)}")
        print(f"Content Lines: {len(step.content)}")
        print("\nPlantUML Content:")
        print(PUML_PREAMBLE)
        print(step.body, end="")
        print(PUML_POSTAMBLE)
        print("--------------------")


@app.command(help="Generate step diagrams and viewers for configured decks.")
def generate(
    *,
    deck: typ.Annotated[
        str | None, Parameter(help="Deck identifier", env_var="PUML_STEPS_DECK")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to project config", env_var="PUML_STEPS_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the deck output folder"),
    ] = None,
    images: typ.Annotated[
        bool, Parameter(help="Render diagrams with PlantUML")
    ] = True,
    verbose: bool = False,
) -> None:
    """Generate decks for the requested project configuration.

    Parameters
    ----------
    deck : str or None, optional
        Specific deck key to generate; when ``None`` (default) all decks are
        generated.
    config : Path, optional
        Path to the ``steps.yaml`` configuration file.
    output_dir : Path or None, optional
        Override the output directory for single-deck generation.
    images : bool, optional
        When ``False`` only ``.puml`` files and viewers are written.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    ValueError
        If ``output_dir`` is supplied while generating more than one deck.
    """
    _configure_logging(verbose)
    project = load_project_config(config)

    if deck:
        target_decks = [project.get_deck(deck)]
    else:
        target_decks = list(project.decks.values())

    if len(target_decks) > 1 and output_dir:
        msg = "Cannot override output_dir when generating multiple decks."
        raise ValueError(msg)

    for deck_config in target_decks:
        if not images:
            deck_config.renderer.enabled = False
        if output_dir:
            # The index discovers decks through their output_dir.
            deck_config = dc.replace(deck_config, output_dir=output_dir)
            project.decks[deck_config.key] = deck_config
        generator = StepDeckGenerator(deck_config)
        for path in generator.run():
            print(f"wrote {_format_path(path)}")
    index_path = DeckIndexBuilder(project).run()
    print(f"wrote {_format_path(index_path)}")


@app.command(help="Generate a deck for a single PlantUML file without a config.")
def render(
    source: Path,
    /,
    *,
    output_dir: typ.Annotated[
        Path, Parameter(help="Folder receiving the generated deck")
    ],
    style: typ.Annotated[
        Path | None, Parameter(help="Shared PlantUML style snippet")
    ] = None,
    plantuml: typ.Annotated[
        str, Parameter(help="PlantUML command", env_var="PUML_STEPS_PLANTUML")
    ] = "plantuml",
    image_format: typ.Annotated[
        typ.Literal["svg", "png"], Parameter(help="Rendered image format")
    ] = "svg",
    images: typ.Annotated[
        bool, Parameter(help="Render diagrams with PlantUML")
    ] = True,
    verbose: bool = False,
) -> None:
    """Generate step diagrams and a viewer for ``source`` into ``output_dir``."""
    _configure_logging(verbose)
    deck_config = DeckConfig(
        key=source.stem,
        label=source.stem.replace("-", " ").replace("_", " ").title(),
        source=source,
        output_dir=output_dir,
        style_path=style,
        renderer=RendererConfig(
            command=plantuml.split(), image_format=image_format, enabled=images
        ),
    )
    for path in StepDeckGenerator(deck_config).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``steps`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
