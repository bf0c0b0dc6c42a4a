"""Load project configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_renderer_config,
    _merge_renderer,
    _optional_str,
    _resolve_path,
)
from .models import DeckConfig, ProjectConfig, ProjectConfigError, RendererConfig


def load_project_config(path: Path) -> ProjectConfig:
    """Load the YAML configuration describing the decks to generate.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/steps.yaml``). Relative paths inside the file are resolved
        against the file's directory.

    Returns
    -------
    ProjectConfig
        Parsed configuration with every deck fully resolved.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ProjectConfigError
        If no decks are defined, a deck entry is malformed or has no
        ``source``, or a renderer setting is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_project_config(Path("config/steps.yaml"))  # doctest: +SKIP
    >>> sorted(config.decks)[:1]  # doctest: +SKIP
    ['login-flow']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    base_dir = path.parent

    output_dir = _resolve_path(defaults.get("output_dir"), base_dir) or (
        base_dir / "public"
    )
    deck_defaults = _DeckDefaults(
        output_dir=output_dir,
        style_path=_resolve_path(defaults.get("style_path"), base_dir),
        renderer=_build_renderer_config(defaults),
        pygments_style=defaults.get("pygments_style", "monokai"),
    )

    decks_raw = raw.get("decks") or {}
    if not isinstance(decks_raw, dict):
        msg = "'decks' must be a mapping of deck keys to deck entries."
        raise ProjectConfigError(msg)

    decks: dict[str, DeckConfig] = {}
    for key, payload in decks_raw.items():
        match payload:
            case dict():
                decks[str(key)] = _build_deck_config(
                    key=str(key),
                    payload=payload,
                    defaults=deck_defaults,
                    base_dir=base_dir,
                )
            case str():
                decks[str(key)] = _build_deck_config(
                    key=str(key),
                    payload={"source": payload},
                    defaults=deck_defaults,
                    base_dir=base_dir,
                )
            case _:
                msg = f"Deck '{key}' must be a mapping or a source path."
                raise ProjectConfigError(msg)

    if not decks:
        msg = "No decks defined in project configuration."
        raise ProjectConfigError(msg)

    return ProjectConfig(
        decks=decks,
        output_dir=output_dir,
        site_name=defaults.get("site_name", "Step Decks"),
        default_deck=_optional_str(defaults.get("default_deck")),
    )


@dc.dataclass(slots=True)
class _DeckDefaults:
    """Internal container for deck default configuration values."""

    output_dir: Path
    style_path: Path | None
    renderer: RendererConfig
    pygments_style: str


def _build_deck_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _DeckDefaults,
    base_dir: Path,
) -> DeckConfig:
    """Build a DeckConfig for a single deck entry using defaults and overrides."""
    source = _resolve_path(payload.get("source"), base_dir)
    if source is None:
        msg = f"Deck '{key}' is missing 'source'."
        raise ProjectConfigError(msg)

    label = _optional_str(payload.get("label")) or key.replace("-", " ").title()
    output_dir = _resolve_path(payload.get("output_dir"), base_dir) or (
        defaults.output_dir / key
    )
    style_path = defaults.style_path
    if "style_path" in payload:
        style_path = _resolve_path(payload.get("style_path"), base_dir)

    return DeckConfig(
        key=key,
        label=label,
        source=source,
        output_dir=output_dir,
        style_path=style_path,
        renderer=_merge_renderer(defaults.renderer, payload),
        pygments_style=payload.get("pygments_style", defaults.pygments_style),
    )


__all__ = ["load_project_config"]
