"""Load and validate project configuration YAML for step-deck builds.

This subpackage parses the project's ``steps.yaml`` file, merges global
defaults with per-deck overrides, resolves source and style paths relative to
the configuration file, and produces typed dataclasses (:class:`ProjectConfig`,
:class:`DeckConfig`, :class:`RendererConfig`) that the generators consume.

Examples
--------
>>> from pathlib import Path
>>> from puml_steps.config import load_project_config
>>> project = load_project_config(Path("config/steps.yaml"))  # doctest: +SKIP
>>> deck = project.get_deck("login-flow")  # doctest: +SKIP
>>> deck.source.name  # doctest: +SKIP
'login-flow.puml'
"""

from .loader import load_project_config
from .models import (
    SUPPORTED_IMAGE_FORMATS,
    DeckConfig,
    ProjectConfig,
    ProjectConfigError,
    RendererConfig,
)

__all__ = [
    "SUPPORTED_IMAGE_FORMATS",
    "DeckConfig",
    "ProjectConfig",
    "ProjectConfigError",
    "RendererConfig",
    "load_project_config",
]
