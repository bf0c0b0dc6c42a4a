"""Utility helpers shared by the project configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SUPPORTED_IMAGE_FORMATS, ProjectConfigError, RendererConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object | None, base_dir: Path) -> Path | None:
    """Resolve ``value`` against ``base_dir`` unless it is already absolute."""
    text = _optional_str(value)
    if text is None:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else base_dir / path


def _normalize_command(value: str | list[object] | None) -> list[str]:
    """Normalize a renderer command into a non-empty argument list."""
    if isinstance(value, str):
        parts = value.split()
    elif isinstance(value, list):
        parts = [str(part).strip() for part in value if str(part).strip()]
    else:
        parts = []
    if not parts:
        msg = "The PlantUML command must not be empty."
        raise ProjectConfigError(msg)
    return parts


def _normalize_image_format(value: object | None, fallback: str) -> str:
    """Return a lower-cased supported image format."""
    image_format = (_optional_str(value) or fallback).lower()
    if image_format not in SUPPORTED_IMAGE_FORMATS:
        supported = ", ".join(SUPPORTED_IMAGE_FORMATS)
        msg = f"Unsupported image format '{image_format}'. Use one of: {supported}"
        raise ProjectConfigError(msg)
    return image_format


def _coerce_render_flag(value: object | None, fallback: bool) -> bool:
    """Return the ``render`` flag; quoted ``"true"``/``"false"`` are accepted."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "false"}:
        return text == "true"
    msg = f"Invalid value for 'render': {value!r}. Use true or false."
    raise ProjectConfigError(msg)


def _build_renderer_config(payload: typ.Mapping[str, typ.Any]) -> RendererConfig:
    """Build a RendererConfig from the ``defaults`` mapping."""
    base = RendererConfig()
    return RendererConfig(
        command=_normalize_command(payload.get("plantuml_command", base.command)),
        image_format=_normalize_image_format(
            payload.get("image_format"), base.image_format
        ),
        timeout=float(payload.get("plantuml_timeout", base.timeout)),
        enabled=_coerce_render_flag(payload.get("render"), base.enabled),
    )


def _merge_renderer(
    base: RendererConfig, override: typ.Mapping[str, typ.Any]
) -> RendererConfig:
    """Merge per-deck renderer overrides into the base RendererConfig."""
    command = override.get("plantuml_command")
    return RendererConfig(
        command=_normalize_command(command) if command is not None else base.command,
        image_format=_normalize_image_format(
            override.get("image_format"), base.image_format
        ),
        timeout=float(override.get("plantuml_timeout", base.timeout)),
        enabled=_coerce_render_flag(override.get("render"), base.enabled),
    )
