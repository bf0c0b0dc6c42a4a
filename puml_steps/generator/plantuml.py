"""Invoke the external PlantUML renderer for generated step diagrams."""

from __future__ import annotations

import logging
import subprocess
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from puml_steps.config import RendererConfig

logger = logging.getLogger(__name__)


class DiagramRenderError(RuntimeError):
    """Raised when PlantUML fails to render a diagram."""


class PlantUmlRenderer:
    """Render ``.puml`` files into images next to their sources."""

    def __init__(self, config: RendererConfig) -> None:
        """Store the renderer configuration (command, format, timeout)."""
        self.config = config

    @property
    def image_format(self) -> str:
        """Return the configured output image format."""
        return self.config.image_format

    def render(self, puml_path: Path) -> Path:
        """Render ``puml_path`` and return the path of the produced image.

        Raises
        ------
        DiagramRenderError
            If the PlantUML command is missing, exits with an error, times
            out, or does not produce the expected image.
        """
        image_path = puml_path.with_suffix(f".{self.image_format}")
        args = [
            *self.config.command,
            f"-t{self.image_format}",
            "-charset",
            "UTF-8",
            str(puml_path),
        ]
        logger.debug("Running %s", " ".join(args))
        try:
            subprocess.run(  # noqa: S603
                args,
                check=True,
                text=True,
                capture_output=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as exc:
            msg = f"PlantUML command not found: {self.config.command[0]}"
            raise DiagramRenderError(msg) from exc
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or exc.stdout or "").strip()
            msg = f"PlantUML failed to render {puml_path.name}: {detail}"
            raise DiagramRenderError(msg) from exc
        except subprocess.TimeoutExpired as exc:
            msg = f"PlantUML timed out after {self.config.timeout}s on {puml_path.name}"
            raise DiagramRenderError(msg) from exc

        if not image_path.exists():
            msg = f"PlantUML did not produce {image_path.name}"
            raise DiagramRenderError(msg)
        return image_path


__all__ = ["DiagramRenderError", "PlantUmlRenderer"]
