"""Shared fixtures for step deck tests."""

from __future__ import annotations

import subprocess
import typing as typ
from pathlib import Path

import pytest

from puml_steps.config import DeckConfig, RendererConfig
from puml_steps.generator import plantuml

LOGIN_FLOW = """\
@startuml
actor User
participant System

' @step {"name": "Step 1: User Login", "newPage": false, "notes": "User opens the **login** form."}
User -> System: Login Request
System --> User: Login Form

' @step {"name": "Step 2: Authentication", "newPage": false}
User -> System: Submit Credentials
System --> User: Authentication Result

' @step {"name": "Step 3: Dashboard", "newPage": true}
User -> System: View Dashboard
System --> User: Dashboard Data
@enduml
"""


@pytest.fixture
def login_flow_source(tmp_path: Path) -> Path:
    """Write the three-step login flow diagram and return its path."""
    path = tmp_path / "login-flow.puml"
    path.write_text(LOGIN_FLOW, encoding="utf-8")
    return path


@pytest.fixture
def deck_config(tmp_path: Path, login_flow_source: Path) -> DeckConfig:
    """Build a deck configuration rooted in a per-test output directory."""
    style = tmp_path / "style.puml"
    style.write_text("@startuml\nskinparam monochrome true\n@enduml\n", encoding="utf-8")
    return DeckConfig(
        key="login-flow",
        label="Login Flow",
        source=login_flow_source,
        output_dir=tmp_path / "public" / "login-flow",
        style_path=style,
        renderer=RendererConfig(command=["plantuml"], image_format="svg"),
    )


@pytest.fixture
def fake_plantuml(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Replace the PlantUML subprocess with a stub that writes placeholder images.

    Returns the list of recorded command lines.
    """
    calls: list[list[str]] = []

    def _fake_run(
        args: list[str], **kwargs: typ.Any
    ) -> subprocess.CompletedProcess[str]:
        calls.append(list(args))
        image_format = next(arg[2:] for arg in args if arg.startswith("-t"))
        source = Path(args[-1])
        source.with_suffix(f".{image_format}").write_text("<svg/>", encoding="utf-8")
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    monkeypatch.setattr(plantuml.subprocess, "run", _fake_run)
    return calls
