"""Unit tests for the step snapshot accumulator.

These tests drive :func:`puml_steps.parser.parse_steps` and
:class:`puml_steps.parser.StepAccumulator` with small in-memory PlantUML
documents to pin down carry-over semantics: declarations are always carried
forward, content is carried only when ``newPage`` is false, blank and
boundary lines are dropped, and documents without markers collapse into a
single default step.

Usage
-----
Run ``pytest tests/test_step_parser.py -v``. No fixtures beyond pytest's
built-in ``tmp_path`` are required.
"""

from __future__ import annotations

import typing as typ

import pytest

from puml_steps.parser import (
    AccumulatorState,
    AccumulatorStateError,
    StepAccumulator,
    parse_file,
    parse_steps,
    parse_text,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _document(*, second_new_page: bool) -> list[str]:
    flag = "true" if second_new_page else "false"
    return [
        "actor User",
        "participant System",
        "' @step {\"name\":\"A\",\"newPage\":false}",
        "User->System: hi",
        f"' @step {{\"name\":\"B\",\"newPage\":{flag}}}",
        "System->User: bye",
    ]


def test_new_page_step_starts_from_empty_canvas() -> None:
    steps = parse_steps(_document(second_new_page=True))

    assert [step.name for step in steps] == ["A", "B"]
    assert steps[0].declarations == ("actor User", "participant System")
    assert steps[0].content == ("User->System: hi",)
    assert steps[1].new_page is True
    assert steps[1].declarations == ("actor User", "participant System")
    assert steps[1].content == ("System->User: bye",)


def test_continuation_step_carries_previous_content() -> None:
    steps = parse_steps(_document(second_new_page=False))

    assert steps[1].new_page is False
    assert steps[1].content == ("User->System: hi", "System->User: bye")


def test_carry_over_uses_only_the_immediately_preceding_step() -> None:
    steps = parse_text(
        "' @step {\"name\": \"one\"}\n"
        "a -> b: 1\n"
        "' @step {\"name\": \"two\", \"newPage\": true}\n"
        "a -> b: 2\n"
        "' @step {\"name\": \"three\"}\n"
        "a -> b: 3\n"
    )

    assert steps[2].content == ("a -> b: 2", "a -> b: 3")


def test_declaration_seen_mid_step_joins_open_and_later_steps() -> None:
    steps = parse_text(
        "actor User\n"
        "' @step {\"name\": \"one\"}\n"
        "User -> User: think\n"
        "participant Late\n"
        "' @step {\"name\": \"two\", \"newPage\": true}\n"
        "User -> Late: call\n"
    )

    assert steps[0].declarations == ("actor User", "participant Late")
    assert steps[1].declarations == ("actor User", "participant Late")
    assert steps[0].content == ("User -> User: think",)


def test_declaration_inside_step_is_recorded_once_for_that_step() -> None:
    steps = parse_text(
        "' @step {\"name\": \"one\"}\n"
        "actor User\n"
        "' @step {\"name\": \"two\"}\n"
        "actor Admin\n"
    )

    assert steps[0].declarations == ("actor User",)
    assert steps[1].declarations == ("actor User", "actor Admin")


def test_declaration_sequences_grow_monotonically() -> None:
    steps = parse_text(
        "actor A\n"
        "' @step {\"name\": \"1\"}\n"
        "participant B\n"
        "' @step {\"name\": \"2\", \"newPage\": true}\n"
        "!include common.puml\n"
        "' @step {\"name\": \"3\"}\n"
    )

    for earlier, later in zip(steps, steps[1:], strict=False):
        assert later.declarations[: len(earlier.declarations)] == earlier.declarations


def test_consecutive_markers_emit_empty_step() -> None:
    steps = parse_text(
        "' @step {\"name\": \"empty\"}\n"
        "' @step {\"name\": \"full\"}\n"
        "a -> b: msg\n"
    )

    assert [step.name for step in steps] == ["empty", "full"]
    assert steps[0].content == ()
    assert steps[1].content == ("a -> b: msg",)


def test_marker_lines_are_never_stored() -> None:
    steps = parse_text("actor A\n' @step {\"name\": \"only\"}\nA -> A: x\n")

    stored = (*steps[0].declarations, *steps[0].content)
    assert all("@step" not in line for line in stored)


def test_pre_marker_content_is_not_carried_into_first_step() -> None:
    steps = parse_text(
        "actor User\n"
        "note over User: before\n"
        "' @step {\"name\": \"first\", \"newPage\": false}\n"
        "User -> User: after\n"
    )

    assert len(steps) == 1
    assert steps[0].declarations == ("actor User",)
    assert steps[0].content == ("User -> User: after",)


def test_document_without_markers_yields_default_step() -> None:
    lines = [
        "@startuml",
        "actor User",
        "",
        "participant System",
        "User -> System: Login Request",
        "   ",
        "System --> User: Login Form",
        "@enduml",
    ]

    steps = parse_steps(lines)

    assert len(steps) == 1
    step = steps[0]
    assert step.name == "Default Step"
    assert step.new_page is False
    assert step.metadata == {}
    assert step.declarations == ("actor User", "participant System")
    assert step.content == ("User -> System: Login Request", "System --> User: Login Form")


def test_blank_and_boundary_lines_are_dropped() -> None:
    steps = parse_text(
        "@startuml\n"
        "\n"
        "' @step {\"name\": \"one\"}\n"
        "   \n"
        "a -> b: x\n"
        "@enduml\n"
    )

    assert steps[0].content == ("a -> b: x",)
    assert all(line.strip() for line in steps[0].content)


def test_malformed_marker_still_opens_step_and_parsing_continues() -> None:
    steps = parse_text(
        "' @step {not json}\n"
        "a -> b: first\n"
        "' @step {\"name\": \"next\"}\n"
        "a -> b: second\n"
    )

    assert [step.name for step in steps] == ["Unnamed Step", "next"]
    assert steps[0].new_page is False
    assert steps[0].metadata == {}
    assert steps[1].content == ("a -> b: first", "a -> b: second")


def test_body_concatenates_declarations_then_content() -> None:
    steps = parse_steps(_document(second_new_page=True))

    assert steps[0].body == "actor User\nparticipant System\nUser->System: hi\n"


def test_steps_are_immutable() -> None:
    step = parse_text("' @step {\"name\": \"x\", \"color\": \"red\"}\n")[0]

    with pytest.raises(AttributeError):
        step.content = ()  # type: ignore[misc]
    with pytest.raises(TypeError):
        step.metadata["color"] = "blue"  # type: ignore[index]


def test_line_terminators_are_stripped(tmp_path: Path) -> None:
    source = tmp_path / "crlf.puml"
    source.write_bytes(
        b"actor User\r\n' @step {\"name\": \"one\"}\r\nUser -> User: x\r\n"
    )

    steps = parse_file(source)

    assert steps[0].declarations == ("actor User",)
    assert steps[0].content == ("User -> User: x",)


def test_parse_file_propagates_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "missing.puml")


def test_accumulator_state_transitions() -> None:
    accumulator = StepAccumulator()
    assert accumulator.state is AccumulatorState.NO_STEP_YET

    accumulator.feed("actor A")
    assert accumulator.state is AccumulatorState.NO_STEP_YET

    accumulator.feed("' @step {\"name\": \"s\"}")
    assert accumulator.state is AccumulatorState.IN_STEP

    steps = accumulator.finish()
    assert accumulator.state is AccumulatorState.DONE
    assert [step.name for step in steps] == ["s"]

    with pytest.raises(AccumulatorStateError):
        accumulator.feed("A -> A: late")
    with pytest.raises(AccumulatorStateError):
        accumulator.finish()


def test_separate_parses_share_no_state() -> None:
    first = parse_text("actor A\n' @step {\"name\": \"one\"}\nA -> A: x\n")
    second = parse_text("' @step {\"name\": \"two\"}\n")

    assert first[0].declarations == ("actor A",)
    assert second[0].declarations == ()
    assert second[0].content == ()
