r"""Turn an annotated PlantUML source into cumulative step snapshots.

The :class:`StepAccumulator` consumes a document one line at a time. Every
``' @step {...}`` marker seals the step that is currently open and starts a
new one. Each new step receives every declaration seen so far in the document
and, unless its marker sets ``"newPage": true``, the full content of the step
immediately before it, so consecutive slides build on each other.

Transitions
-----------
============  ===========  ================================================
State         Input        Effect
============  ===========  ================================================
NO_STEP_YET   marker       open first step -> IN_STEP
NO_STEP_YET   declaration  record globally
NO_STEP_YET   content      buffer until the end of the document
IN_STEP       marker       seal open step, open next step
IN_STEP       declaration  record globally and in the open step
IN_STEP       content      append to the open step
any           blank        discard
any           boundary     discard (``@startuml``/``@enduml``)
any           finish()     seal or synthesise the default step -> DONE
============  ===========  ================================================

Example
-------
>>> from puml_steps.parser import parse_text
>>> steps = parse_text(
...     "actor User\n"
...     "' @step {\"name\": \"A\"}\n"
...     "User -> User: hi\n"
...     "' @step {\"name\": \"B\"}\n"
...     "User -> User: bye\n"
... )
>>> [step.name for step in steps]
['A', 'B']
>>> steps[1].content
('User -> User: hi', 'User -> User: bye')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .declarations import LineKind, classify_line, is_declaration
from .markers import extract_payload, is_step_marker
from .metadata import decode_metadata
from .models import DEFAULT_STEP_NAME, Step, StepMetadata

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class AccumulatorState(enum.Enum):
    """Lifecycle of a single :class:`StepAccumulator`."""

    NO_STEP_YET = "no_step_yet"
    IN_STEP = "in_step"
    DONE = "done"


class AccumulatorStateError(RuntimeError):
    """Raised when lines are fed to an accumulator that has already finished."""


@dc.dataclass(slots=True)
class _StepDraft:
    """Mutable step under construction; sealed into a :class:`Step`."""

    metadata: StepMetadata
    declarations: list[str] = dc.field(default_factory=list)
    content: list[str] = dc.field(default_factory=list)

    def seal(self) -> Step:
        return Step(
            metadata_record=self.metadata,
            declarations=tuple(self.declarations),
            content=tuple(self.content),
        )


class StepAccumulator:
    """Stateful builder that produces :class:`Step` snapshots for one document."""

    def __init__(self) -> None:
        """Start in :attr:`AccumulatorState.NO_STEP_YET` with empty state."""
        self.state = AccumulatorState.NO_STEP_YET
        self._sealed: list[Step] = []
        self._global_declarations: list[str] = []
        self._buffered: list[str] = []
        self._current: _StepDraft | None = None
        self._seen_marker = False

    def feed(self, line: str) -> None:
        """Classify ``line`` and update the parse state accordingly.

        Raises
        ------
        AccumulatorStateError
            If :meth:`finish` has already been called.
        """
        if self.state is AccumulatorState.DONE:
            msg = "Cannot feed lines after the document has been finished."
            raise AccumulatorStateError(msg)

        if is_step_marker(line):
            self._begin_step(decode_metadata(extract_payload(line)))
            return

        match classify_line(line):
            case LineKind.DECLARATION:
                self._global_declarations.append(line)
                if self._current is not None:
                    self._current.declarations.append(line)
            case LineKind.CONTENT:
                if self._current is not None:
                    self._current.content.append(line)
                else:
                    self._buffered.append(line)
            case LineKind.BLANK | LineKind.BOUNDARY:
                pass

    def finish(self) -> list[Step]:
        """Seal the open step and return every step in document order.

        A document without any marker yields a single ``"Default Step"``
        holding every declaration and every buffered content line.
        """
        if self.state is AccumulatorState.DONE:
            msg = "The document has already been finished."
            raise AccumulatorStateError(msg)

        if self._current is not None:
            self._sealed.append(self._current.seal())
            self._current = None

        if not self._seen_marker:
            self._sealed = [self._default_step()]

        self.state = AccumulatorState.DONE
        return list(self._sealed)

    def _begin_step(self, metadata: StepMetadata) -> None:
        if self._current is not None:
            self._sealed.append(self._current.seal())

        draft = _StepDraft(metadata=metadata)
        draft.declarations.extend(self._global_declarations)
        if not metadata.new_page and self._sealed:
            draft.content.extend(self._sealed[-1].content)

        self._current = draft
        self._seen_marker = True
        self.state = AccumulatorState.IN_STEP

    def _default_step(self) -> Step:
        draft = _StepDraft(metadata=StepMetadata(name=DEFAULT_STEP_NAME))
        draft.declarations.extend(self._global_declarations)
        # Declarations never reach the buffer, but the buffer is re-checked so
        # the partition always follows the declaration classifier.
        for line in self._buffered:
            if is_declaration(line):
                draft.declarations.append(line)
            else:
                draft.content.append(line)
        return draft.seal()


def parse_steps(lines: cabc.Iterable[str]) -> list[Step]:
    """Parse a forward-only sequence of source lines into steps.

    Parameters
    ----------
    lines : Iterable[str]
        Source lines; trailing ``\\n``/``\\r\\n`` terminators are stripped.

    Returns
    -------
    list[Step]
        One step per marker in document order, or a single default step when
        the document contains no markers.
    """
    accumulator = StepAccumulator()
    for line in lines:
        accumulator.feed(line.rstrip("\r\n"))
    return accumulator.finish()


def parse_text(text: str) -> list[Step]:
    """Parse an in-memory PlantUML document into steps."""
    return parse_steps(text.splitlines())


def parse_file(path: Path) -> list[Step]:
    """Parse the PlantUML file at ``path`` into steps.

    I/O errors raised while opening or reading the file propagate unchanged.
    """
    with path.open("r", encoding="utf-8") as handle:
        return parse_steps(handle)


__all__ = [
    "AccumulatorState",
    "AccumulatorStateError",
    "StepAccumulator",
    "parse_file",
    "parse_steps",
    "parse_text",
]
