"""Parse ``@step``-annotated PlantUML sources into cumulative snapshots."""

from .accumulator import (
    AccumulatorState,
    AccumulatorStateError,
    StepAccumulator,
    parse_file,
    parse_steps,
    parse_text,
)
from .declarations import LineKind, classify_line, is_declaration
from .markers import StepMarkerError, extract_payload, is_step_marker
from .metadata import decode_metadata
from .models import (
    DEFAULT_STEP_NAME,
    UNNAMED_STEP_NAME,
    MetadataValue,
    Step,
    StepMetadata,
)

__all__ = [
    "DEFAULT_STEP_NAME",
    "UNNAMED_STEP_NAME",
    "AccumulatorState",
    "AccumulatorStateError",
    "LineKind",
    "MetadataValue",
    "Step",
    "StepAccumulator",
    "StepMarkerError",
    "StepMetadata",
    "classify_line",
    "decode_metadata",
    "extract_payload",
    "is_declaration",
    "is_step_marker",
    "parse_file",
    "parse_steps",
    "parse_text",
]
