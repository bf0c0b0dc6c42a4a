"""Immutable records produced by the step parser."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from types import MappingProxyType

DEFAULT_STEP_NAME = "Default Step"
UNNAMED_STEP_NAME = "Unnamed Step"

# JSON-compatible value carried in a step marker payload.
MetadataValue: typ.TypeAlias = (
    str
    | bool
    | int
    | float
    | None
    | list["MetadataValue"]
    | dict[str, "MetadataValue"]
)
MetadataAttributes: typ.TypeAlias = typ.Mapping[str, MetadataValue]


@dc.dataclass(frozen=True, slots=True)
class StepMetadata:
    """Decoded payload of a single ``@step`` marker.

    Attributes
    ----------
    name : str
        Display name of the step.
    new_page : bool
        ``True`` when the step starts from an empty canvas instead of building
        on the previous step.
    attributes : Mapping[str, MetadataValue]
        Read-only view of the full decoded payload, including ``name`` and
        ``newPage`` when they were present.
    """

    name: str = UNNAMED_STEP_NAME
    new_page: bool = False
    attributes: MetadataAttributes = dc.field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        """Freeze ``attributes`` behind a read-only proxy."""
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(
                self, "attributes", MappingProxyType(dict(self.attributes))
            )


@dc.dataclass(frozen=True, slots=True)
class Step:
    """A sealed, self-contained snapshot of the diagram at one step.

    Attributes
    ----------
    metadata_record : StepMetadata
        Metadata decoded from the marker that opened the step.
    declarations : tuple[str, ...]
        Every declaration visible in this step, in source order.
    content : tuple[str, ...]
        Non-declaration lines shown in this step, in source order.
    """

    metadata_record: StepMetadata
    declarations: tuple[str, ...] = ()
    content: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Return the display name of the step."""
        return self.metadata_record.name

    @property
    def new_page(self) -> bool:
        """Return ``True`` when the step does not carry previous content."""
        return self.metadata_record.new_page

    @property
    def metadata(self) -> MetadataAttributes:
        """Return the read-only attributes decoded from the marker."""
        return self.metadata_record.attributes

    @property
    def body(self) -> str:
        """Return declarations then content, each terminated by a newline.

        The result is a complete diagram body once wrapped in ``@startuml`` and
        ``@enduml``.
        """
        return "".join(f"{line}\n" for line in (*self.declarations, *self.content))


__all__ = [
    "DEFAULT_STEP_NAME",
    "UNNAMED_STEP_NAME",
    "MetadataAttributes",
    "MetadataValue",
    "Step",
    "StepMetadata",
]
