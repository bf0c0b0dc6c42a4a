"""Decode ``@step`` marker payloads into :class:`StepMetadata` records."""

from __future__ import annotations

import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .models import UNNAMED_STEP_NAME, MetadataValue, StepMetadata

logger = logging.getLogger(__name__)

NAME_KEY = "name"
NEW_PAGE_KEY = "newPage"


def decode_attributes(payload: str) -> dict[str, MetadataValue]:
    """Decode ``payload`` as a JSON object, returning ``{}`` when it is malformed.

    Malformed payloads are logged rather than raised so that a single bad
    marker never aborts parsing of the rest of the document.
    """
    try:
        return msgspec_json.decode(payload, type=dict[str, typ.Any])
    except msgspec.DecodeError as exc:
        logger.warning("Error parsing step metadata %r: %s", payload, exc)
        return {}


def decode_metadata(payload: str) -> StepMetadata:
    """Build a :class:`StepMetadata` from a raw marker payload.

    Parameters
    ----------
    payload : str
        Brace-delimited text extracted from a marker line.

    Returns
    -------
    StepMetadata
        Metadata whose ``name`` defaults to ``"Unnamed Step"`` and whose
        ``new_page`` defaults to ``False`` when the keys are absent or the
        payload could not be decoded.

    Examples
    --------
    >>> decode_metadata('{"name": "Login", "newPage": "TRUE"}').new_page
    True
    >>> decode_metadata("{not json}").name
    'Unnamed Step'
    """
    attributes = decode_attributes(payload)
    name = (
        _stringify(attributes[NAME_KEY])
        if NAME_KEY in attributes
        else UNNAMED_STEP_NAME
    )
    new_page = (
        NEW_PAGE_KEY in attributes
        and _stringify(attributes[NEW_PAGE_KEY]).lower() == "true"
    )
    return StepMetadata(name=name, new_page=new_page, attributes=attributes)


def _stringify(value: MetadataValue) -> str:
    """Return strings verbatim and any other value spelled as JSON."""
    if isinstance(value, str):
        return value
    return msgspec_json.encode(value).decode("utf-8")


__all__ = ["NAME_KEY", "NEW_PAGE_KEY", "decode_attributes", "decode_metadata"]
