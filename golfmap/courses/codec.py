"""Versioned record encoding for venue models.

Records are plain JSON-compatible dicts with camelCase keys. Missing
optional fields fall back to model defaults; fields without a sane default
surface as :class:`MissingFieldError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .venue import Venue

_LOG = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordDecodeError(ValueError):
    """Raised when a record cannot be decoded into a model."""


class MissingFieldError(RecordDecodeError):
    """Raised when a record lacks a field that has no default."""

    def __init__(self, model: str, fields: List[str]):
        self.model = model
        self.fields = fields
        super().__init__(f"{model} record is missing required field(s): {', '.join(fields)}")


class UnsupportedVersionError(RecordDecodeError):
    """Raised when a record was written by a newer schema version."""

    def __init__(self, version: int, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(
            f"record version {version} is newer than supported version {supported}"
        )


def _location(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def to_record(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def from_record(model_cls: Type[ModelT], record: Mapping[str, Any]) -> ModelT:
    """Validate ``record`` into ``model_cls``, translating pydantic errors."""

    if not isinstance(record, Mapping):
        raise RecordDecodeError(
            f"{model_cls.__name__} record must be a mapping, got {type(record).__name__}"
        )
    try:
        return model_cls.model_validate(dict(record))
    except ValidationError as exc:
        missing = [_location(err["loc"]) for err in exc.errors() if err["type"] == "missing"]
        if missing:
            raise MissingFieldError(model_cls.__name__, missing) from exc
        raise RecordDecodeError(f"invalid {model_cls.__name__} record: {exc}") from exc


def _record_version(record: Mapping[str, Any]) -> int:
    raw = record.get("version", 0)
    if isinstance(raw, bool):
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError):
        _LOG.warning("ignoring malformed venue record version %r", raw)
        return 0


def venue_to_record(venue: Venue) -> Dict[str, Any]:
    record: Dict[str, Any] = {"version": Venue.CURRENT_VERSION}
    record.update(to_record(venue))
    return record


def venue_from_record(record: Mapping[str, Any]) -> Venue:
    """Decode a venue record, rejecting versions newer than this library."""

    if not isinstance(record, Mapping):
        raise RecordDecodeError(f"venue record must be a mapping, got {type(record).__name__}")
    version = _record_version(record)
    if version > Venue.CURRENT_VERSION:
        raise UnsupportedVersionError(version, Venue.CURRENT_VERSION)
    payload = {key: value for key, value in record.items() if key != "version"}
    return from_record(Venue, payload)


def dumps_venue(venue: Venue, *, indent: int | None = 2) -> str:
    return json.dumps(venue_to_record(venue), indent=indent, sort_keys=True)


def loads_venue(text: Union[str, bytes]) -> Venue:
    try:
        record = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordDecodeError(f"venue record is not valid JSON: {exc}") from exc
    return venue_from_record(record)


__all__ = [
    "MissingFieldError",
    "RecordDecodeError",
    "UnsupportedVersionError",
    "dumps_venue",
    "from_record",
    "loads_venue",
    "to_record",
    "venue_from_record",
    "venue_to_record",
]
