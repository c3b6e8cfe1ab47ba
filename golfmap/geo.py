"""Lightweight geographic value types used by the venue model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_serializer,
    model_validator,
)


class Coordinate(BaseModel):
    """WGS84 coordinate, serialized as ``latitude``/``longitude``."""

    lat: float = Field(
        validation_alias=AliasChoices("lat", "latitude"),
        serialization_alias="latitude",
    )
    lon: float = Field(
        validation_alias=AliasChoices("lon", "longitude"),
        serialization_alias="longitude",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @staticmethod
    def interpolate(a: "Coordinate", b: "Coordinate", t: float) -> "Coordinate":
        """Linear interpolation, ``t=0`` gives ``a`` and ``t=1`` gives ``b``."""

        omt = 1.0 - t
        return Coordinate(lat=omt * a.lat + t * b.lat, lon=omt * a.lon + t * b.lon)

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(lat=self.lat + other.lat, lon=self.lon + other.lon)

    def __sub__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(lat=self.lat - other.lat, lon=self.lon - other.lon)

    def __rmul__(self, factor: float) -> "Coordinate":
        return Coordinate(lat=factor * self.lat, lon=factor * self.lon)


@dataclass(frozen=True)
class Frame:
    """Axis-aligned bounding frame in latitude/longitude space."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat or self.min_lon > self.max_lon:
            raise ValueError("frame minimum must not exceed its maximum")

    @classmethod
    def spanning(cls, c1: Coordinate, c2: Coordinate) -> "Frame":
        return cls(
            min_lat=min(c1.lat, c2.lat),
            max_lat=max(c1.lat, c2.lat),
            min_lon=min(c1.lon, c2.lon),
            max_lon=max(c1.lon, c2.lon),
        )

    @property
    def origin(self) -> Coordinate:
        return Coordinate(lat=self.min_lat, lon=self.min_lon)

    @property
    def end(self) -> Coordinate:
        return Coordinate(lat=self.max_lat, lon=self.max_lon)

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            lat=0.5 * (self.min_lat + self.max_lat),
            lon=0.5 * (self.min_lon + self.max_lon),
        )

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_span(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def corners(self) -> List[Coordinate]:
        return [
            self.origin,
            Coordinate(lat=self.min_lat, lon=self.max_lon),
            self.end,
            Coordinate(lat=self.max_lat, lon=self.min_lon),
        ]

    def intersects(self, other: "Frame") -> bool:
        return (
            self.min_lat <= other.max_lat
            and other.min_lat <= self.max_lat
            and self.min_lon <= other.max_lon
            and other.min_lon <= self.max_lon
        )

    def union(self, other: "Frame") -> "Frame":
        return Frame(
            min_lat=min(self.min_lat, other.min_lat),
            max_lat=max(self.max_lat, other.max_lat),
            min_lon=min(self.min_lon, other.min_lon),
            max_lon=max(self.max_lon, other.max_lon),
        )

    def expanding(self, point: Coordinate) -> "Frame":
        return Frame(
            min_lat=min(self.min_lat, point.lat),
            max_lat=max(self.max_lat, point.lat),
            min_lon=min(self.min_lon, point.lon),
            max_lon=max(self.max_lon, point.lon),
        )

    def intersection(self, other: "Frame") -> Optional["Frame"]:
        if not self.intersects(other):
            return None
        return Frame(
            min_lat=max(self.min_lat, other.min_lat),
            max_lat=min(self.max_lat, other.max_lat),
            min_lon=max(self.min_lon, other.min_lon),
            max_lon=min(self.max_lon, other.max_lon),
        )


def union_frames(a: Optional[Frame], b: Optional[Frame]) -> Optional[Frame]:
    if a is None:
        return b
    if b is None:
        return a
    return a.union(b)


def expand_frame(frame: Optional[Frame], point: Optional[Coordinate]) -> Optional[Frame]:
    """Grow ``frame`` to include ``point``; a missing frame stays missing."""

    if frame is None:
        return None
    if point is None:
        return frame
    return frame.expanding(point)


class Area(BaseModel):
    """Linear element on the course (tee box, green) from ``start`` to ``end``."""

    start: Coordinate
    end: Coordinate

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_flat_record(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "startLatitude" in data:
            return {
                "start": {"lat": data["startLatitude"], "lon": data["startLongitude"]},
                "end": {"lat": data["endLatitude"], "lon": data["endLongitude"]},
            }
        return data

    @model_serializer
    def _to_flat_record(self) -> Dict[str, float]:
        return {
            "startLatitude": self.start.lat,
            "startLongitude": self.start.lon,
            "endLatitude": self.end.lat,
            "endLongitude": self.end.lon,
        }

    @property
    def center(self) -> Coordinate:
        return Coordinate.interpolate(self.start, self.end, 0.5)

    # Flag positions on a green, as opposed to its boundaries.
    @property
    def center_flag(self) -> Coordinate:
        return Coordinate.interpolate(self.start, self.end, 0.5)

    @property
    def front_flag(self) -> Coordinate:
        return Coordinate.interpolate(self.start, self.end, 1.0 / 6.0)

    @property
    def back_flag(self) -> Coordinate:
        return Coordinate.interpolate(self.start, self.end, 5.0 / 6.0)

    @property
    def frame(self) -> Frame:
        return Frame.spanning(self.start, self.end)


__all__ = [
    "Area",
    "Coordinate",
    "Frame",
    "expand_frame",
    "union_frames",
]
