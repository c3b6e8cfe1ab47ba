"""Hole and hole group models for a venue map."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

from golfmap.geo import Area, Coordinate, Frame, expand_frame, union_frames

from .variants import Channel, Selector, Variant, VariantOverride, resolve, resolved_variant

_LOG = logging.getLogger(__name__)

SPLIT_GROUP_HOLE_COUNT = 18
HALF_HOLE_COUNT = 9


class Par(IntEnum):
    PAR3 = 3
    PAR4 = 4
    PAR5 = 5
    PAR6 = 6


class HazardKind(str, Enum):
    BUNKER = "bunker"
    WATER = "water"
    OTHER = "other"


class FacilityKind(str, Enum):
    CHIPPING = "chipping"
    PUTTING = "putting"
    DRIVING = "driving"
    CLUBHOUSE = "clubhouse"
    PARKING = "parking"


class Hazard(BaseModel):
    """Hazard modeled as a linear segment."""

    id: UUID = Field(default_factory=uuid4)
    kind: HazardKind = HazardKind.BUNKER
    start: Coordinate
    end: Coordinate

    @property
    def center(self) -> Coordinate:
        return Coordinate.interpolate(self.start, self.end, 0.5)


class Facility(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    kind: FacilityKind = FacilityKind.CHIPPING
    location: Coordinate


def _variant_items(raw: Any) -> List[tuple]:
    if isinstance(raw, dict):
        return list(raw.items())
    if isinstance(raw, (list, tuple)):
        # Older records store variants as a flat [key, value, key, value] list.
        return list(zip(raw[0::2], raw[1::2]))
    return []


class Hole(BaseModel):
    """A hole of the venue map (as opposed to a hole score)."""

    id: UUID = Field(default_factory=uuid4)
    par: Par
    tee: Optional[Area] = Field(
        default=None, validation_alias=AliasChoices("tee", "start", "startArea")
    )
    green: Optional[Area] = Field(
        default=None, validation_alias=AliasChoices("green", "greenArea")
    )
    checkpoint: Optional[Coordinate] = None
    hazards: List[Hazard] = Field(default_factory=list)
    variants: Dict[Variant, VariantOverride] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("hazards", mode="before")
    @classmethod
    def _default_hazards(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("variants", mode="before")
    @classmethod
    def _known_variants(cls, value: Any) -> Dict[Any, Any]:
        known: Dict[Any, Any] = {}
        for key, override in _variant_items(value):
            try:
                variant = Variant(key)
            except ValueError:
                _LOG.warning("skipping unknown hole variant %r", key)
                continue
            known[variant] = override
        return known

    @field_serializer("variants", mode="wrap")
    def _sorted_variants(self, value: Dict[Variant, VariantOverride], handler: Any) -> Any:
        dumped = handler(value)
        return {
            key: dumped[key]
            for key in sorted(dumped, key=lambda item: getattr(item, "value", item))
        }

    @property
    def frame(self) -> Optional[Frame]:
        # Variants are ignored here; the frame covers base attributes only.
        tee_frame = self.tee.frame if self.tee else None
        green_frame = self.green.frame if self.green else None
        return expand_frame(union_frames(tee_frame, green_frame), self.checkpoint)

    def resolve(self, channel: Channel, selector: Optional[Selector] = None) -> Any:
        return resolve(self, channel, selector)

    def resolved_variant(
        self, channel: Channel, selector: Optional[Selector] = None
    ) -> Optional[Variant]:
        return resolved_variant(self, channel, selector)

    def tee_for(self, selector: Optional[Selector] = None) -> Optional[Area]:
        return resolve(self, Channel.TEE, selector)

    def green_for(self, selector: Optional[Selector] = None) -> Optional[Area]:
        return resolve(self, Channel.GREEN, selector)

    def checkpoint_for(self, selector: Optional[Selector] = None) -> Optional[Coordinate]:
        return resolve(self, Channel.CHECKPOINT, selector)

    def variant_override(
        self, variant: Variant, *, create: bool = True
    ) -> Optional[VariantOverride]:
        """Return the override for ``variant``, creating an empty one if asked.

        The returned object is owned by the hole, so edits apply in place.
        """

        override = self.variants.get(variant)
        if override is None and create:
            override = VariantOverride()
            self.variants[variant] = override
        return override

    def create_variant_if_absent(self, variant: Variant) -> None:
        self.variant_override(variant, create=True)

    def remove_variant(self, variant: Variant) -> Optional[VariantOverride]:
        return self.variants.pop(variant, None)


class HoleGroup(BaseModel):
    """Ordered block of holes matching the venue structure.

    An 18-hole group that is not ``indivisible`` can be split into its front
    and back nine at composition time, so venues do not need separate 9-hole
    groups for that. ``practice`` groups are never combined with others.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str
    holes: List[Hole]
    practice: bool = False
    indivisible: bool = False

    @field_validator("practice", "indivisible", mode="before")
    @classmethod
    def _default_flags(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def is_divisible(self) -> bool:
        return not self.indivisible and len(self.holes) == SPLIT_GROUP_HOLE_COUNT

    @property
    def start_coordinate(self) -> Optional[Coordinate]:
        if not self.holes or self.holes[0].tee is None:
            return None
        return self.holes[0].tee.center

    @property
    def frame(self) -> Optional[Frame]:
        frame: Optional[Frame] = None
        for hole in self.holes:
            frame = union_frames(frame, hole.frame)
        return frame


__all__ = [
    "Facility",
    "FacilityKind",
    "HALF_HOLE_COUNT",
    "Hazard",
    "HazardKind",
    "Hole",
    "HoleGroup",
    "Par",
    "SPLIT_GROUP_HOLE_COUNT",
]
