"""Venue map: hole groups, facilities and group affinities."""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Iterable, List, Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from golfmap import telemetry
from golfmap.config import get_settings
from golfmap.geo import Coordinate, Frame, union_frames

from .schema import Facility, Hole, HoleGroup
from .sections import Section, SectionType, group_sections

_LOG = logging.getLogger(__name__)

MIN_AFFINITY_GROUPS = 2

# Explicit nulls in records fall back to the same defaults as missing keys.
_NULL_DEFAULTS: Dict[str, Callable[[], Any]] = {
    "address": dict,
    "facilities": list,
    "affinities": list,
    "affinities_enabled": bool,
}


def _default_country_code() -> str:
    return get_settings().default_country_code.lower()


class Address(BaseModel):
    street: Optional[str] = None
    sub_locality: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sub_locality", "subLocality"),
        serialization_alias="subLocality",
    )
    city: Optional[str] = None
    sub_administrative_area: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sub_administrative_area", "subAdministrativeArea"),
        serialization_alias="subAdministrativeArea",
    )
    state: Optional[str] = None
    postal_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("postal_code", "postalCode"),
        serialization_alias="postalCode",
    )
    country_code: str = Field(
        default_factory=_default_country_code,
        validation_alias=AliasChoices("country_code", "countryCode"),
        serialization_alias="countryCode",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("country_code")
    @classmethod
    def _lowercase_country(cls, value: str) -> str:
        return value.lower()


class Venue(BaseModel):
    """A golf venue: its hole groups (practice ones included) and facilities.

    Affinities declare which groups may be combined into one played course,
    e.g. the front nine of one group with the back nine of another. They are
    kept consistent with ``groups`` by :meth:`refresh_affinities`, which every
    mutating method below runs before returning. Code that edits a group in
    place must call it as well.
    """

    CURRENT_VERSION: ClassVar[int] = 1

    id: UUID = Field(default_factory=uuid4)
    name: Optional[str] = None
    short_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("short_name", "shortName"),
        serialization_alias="shortName",
    )
    address: Address = Field(default_factory=Address)
    groups: List[HoleGroup]
    facilities: List[Facility] = Field(default_factory=list)
    affinities_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("affinities_enabled", "affinitiesEnabled"),
        serialization_alias="affinitiesEnabled",
    )
    affinities: List[FrozenSet[UUID]] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator(*_NULL_DEFAULTS, mode="before")
    @classmethod
    def _drop_nulls(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return _NULL_DEFAULTS[info.field_name]()
        return value

    @field_serializer("affinities")
    def _stable_affinities(self, affinities: List[FrozenSet[UUID]]) -> List[List[str]]:
        return [sorted(str(group_id) for group_id in affinity) for affinity in affinities]

    @model_validator(mode="after")
    def _enforce_affinities(self) -> "Venue":
        self.refresh_affinities()
        return self

    # Derived views
    @property
    def sections(self) -> List[Section]:
        """Sections a caller may compose, honouring the indivisible flag."""

        sections: List[Section] = []
        for index, group in enumerate(self.groups):
            sections.extend(group_sections(group, index))
        return sections

    @property
    def whole_sections(self) -> List[Section]:
        return [
            Section(group_index=index, hole_count=len(group.holes), type=SectionType.ALL)
            for index, group in enumerate(self.groups)
        ]

    @property
    def groups_for_affinities(self) -> List[HoleGroup]:
        eligible = [group for group in self.groups if not group.practice]
        return eligible if len(eligible) >= MIN_AFFINITY_GROUPS else []

    @property
    def all_holes(self) -> List[Hole]:
        return [hole for group in self.groups for hole in group.holes]

    @property
    def all_non_practice_holes(self) -> List[Hole]:
        return [hole for group in self.groups if not group.practice for hole in group.holes]

    @property
    def coordinate(self) -> Optional[Coordinate]:
        return self.groups[0].start_coordinate if self.groups else None

    @property
    def frame(self) -> Optional[Frame]:
        frame: Optional[Frame] = None
        for group in self.groups:
            frame = union_frames(frame, group.frame)
        return frame

    def hole_group(self, group_id: UUID) -> Optional[HoleGroup]:
        return next((group for group in self.groups if group.id == group_id), None)

    def with_new_id(self) -> "Venue":
        """Deep copy of this venue under a fresh identity."""

        return self.model_copy(update={"id": uuid4()}, deep=True)

    # Group mutations
    def set_groups(self, groups: Iterable[HoleGroup]) -> None:
        self.groups = list(groups)
        self.refresh_affinities()

    def add_group(self, group: HoleGroup) -> None:
        self.groups.append(group)
        self.refresh_affinities()

    def insert_group(self, index: int, group: HoleGroup) -> None:
        self.groups.insert(index, group)
        self.refresh_affinities()

    def replace_group(self, index: int, group: HoleGroup) -> None:
        self.groups[index] = group
        self.refresh_affinities()

    def remove_group(self, target: Union[int, UUID]) -> HoleGroup:
        if isinstance(target, UUID):
            index = next(
                (i for i, group in enumerate(self.groups) if group.id == target), None
            )
            if index is None:
                raise KeyError(target)
        else:
            index = target
        removed = self.groups.pop(index)
        self.refresh_affinities()
        return removed

    def move_group(self, source: int, destination: int) -> None:
        group = self.groups.pop(source)
        self.groups.insert(destination, group)
        self.refresh_affinities()

    # Affinities
    def set_affinities(self, affinities: Iterable[Iterable[UUID]]) -> None:
        self.affinities = [frozenset(affinity) for affinity in affinities]
        self.refresh_affinities()

    def set_affinities_enabled(self, enabled: bool) -> bool:
        """Request affinities on or off; returns the effective flag."""

        self.affinities_enabled = enabled
        self.refresh_affinities()
        return self.affinities_enabled

    def refresh_affinities(self) -> bool:
        """Prune affinities that no longer match ``groups``.

        Drops ids of missing or practice groups, drops affinities left with
        fewer than two groups, and disables affinities when fewer than two
        non-practice groups remain. Never adds anything. Returns True when the
        venue changed.
        """

        eligible_ids = {group.id for group in self.groups if not group.practice}
        changed = False

        pruned: List[FrozenSet[UUID]] = []
        for affinity in self.affinities:
            kept = frozenset(group_id for group_id in affinity if group_id in eligible_ids)
            if len(kept) >= MIN_AFFINITY_GROUPS:
                pruned.append(kept)

        if pruned != self.affinities:
            _LOG.debug(
                "pruned venue %s affinities from %d to %d",
                self.id,
                len(self.affinities),
                len(pruned),
            )
            telemetry.record_affinities_pruned(
                str(self.id), before=len(self.affinities), after=len(pruned)
            )
            self.affinities = pruned
            changed = True

        if self.affinities_enabled and len(eligible_ids) < MIN_AFFINITY_GROUPS:
            _LOG.debug(
                "disabled venue %s affinities: %d eligible groups",
                self.id,
                len(eligible_ids),
            )
            telemetry.record_affinities_disabled(
                str(self.id), eligible_groups=len(eligible_ids)
            )
            self.affinities_enabled = False
            changed = True

        return changed


__all__ = ["Address", "MIN_AFFINITY_GROUPS", "Venue"]
