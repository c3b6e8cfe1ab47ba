"""Sections: references selecting all or half of one hole group."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .schema import HALF_HOLE_COUNT, Hole, HoleGroup


class InvalidSectionError(IndexError):
    """Raised when a section does not match the groups it is resolved against."""


class SectionType(IntEnum):
    ALL = 0  # valid for any group
    FRONT_NINE = 1  # divisible 18-hole groups only
    BACK_NINE = 2  # divisible 18-hole groups only


class Section(BaseModel):
    """A section is relative to a venue's group list; it is not a copy."""

    group_index: int = Field(
        validation_alias=AliasChoices("group_index", "groupIndex"),
        serialization_alias="groupIndex",
    )
    hole_count: int = Field(
        validation_alias=AliasChoices("hole_count", "holeCount"),
        serialization_alias="holeCount",
    )
    type: SectionType = SectionType.ALL

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def resolve_holes(self, groups: Sequence[HoleGroup]) -> List[Hole]:
        if not 0 <= self.group_index < len(groups):
            raise InvalidSectionError(
                f"section references group {self.group_index} "
                f"but only {len(groups)} groups exist"
            )
        group = groups[self.group_index]
        if self.type is SectionType.ALL:
            return list(group.holes)
        if not group.is_divisible:
            raise InvalidSectionError(
                f"group {group.name!r} cannot be split: {len(group.holes)} holes, "
                f"indivisible={group.indivisible}"
            )
        if self.type is SectionType.FRONT_NINE:
            return list(group.holes[:HALF_HOLE_COUNT])
        return list(group.holes[-HALF_HOLE_COUNT:])


def group_sections(group: HoleGroup, group_index: int) -> List[Section]:
    """Sections a group offers: always ALL, plus both nines when divisible."""

    sections = [
        Section(group_index=group_index, hole_count=len(group.holes), type=SectionType.ALL)
    ]
    if group.is_divisible:
        sections.append(
            Section(
                group_index=group_index,
                hole_count=HALF_HOLE_COUNT,
                type=SectionType.FRONT_NINE,
            )
        )
        sections.append(
            Section(
                group_index=group_index,
                hole_count=HALF_HOLE_COUNT,
                type=SectionType.BACK_NINE,
            )
        )
    return sections


def resolve_holes(sections: Iterable[Section], groups: Sequence[HoleGroup]) -> List[Hole]:
    """Flatten ``sections`` into holes, keeping section order as play order."""

    holes: List[Hole] = []
    for section in sections:
        holes.extend(section.resolve_holes(groups))
    return holes


__all__ = [
    "InvalidSectionError",
    "Section",
    "SectionType",
    "group_sections",
    "resolve_holes",
]
