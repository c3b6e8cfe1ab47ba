"""Played course composition and its persisted summary.

A ``Course`` is what the player actually plays: either a venue plus a
chosen section combo (``MappedCourse``), or only a hole count when no
venue data is available. It is kept for crash recovery during a round;
games embed the lighter ``CourseSummary`` instead.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Sequence
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .schema import Hole, Par
from .sections import Section, SectionType, resolve_holes
from .venue import Venue

CourseLength = int

# Raw values written by older versions, before lengths were stored as counts.
_LEGACY_LENGTHS = {0: 9, 1: 18, 2: 27, 3: 36}


class GenericCourseLength(IntEnum):
    """Played length when no venue data is available."""

    LENGTH_6 = 6
    LENGTH_9 = 9
    LENGTH_12 = 12
    LENGTH_18 = 18
    LENGTH_27 = 27
    LENGTH_36 = 36

    @classmethod
    def _missing_(cls, value: object) -> Optional["GenericCourseLength"]:
        if isinstance(value, int) and value in _LEGACY_LENGTHS:
            return cls(_LEGACY_LENGTHS[value])
        return None

    @property
    def hole_count(self) -> int:
        return int(self)


class HoleSummary(BaseModel):
    id: UUID
    par: Par


class HoleGroupSummary(BaseModel):
    id: UUID
    name: str
    hole_count: int = Field(
        validation_alias=AliasChoices("hole_count", "holeCount"),
        serialization_alias="holeCount",
    )
    section_type: SectionType = Field(
        default=SectionType.ALL,
        validation_alias=AliasChoices("section_type", "sectionType"),
        serialization_alias="sectionType",
    )

    model_config = ConfigDict(populate_by_name=True)


class VenueSummary(BaseModel):
    id: UUID
    name: Optional[str] = None
    short_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("short_name", "shortName"),
        serialization_alias="shortName",
    )

    model_config = ConfigDict(populate_by_name=True)


class CourseSummary(BaseModel):
    """Storage-light description of a played course, embedded in games."""

    venue: Optional[VenueSummary] = Field(
        default=None, validation_alias=AliasChoices("venue", "golfmap")
    )
    hole_groups: Optional[List[HoleGroupSummary]] = Field(
        default=None,
        validation_alias=AliasChoices("hole_groups", "holeGroups"),
        serialization_alias="holeGroups",
    )
    hole_summaries: Optional[List[HoleSummary]] = Field(
        default=None,
        validation_alias=AliasChoices("hole_summaries", "holeSummaries"),
        serialization_alias="holeSummaries",
    )
    total_par: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("total_par", "totalPar"),
        serialization_alias="totalPar",
    )
    length: CourseLength

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def for_length(cls, length: CourseLength) -> "CourseSummary":
        return cls(length=length)


class MappedCourse(BaseModel):
    """Venue snapshot, the chosen sections and the resulting hole sequence."""

    venue: Venue
    sections: List[Section]
    holes: List[Hole]

    model_config = ConfigDict(frozen=True)

    @property
    def total_par(self) -> int:
        return sum(int(hole.par) for hole in self.holes)

    @property
    def summary(self) -> CourseSummary:
        group_summaries = []
        for section in self.sections:
            group = self.venue.groups[section.group_index]
            group_summaries.append(
                HoleGroupSummary(
                    id=group.id,
                    name=group.name,
                    hole_count=section.hole_count,
                    section_type=section.type,
                )
            )
        return CourseSummary(
            venue=VenueSummary(
                id=self.venue.id,
                name=self.venue.name,
                short_name=self.venue.short_name,
            ),
            hole_groups=group_summaries,
            hole_summaries=[HoleSummary(id=hole.id, par=hole.par) for hole in self.holes],
            total_par=self.total_par,
            length=len(self.holes),
        )


def compose(venue: Venue, sections: Sequence[Section]) -> MappedCourse:
    """Flatten ``sections`` of ``venue`` into the ordered holes of one round.

    Sections are played in the order given. They are expected to come from
    ``venue.sections``; a section that does not fit the venue raises
    :class:`~golfmap.courses.sections.InvalidSectionError`.
    """

    snapshot = venue.model_copy(deep=True)
    holes = resolve_holes(sections, snapshot.groups)
    return MappedCourse(venue=snapshot, sections=list(sections), holes=holes)


class Course(BaseModel):
    length: CourseLength
    mapped: Optional[MappedCourse] = None

    @classmethod
    def of_length(cls, length: CourseLength) -> "Course":
        return cls(length=length)

    @classmethod
    def from_venue(
        cls,
        venue: Venue,
        sections: Sequence[Section],
        length: Optional[CourseLength] = None,
    ) -> "Course":
        mapped = compose(venue, sections)
        return cls(length=len(mapped.holes) if length is None else length, mapped=mapped)

    @property
    def holes(self) -> List[Hole]:
        return list(self.mapped.holes) if self.mapped else []

    @property
    def summary(self) -> CourseSummary:
        if self.mapped is not None:
            return self.mapped.summary
        return CourseSummary.for_length(self.length)


__all__ = [
    "Course",
    "CourseLength",
    "CourseSummary",
    "GenericCourseLength",
    "HoleGroupSummary",
    "HoleSummary",
    "MappedCourse",
    "VenueSummary",
    "compose",
]
