"""Venue map domain models: holes, groups, sections, variants and courses."""

from .codec import (
    MissingFieldError,
    RecordDecodeError,
    UnsupportedVersionError,
    dumps_venue,
    loads_venue,
    venue_from_record,
    venue_to_record,
)
from .course import Course, CourseSummary, GenericCourseLength, MappedCourse, compose
from .schema import Facility, FacilityKind, Hazard, HazardKind, Hole, HoleGroup, Par
from .sections import InvalidSectionError, Section, SectionType
from .store import VenueNotFoundError, VenueStore
from .variants import (
    DEFAULT_PRECEDENCE,
    Channel,
    Selector,
    Variant,
    VariantOverride,
    default_precedence,
    resolve,
)
from .venue import Address, Venue

__all__ = [
    "Address",
    "Channel",
    "Course",
    "CourseSummary",
    "DEFAULT_PRECEDENCE",
    "Facility",
    "FacilityKind",
    "GenericCourseLength",
    "Hazard",
    "HazardKind",
    "Hole",
    "HoleGroup",
    "InvalidSectionError",
    "MappedCourse",
    "MissingFieldError",
    "Par",
    "RecordDecodeError",
    "Section",
    "SectionType",
    "Selector",
    "UnsupportedVersionError",
    "Variant",
    "VariantOverride",
    "Venue",
    "VenueNotFoundError",
    "VenueStore",
    "compose",
    "default_precedence",
    "dumps_venue",
    "loads_venue",
    "resolve",
    "venue_from_record",
    "venue_to_record",
]
