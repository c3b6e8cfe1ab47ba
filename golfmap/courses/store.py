from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional
from uuid import UUID

from golfmap.config import get_settings

from .codec import RecordDecodeError, from_record, loads_venue, to_record, venue_to_record
from .course import Course
from .venue import Venue

_LOG = logging.getLogger(__name__)

SAFE_VENUE_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
ACTIVE_COURSE_FILENAME = "active_course.json"


class VenueNotFoundError(FileNotFoundError):
    """Raised when a requested venue does not exist in the store."""


def _sanitize_venue_id(venue_id: UUID | str) -> str:
    """
    Restrict venue ids to filesystem-safe characters to prevent path traversal.

    Only allow ASCII letters, digits, underscores, and dashes. Reject anything else.
    """

    value = str(venue_id)
    if not SAFE_VENUE_ID_RE.match(value):
        raise ValueError(f"Invalid venue_id for filesystem usage: {value!r}")
    return value


class VenueStore:
    """JSON file store for venues and the course of the round in progress."""

    def __init__(self, base_dir: Path | str | None = None):
        base = Path(base_dir or get_settings().venues_dir).expanduser()
        self._base_dir = base.resolve()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    # Venues
    def save(self, venue: Venue) -> Path:
        path = self._venue_path(venue.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(venue_to_record(venue), indent=2, sort_keys=True))
        return path

    def load(self, venue_id: UUID | str) -> Venue:
        path = self._venue_path(venue_id)
        if not path.exists():
            raise VenueNotFoundError(str(venue_id))
        return loads_venue(path.read_text(encoding="utf-8"))

    def delete(self, venue_id: UUID | str) -> None:
        path = self._venue_path(venue_id)
        if not path.exists():
            raise VenueNotFoundError(str(venue_id))
        path.unlink()

    def list_venues(self) -> List[Dict[str, object]]:
        venues_dir = self._base_dir / "venues"
        if not venues_dir.exists():
            return []

        venues: List[Dict[str, object]] = []
        for path in sorted(venues_dir.glob("*.json")):
            try:
                venue = loads_venue(path.read_text(encoding="utf-8"))
            except RecordDecodeError:
                _LOG.warning("skipping unreadable venue file %s", path, exc_info=True)
                continue
            venues.append(
                {
                    "id": str(venue.id),
                    "name": venue.name,
                    "shortName": venue.short_name,
                    "groupCount": len(venue.groups),
                    "holeCount": len(venue.all_holes),
                }
            )
        venues.sort(key=lambda item: (item["name"] or "", item["id"]))
        return venues

    # Active course (crash recovery while a round is in progress)
    def save_active_course(self, course: Course) -> Path:
        path = self._base_dir / ACTIVE_COURSE_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(to_record(course), indent=2, sort_keys=True))
        return path

    def load_active_course(self) -> Optional[Course]:
        path = self._base_dir / ACTIVE_COURSE_FILENAME
        if not path.exists():
            return None
        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RecordDecodeError(f"active course is not valid JSON: {exc}") from exc
        return from_record(Course, record)

    def clear_active_course(self) -> None:
        path = self._base_dir / ACTIVE_COURSE_FILENAME
        if path.exists():
            path.unlink()

    # Internal helpers
    def _venue_path(self, venue_id: UUID | str) -> Path:
        return self._base_dir / "venues" / f"{_sanitize_venue_id(venue_id)}.json"


__all__ = ["VenueNotFoundError", "VenueStore"]
