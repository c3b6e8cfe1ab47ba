from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from golfmap.courses.course import CourseSummary
from golfmap.geo import Coordinate

OWNER_ID = "owner"
# Strokes counted for an abandoned hole.
ABANDONED_HOLE_STROKES = 9


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str

    @property
    def is_owner(self) -> bool:
        return self.id == OWNER_ID


class PlayerGroup(BaseModel):
    """Players playing a game together (reusable across games)."""

    id: UUID = Field(default_factory=uuid4)
    players: List[Player] = Field(default_factory=list)
    is_persistent: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_persistent", "isPersistent"),
        serialization_alias="isPersistent",
    )
    creation_date: datetime = Field(
        default_factory=_utcnow,
        validation_alias=AliasChoices("creation_date", "creationDate"),
        serialization_alias="creationDate",
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def display_name(self) -> str:
        return ", ".join(player.name for player in self.players)


class Stroke(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    date: datetime = Field(default_factory=_utcnow)
    # Where the stroke was recorded, and where it was placed after review.
    raw_location: Optional[Coordinate] = Field(
        default=None,
        validation_alias=AliasChoices("raw_location", "rawLocation"),
        serialization_alias="rawLocation",
    )
    location: Optional[Coordinate] = None

    model_config = ConfigDict(populate_by_name=True)


class HoleStats(BaseModel):
    gir: bool
    fairway: bool
    putts: int


class HoleScore(BaseModel):
    strokes: List[Stroke] = Field(default_factory=list)
    abandoned: bool = False
    stats: Optional[HoleStats] = None


class PlayerRecord(BaseModel):
    """Per-hole strokes of one player, keyed by zero-based course hole index."""

    holes: Dict[int, HoleScore] = Field(default_factory=dict)

    def score_complete(self, hole_count: int) -> bool:
        played = [score for score in self.holes.values() if score.strokes or score.abandoned]
        return len(played) == hole_count

    def stats_complete(self, hole_count: int) -> bool:
        return len([score for score in self.holes.values() if score.stats]) == hole_count

    def strokes(self, hole: int) -> Optional[List[Stroke]]:
        score = self.holes.get(hole)
        return score.strokes if score else None

    def stroke_count(self, hole: int) -> int:
        return len(self.strokes(hole) or [])

    def total_stroke_count(self) -> int:
        return sum(
            ABANDONED_HOLE_STROKES if score.abandoned else len(score.strokes)
            for score in self.holes.values()
        )


@dataclass(frozen=True)
class HoleStatus:
    abandoned: bool = False
    count: int = 0


class ScorecardAnnotation(str, Enum):
    EAGLE = "eagle"
    BIRDIE = "birdie"
    BOGEY = "bogey"
    DOUBLE_BOGEY = "double_bogey"
    OVER_DOUBLE_BOGEY = "over_double_bogey"


class Game(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    course_summary: CourseSummary = Field(
        validation_alias=AliasChoices("course_summary", "courseSummary"),
        serialization_alias="courseSummary",
    )
    start_date: datetime = Field(
        validation_alias=AliasChoices("start_date", "startDate"),
        serialization_alias="startDate",
    )
    end_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("end_date", "endDate"),
        serialization_alias="endDate",
    )
    # Seconds played, pauses excluded.
    duration: Optional[float] = None
    player_group: PlayerGroup = Field(
        validation_alias=AliasChoices("player_group", "playerGroup", "group"),
        serialization_alias="playerGroup",
    )
    records: Dict[str, PlayerRecord] = Field(default_factory=dict)
    associated_workout_id: Optional[UUID] = Field(
        default=None,
        validation_alias=AliasChoices(
            "associated_workout_id", "associatedWorkoutId", "associatedWorkoutUUID"
        ),
        serialization_alias="associatedWorkoutId",
    )

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _fill_dates(self) -> "Game":
        # Older records may lack the end date and duration.
        if self.end_date is None:
            self.end_date = self.start_date
        if self.duration is None:
            self.duration = (self.end_date - self.start_date).total_seconds()
        return self

    @classmethod
    def start(
        cls,
        player_group: PlayerGroup,
        course_summary: CourseSummary,
        start_date: Optional[datetime] = None,
    ) -> "Game":
        started = start_date or _utcnow()
        return cls(
            player_group=player_group,
            course_summary=course_summary,
            start_date=started,
            end_date=started,
        )

    # Queries
    def record_for(self, player_id: str) -> PlayerRecord:
        return self.records.get(player_id) or PlayerRecord()

    def hole_status(self, hole: int, player_id: str) -> HoleStatus:
        record = self.records.get(player_id)
        score = record.holes.get(hole) if record else None
        if score is None:
            return HoleStatus()
        if score.abandoned:
            return HoleStatus(abandoned=True)
        return HoleStatus(count=len(score.strokes))

    def scorecard_annotation(self, hole: int, player_id: str) -> Optional[ScorecardAnnotation]:
        summaries = self.course_summary.hole_summaries
        if not summaries or not 0 <= hole < len(summaries):
            return None
        par = int(summaries[hole].par)
        status = self.hole_status(hole, player_id)
        if status.abandoned or status.count == 0:
            return None
        delta = status.count - par
        if delta == -2:
            return ScorecardAnnotation.EAGLE
        if delta == -1:
            return ScorecardAnnotation.BIRDIE
        if delta == 1:
            return ScorecardAnnotation.BOGEY
        if delta == 2:
            return ScorecardAnnotation.DOUBLE_BOGEY
        if delta > 2:
            return ScorecardAnnotation.OVER_DOUBLE_BOGEY
        return None

    def hole_stats(self, hole: int, player_id: str = OWNER_ID) -> Optional[HoleStats]:
        score = self.record_for(player_id).holes.get(hole)
        return score.stats if score else None

    def strokes(self, hole: int, player_id: str) -> Optional[List[Stroke]]:
        record = self.records.get(player_id)
        return record.strokes(hole) if record else None

    def stroke_count(self, hole: int, player_id: str) -> int:
        return self.record_for(player_id).stroke_count(hole)

    def total_stroke_count(self, player_id: str) -> int:
        return sum(
            self.stroke_count(hole, player_id) for hole in range(self.course_summary.length)
        )

    def last_stroke(self, hole: int, player_id: str) -> Optional[Stroke]:
        strokes = self.strokes(hole, player_id)
        return strokes[-1] if strokes else None

    def score_complete(self, player_id: str) -> bool:
        record = self.records.get(player_id)
        return record is not None and record.score_complete(self.course_summary.length)

    def stats_complete(self, player_id: str) -> bool:
        record = self.records.get(player_id)
        return record is not None and record.stats_complete(self.course_summary.length)

    def can_append_stroke(self, hole: int, player_id: str) -> bool:
        return not self.hole_status(hole, player_id).abandoned

    def can_remove_stroke(self, hole: int, player_id: str) -> bool:
        status = self.hole_status(hole, player_id)
        return status.abandoned or status.count > 0

    # Mutations
    def _hole_score(self, hole: int, player_id: str) -> HoleScore:
        record = self.records.setdefault(player_id, PlayerRecord())
        return record.holes.setdefault(hole, HoleScore())

    def append_stroke(
        self,
        hole: int,
        player_id: str,
        *,
        location: Optional[Coordinate] = None,
        raw_location: Optional[Coordinate] = None,
        date: Optional[datetime] = None,
    ) -> UUID:
        stroke = Stroke(date=date or _utcnow(), raw_location=raw_location, location=location)
        self._hole_score(hole, player_id).strokes.append(stroke)
        return stroke.id

    def remove_last_stroke(self, hole: int, player_id: str) -> Optional[Stroke]:
        strokes = self.strokes(hole, player_id)
        return strokes.pop() if strokes else None

    def remove_all_strokes(self, hole: int, player_id: str) -> None:
        strokes = self.strokes(hole, player_id)
        if strokes:
            strokes.clear()

    def set_hole_abandoned(self, abandoned: bool, hole: int, player_id: str) -> None:
        self._hole_score(hole, player_id).abandoned = abandoned

    def set_hole_stats(self, stats: HoleStats, hole: int, player_id: str = OWNER_ID) -> None:
        self._hole_score(hole, player_id).stats = stats


__all__ = [
    "ABANDONED_HOLE_STROKES",
    "Game",
    "HoleScore",
    "HoleStats",
    "HoleStatus",
    "OWNER_ID",
    "Player",
    "PlayerGroup",
    "PlayerRecord",
    "ScorecardAnnotation",
    "Stroke",
]
