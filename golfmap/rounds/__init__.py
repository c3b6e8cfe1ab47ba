"""Round bookkeeping: players, strokes and games."""

from .models import (
    Game,
    HoleScore,
    HoleStats,
    HoleStatus,
    Player,
    PlayerGroup,
    PlayerRecord,
    ScorecardAnnotation,
    Stroke,
)

__all__ = [
    "Game",
    "HoleScore",
    "HoleStats",
    "HoleStatus",
    "Player",
    "PlayerGroup",
    "PlayerRecord",
    "ScorecardAnnotation",
    "Stroke",
]
