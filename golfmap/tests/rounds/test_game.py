from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from golfmap.courses import MissingFieldError, Venue, compose
from golfmap.courses.codec import from_record, to_record
from golfmap.geo import Coordinate
from golfmap.rounds import (
    Game,
    HoleStats,
    Player,
    PlayerGroup,
    PlayerRecord,
    ScorecardAnnotation,
)
from golfmap.rounds.models import OWNER_ID

START = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def game(make_group) -> Game:
    venue = Venue(name="Royal Example", groups=[make_group("North", 9)])
    summary = compose(venue, venue.sections).summary
    group = PlayerGroup(players=[Player(id=OWNER_ID, name="Alex"), Player(name="Sam")])
    return Game.start(group, summary, START)


def _play(game: Game, hole: int, player_id: str, strokes: int) -> None:
    for _ in range(strokes):
        game.append_stroke(hole, player_id)


def test_players_and_group() -> None:
    owner = Player(id=OWNER_ID, name="Alex")
    guest = Player(name="Sam")

    assert owner.is_owner
    assert not guest.is_owner
    assert PlayerGroup(players=[owner, guest]).display_name == "Alex, Sam"


def test_new_game_defaults(game: Game) -> None:
    assert game.end_date == START
    assert game.duration == 0.0
    assert game.course_summary.length == 9
    assert game.record_for(OWNER_ID) == PlayerRecord()


@pytest.mark.parametrize(
    ("strokes", "expected"),
    [
        (2, ScorecardAnnotation.EAGLE),
        (3, ScorecardAnnotation.BIRDIE),
        (4, None),
        (5, ScorecardAnnotation.BOGEY),
        (6, ScorecardAnnotation.DOUBLE_BOGEY),
        (9, ScorecardAnnotation.OVER_DOUBLE_BOGEY),
    ],
)
def test_scorecard_annotation_against_par(game: Game, strokes: int, expected) -> None:
    # Hole 0 is a par 4.
    _play(game, 0, OWNER_ID, strokes)

    assert game.scorecard_annotation(0, OWNER_ID) == expected


def test_annotation_without_hole_data(game: Game) -> None:
    assert game.scorecard_annotation(0, OWNER_ID) is None
    assert game.scorecard_annotation(42, OWNER_ID) is None


def test_stroke_bookkeeping(game: Game) -> None:
    location = Coordinate(lat=50.0, lon=4.0)
    stroke_id = game.append_stroke(1, OWNER_ID, location=location, raw_location=location)
    _play(game, 1, OWNER_ID, 2)

    assert game.stroke_count(1, OWNER_ID) == 3
    assert game.strokes(1, OWNER_ID)[0].id == stroke_id
    assert game.last_stroke(1, OWNER_ID).location is None
    assert game.can_remove_stroke(1, OWNER_ID)

    game.remove_last_stroke(1, OWNER_ID)
    assert game.stroke_count(1, OWNER_ID) == 2

    game.remove_all_strokes(1, OWNER_ID)
    assert game.stroke_count(1, OWNER_ID) == 0
    assert not game.can_remove_stroke(1, OWNER_ID)
    assert game.remove_last_stroke(1, OWNER_ID) is None


def test_abandoned_hole(game: Game) -> None:
    _play(game, 2, OWNER_ID, 3)
    game.set_hole_abandoned(True, 2, OWNER_ID)

    status = game.hole_status(2, OWNER_ID)
    assert status.abandoned
    assert not game.can_append_stroke(2, OWNER_ID)
    assert game.can_remove_stroke(2, OWNER_ID)
    assert game.scorecard_annotation(2, OWNER_ID) is None
    assert game.record_for(OWNER_ID).total_stroke_count() == 9


def test_completion_and_totals(game: Game) -> None:
    for hole in range(9):
        _play(game, hole, OWNER_ID, 4)
        game.set_hole_stats(HoleStats(gir=True, fairway=hole % 2 == 0, putts=2), hole)

    assert game.score_complete(OWNER_ID)
    assert game.stats_complete(OWNER_ID)
    assert game.total_stroke_count(OWNER_ID) == 36
    assert game.hole_stats(3).putts == 2
    assert not game.score_complete("guest")
    assert not game.stats_complete("guest")


def test_game_record_round_trip(game: Game) -> None:
    _play(game, 0, OWNER_ID, 4)
    game.end_date = START + timedelta(hours=2)
    game.duration = 6000.0

    decoded = from_record(Game, to_record(game))

    assert decoded == game


def test_legacy_game_record(game: Game) -> None:
    record = to_record(game)
    record["group"] = record.pop("playerGroup")
    del record["endDate"]
    del record["duration"]

    decoded = from_record(Game, record)

    assert decoded.player_group == game.player_group
    assert decoded.end_date == decoded.start_date
    assert decoded.duration == 0.0


def test_game_without_player_group_is_rejected(game: Game) -> None:
    record = to_record(game)
    del record["playerGroup"]

    with pytest.raises(MissingFieldError) as excinfo:
        from_record(Game, record)

    assert excinfo.value.model == "Game"
