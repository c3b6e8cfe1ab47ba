"""Shared pytest fixtures for golfmap tests."""

from __future__ import annotations

from typing import Callable, List, Mapping, Tuple

import pytest

from golfmap import telemetry
from golfmap.config import reset_settings_cache
from golfmap.courses import Hole, HoleGroup, Par
from golfmap.geo import Area, Coordinate

PAR_CYCLE = (Par.PAR4, Par.PAR3, Par.PAR5)


def _area(lat: float, lon: float) -> Area:
    return Area(
        start=Coordinate(lat=lat, lon=lon),
        end=Coordinate(lat=lat + 0.0004, lon=lon + 0.0002),
    )


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GOLFMAP_VENUES_DIR", raising=False)
    monkeypatch.delenv("GOLFMAP_DEFAULT_COUNTRY_CODE", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def make_group() -> Callable[..., HoleGroup]:
    """Build a hole group whose pars cycle 4, 3, 5 (72 over 18 holes)."""

    def _make(
        name: str,
        hole_count: int = 18,
        *,
        practice: bool = False,
        indivisible: bool = False,
        base_lat: float = 50.0,
    ) -> HoleGroup:
        holes = [
            Hole(
                par=PAR_CYCLE[index % len(PAR_CYCLE)],
                tee=_area(base_lat + index * 0.001, 4.0),
                green=_area(base_lat + index * 0.001 + 0.0005, 4.003),
            )
            for index in range(hole_count)
        ]
        return HoleGroup(name=name, holes=holes, practice=practice, indivisible=indivisible)

    return _make


@pytest.fixture
def telemetry_events() -> List[Tuple[str, Mapping[str, object]]]:
    events: List[Tuple[str, Mapping[str, object]]] = []
    telemetry.set_telemetry_emitter(lambda name, payload: events.append((name, payload)))
    yield events
    telemetry.set_telemetry_emitter(None)
