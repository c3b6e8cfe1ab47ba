"""Telemetry helpers for venue maintenance instrumentation."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Mapping, MutableMapping, Optional

TelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[TelemetryEmitter] = None
_logger = logging.getLogger("golfmap.telemetry")


def set_telemetry_emitter(candidate: TelemetryEmitter | None) -> None:
    """Register a telemetry emitter used for venue instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, dict(payload))
    except Exception:  # pragma: no cover - emitter failures are logged only
        _logger.exception("failed to emit telemetry event %s", event)


def record_affinities_pruned(venue_id: str, *, before: int, after: int) -> None:
    payload: Dict[str, object] = {
        "venueId": venue_id,
        "before": before,
        "after": after,
        "ts": _now_ms(),
    }
    _safe_emit("venue.affinities.pruned", payload)


def record_affinities_disabled(venue_id: str, *, eligible_groups: int) -> None:
    payload: Dict[str, object] = {
        "venueId": venue_id,
        "eligibleGroups": eligible_groups,
        "ts": _now_ms(),
    }
    _safe_emit("venue.affinities.disabled", payload)


__all__ = [
    "TelemetryEmitter",
    "record_affinities_disabled",
    "record_affinities_pruned",
    "set_telemetry_emitter",
]
