"""Fixed-width minute bucketing for match timelines."""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from constants import DEFAULT_TIMELINE_INTERVAL, DUEL_CATEGORY, PASS_CATEGORY, RECOVERY_EVENT_TYPE, SHOT_EVENT_TYPE
from match_analytics.filters import column_equals
from match_analytics.kpi import successful_mask
from utils import coerce_int, interval_label, round_half_up

logger = logging.getLogger(__name__)

TIMELINE_COLUMNS = [
    "minute",
    "start",
    "end",
    "events",
    "passes",
    "successful_passes",
    "pass_accuracy",
    "duels",
    "duels_won",
    "shots",
    "recoveries",
]


def _interval_width(width: object, default: int) -> int:
    size = coerce_int(width)
    if size is None or size < 1:
        logger.debug("Invalid timeline interval %r; falling back to %d", width, default)
        return default
    return size


def _event_minutes(events: pd.DataFrame) -> np.ndarray:
    """Minutes as ints, with missing or negative minutes counted as minute 0."""
    if events.empty or "minute" not in events.columns:
        return np.zeros(len(events), dtype=int)
    minutes = pd.to_numeric(events["minute"], errors="coerce").astype("float64").fillna(0.0)
    return np.floor(minutes.clip(lower=0.0).to_numpy()).astype(int)


def bucket_events(
    events: pd.DataFrame,
    width: int = DEFAULT_TIMELINE_INTERVAL,
    *,
    default_width: int = DEFAULT_TIMELINE_INTERVAL,
) -> pd.DataFrame:
    """Aggregate events into consecutive ``[i, i + width)`` minute intervals.

    Intervals start at 0 and continue while the start is at or below the
    latest event minute, so the final interval may run past it. With no
    events the result is a single zero interval ``0-width``.
    """
    size = _interval_width(width, default_width)
    if events is None:
        events = pd.DataFrame()

    minutes = _event_minutes(events)
    max_minute = int(minutes.max()) if minutes.size else 0
    bucket = minutes // size

    is_pass = column_equals(events, "event_category", PASS_CATEGORY).to_numpy()
    is_duel = column_equals(events, "event_category", DUEL_CATEGORY).to_numpy()
    is_shot = column_equals(events, "event_type", SHOT_EVENT_TYPE).to_numpy()
    is_recovery = column_equals(events, "event_type", RECOVERY_EVENT_TYPE).to_numpy()
    success = successful_mask(events).to_numpy()

    rows = []
    for idx, start in enumerate(range(0, max_minute + 1, size)):
        in_bucket = bucket == idx
        passes = int(np.sum(in_bucket & is_pass))
        successful_passes = int(np.sum(in_bucket & is_pass & success))
        rows.append({
            "minute": interval_label(start, start + size),
            "start": start,
            "end": start + size,
            "events": int(np.sum(in_bucket)),
            "passes": passes,
            "successful_passes": successful_passes,
            "pass_accuracy": int(round_half_up(successful_passes / passes * 100, 0)) if passes else 0,
            "duels": int(np.sum(in_bucket & is_duel)),
            "duels_won": int(np.sum(in_bucket & is_duel & success)),
            "shots": int(np.sum(in_bucket & is_shot)),
            "recoveries": int(np.sum(in_bucket & is_recovery)),
        })
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
