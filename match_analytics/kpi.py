"""Rate-based match KPIs.

All rates share one policy: a zero denominator yields 0, and results are
percentages rounded half-up to one decimal.
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from constants import (
    BREAKDOWN_CATEGORIES,
    DUEL_CATEGORY,
    ON_TARGET_TOKEN,
    PASS_CATEGORY,
    PROGRESSIVE_PASS_OUTCOME,
    RECOVERY_EVENT_TYPE,
    SHOT_EVENT_TYPE,
)
from match_analytics.filters import column_equals
from match_analytics.schema import flag_series
from utils import round_half_up, safe_ratio

BREAKDOWN_COLUMNS = ["category", "count", "successful", "success_rate"]


def safe_rate(numerator, denominator, digits: int = 1) -> float:
    """``numerator / denominator`` as a percentage; 0 when the denominator is 0."""
    return round_half_up(safe_ratio(numerator, denominator) * 100, digits)


def pass_accuracy(successful, attempted) -> float:
    return safe_rate(successful, attempted)


def duel_success_rate(won, attempted) -> float:
    return safe_rate(won, attempted)


def shot_accuracy(on_target, attempted) -> float:
    return safe_rate(on_target, attempted)


def conversion_rate(goals, shots) -> float:
    return safe_rate(goals, shots)


def successful_mask(events: pd.DataFrame) -> pd.Series:
    if "is_successful" not in events.columns:
        return pd.Series(False, index=events.index, dtype=bool)
    return flag_series(events["is_successful"]).fillna(False).astype(bool)


def contains_mask(events: pd.DataFrame, column: str, token: str) -> pd.Series:
    """Case-sensitive substring match; False where the column is absent."""
    if column not in events.columns:
        return pd.Series(False, index=events.index, dtype=bool)
    found = events[column].astype("string").str.contains(token, regex=False)
    return found.fillna(False).astype(bool)


def _plain(value):
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NA or value is pd.NaT:
        return None
    return value


def row_to_dict(row: Mapping | pd.Series | None) -> dict:
    if row is None:
        return {}
    items = row.items()
    return {str(key): _plain(value) for key, value in items}


def derive_overview_counts(events: pd.DataFrame) -> dict:
    """Counts and rates derived from an event set, before any team-row merge."""
    if events is None:
        events = pd.DataFrame()
    success = successful_mask(events)
    is_shot = column_equals(events, "event_type", SHOT_EVENT_TYPE)
    is_pass = column_equals(events, "event_category", PASS_CATEGORY)
    is_duel = column_equals(events, "event_category", DUEL_CATEGORY)

    total_shots = int(is_shot.sum())
    shots_on_target = int((is_shot & contains_mask(events, "outcome", ON_TARGET_TOKEN)).sum())
    total_passes = int(is_pass.sum())
    successful_passes = int((is_pass & success).sum())
    total_duels = int(is_duel.sum())
    duels_won = int((is_duel & success).sum())

    return {
        "total_shots": total_shots,
        "shots_on_target": shots_on_target,
        "total_passes": total_passes,
        "successful_passes": successful_passes,
        "pass_accuracy": pass_accuracy(successful_passes, total_passes),
        "progressive_passes": int(column_equals(events, "outcome", PROGRESSIVE_PASS_OUTCOME).sum()),
        "total_duels": total_duels,
        "duels_won": duels_won,
        "duel_success_rate": duel_success_rate(duels_won, total_duels),
        "recoveries": int(column_equals(events, "event_type", RECOVERY_EVENT_TYPE).sum()),
        "total_events": int(len(events)),
    }


def overview(events: pd.DataFrame, team_row: Mapping | pd.Series | None = None) -> dict:
    """Derived event counts merged with the raw team row.

    Merge precedence: on any key present in both, the raw team row wins over
    the value derived from events.
    """
    merged = derive_overview_counts(events)
    merged.update(row_to_dict(team_row))
    return merged


def event_breakdown(events: pd.DataFrame, categories: Iterable[str] = BREAKDOWN_CATEGORIES) -> pd.DataFrame:
    """Per-category counts where either ``event_category`` or ``event_type`` equals the category."""
    if events is None:
        events = pd.DataFrame()
    success = successful_mask(events)
    rows = []
    for category in categories:
        in_category = column_equals(events, "event_category", category) | column_equals(
            events, "event_type", category
        )
        count = int(in_category.sum())
        successful = int((in_category & success).sum())
        rows.append({
            "category": category,
            "count": count,
            "successful": successful,
            "success_rate": int(safe_rate(successful, count, digits=0)),
        })
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
