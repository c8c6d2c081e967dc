"""Conjunctive record filters over snapshot collections.

Filters never mutate their input and always return rows in input order.
"""

from __future__ import annotations

import logging
from typing import Mapping

import numpy as np
import pandas as pd

from constants import (
    DEFENSIVE_EVENT_TYPES,
    DUEL_CATEGORY,
    PASS_CATEGORY,
    PASS_EVENT_TYPES,
    PRESSURE_EVENT_CATEGORIES,
    PRESSURE_EVENT_TYPES,
    SHOT_EVENT_TYPE,
)
from utils import coerce_int

logger = logging.getLogger(__name__)

# Filter key -> record column
FILTER_COLUMNS = {
    "match_id": "match_id",
    "team": "team",
    "player": "player",
    "event_type": "event_type",
    "event_category": "event_category",
    "zone": "zone_3x3",
    "position": "position",
}


def _is_supplied(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True


def _as_mask(result: pd.Series) -> pd.Series:
    return result.fillna(False).astype(bool)


def _all_false(df: pd.DataFrame) -> pd.Series:
    return pd.Series(False, index=df.index, dtype=bool)


def _text(df: pd.DataFrame, column: str) -> pd.Series:
    return df[column].astype("string")


def column_equals(df: pd.DataFrame, column: str, value: object) -> pd.Series:
    """Exact string equality on *column*; False where the column is absent."""
    if column not in df.columns:
        return _all_false(df)
    return _as_mask(_text(df, column) == str(value))


def column_isin(df: pd.DataFrame, column: str, values) -> pd.Series:
    if column not in df.columns:
        return _all_false(df)
    return _as_mask(_text(df, column).isin([str(v) for v in values]))


def match_id_mask(df: pd.DataFrame, value: object) -> pd.Series:
    target = coerce_int(value)
    if target is None or "match_id" not in df.columns:
        return _all_false(df)
    ids = pd.to_numeric(df["match_id"], errors="coerce")
    return _as_mask(ids == target)


def player_mask(df: pd.DataFrame, value: object, column: str = "player") -> pd.Series:
    """Case-insensitive full-name equality."""
    if column not in df.columns:
        return _all_false(df)
    return _as_mask(_text(df, column).str.lower() == str(value).lower())


def position_mask(df: pd.DataFrame, value: object) -> pd.Series:
    if "position" not in df.columns:
        return _all_false(df)
    needle = str(value).lower()
    return _as_mask(_text(df, "position").str.lower().str.contains(needle, regex=False))


def build_mask(df: pd.DataFrame, filters: Mapping[str, object] | None) -> pd.Series:
    """Combine every supplied filter into one boolean row mask."""
    mask = pd.Series(True, index=df.index, dtype=bool)
    if not filters:
        return mask
    unknown = sorted(str(key) for key in set(filters) - set(FILTER_COLUMNS))
    if unknown:
        logger.warning("Unknown filter keys %s; no rows match", unknown)
        return _all_false(df)

    for key, value in filters.items():
        if not _is_supplied(value):
            continue
        if key == "match_id":
            mask &= match_id_mask(df, value)
        elif key == "player":
            mask &= player_mask(df, value)
        elif key == "position":
            mask &= position_mask(df, value)
        else:
            mask &= column_equals(df, FILTER_COLUMNS[key], value)
    return mask


def filter_records(df: pd.DataFrame, filters: Mapping[str, object] | None = None) -> pd.DataFrame:
    """Return the rows of *df* matching every supplied filter (logical AND)."""
    if df is None:
        return pd.DataFrame()
    return df.loc[build_mask(df, filters)].copy()


# ── Named event selections ──────────────────────────────────────────────
# Each selection keeps the rule its view was built on; they are not unified.

def shot_events(events: pd.DataFrame) -> pd.DataFrame:
    return events.loc[column_equals(events, "event_type", SHOT_EVENT_TYPE)].copy()


def pass_events(events: pd.DataFrame) -> pd.DataFrame:
    mask = column_equals(events, "event_category", PASS_CATEGORY) | column_isin(
        events, "event_type", PASS_EVENT_TYPES
    )
    return events.loc[mask].copy()


def defensive_events(events: pd.DataFrame) -> pd.DataFrame:
    mask = column_equals(events, "event_category", DUEL_CATEGORY) | column_isin(
        events, "event_type", DEFENSIVE_EVENT_TYPES
    )
    return events.loc[mask].copy()


def pressure_events(events: pd.DataFrame) -> pd.DataFrame:
    mask = column_isin(events, "event_category", PRESSURE_EVENT_CATEGORIES) | column_isin(
        events, "event_type", PRESSURE_EVENT_TYPES
    )
    return events.loc[mask].copy()


# ── Player list helpers ─────────────────────────────────────────────────

def search_players(players: pd.DataFrame, query: str | None) -> pd.DataFrame:
    """Case-insensitive substring search on player name."""
    if not query:
        return players.copy()
    if "player" not in players.columns:
        return players.iloc[0:0].copy()
    needle = str(query).lower()
    return players.loc[_as_mask(_text(players, "player").str.lower().str.contains(needle, regex=False))].copy()


def sort_by_metric(players: pd.DataFrame, metric: str, ascending: bool = False) -> pd.DataFrame:
    """Stable sort on *metric*; missing values rank as 0."""
    if metric in players.columns:
        key = pd.to_numeric(players[metric], errors="coerce").astype("float64").fillna(0.0).to_numpy()
    else:
        key = np.zeros(len(players))
    order = np.argsort(key if ascending else -key, kind="stable")
    return players.iloc[order].copy()


def top_performers(players: pd.DataFrame, metric: str, count: int = 5) -> pd.DataFrame:
    return sort_by_metric(players, metric).head(max(0, int(count)))
