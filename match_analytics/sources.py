"""File-backed sources for :meth:`RecordStore.load`.

Each source is a zero-argument callable so the store can materialize it
inside its own failure boundary.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pandas as pd

from constants import EVENTS_FILE, MATCH_SUMMARY_FILE, PLAYER_STATS_FILE, TEAM_STATS_FILE


def csv_source(path: str | Path) -> Callable[[], pd.DataFrame]:
    """Return a loader reading *path* as CSV with blank lines skipped."""

    def _load() -> pd.DataFrame:
        return pd.read_csv(path, skip_blank_lines=True)

    return _load


def json_source(path: str | Path) -> Callable[[], object]:
    def _load():
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)

    return _load


def directory_sources(data_dir: str | Path) -> dict[str, Callable[[], object]]:
    """Map store argument names to loaders for the standard data files."""
    root = Path(data_dir)
    return {
        "player_stats": csv_source(root / PLAYER_STATS_FILE),
        "team_stats": csv_source(root / TEAM_STATS_FILE),
        "events": csv_source(root / EVENTS_FILE),
        "match_summary": json_source(root / MATCH_SUMMARY_FILE),
    }
