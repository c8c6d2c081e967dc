"""In-memory record store holding the active match snapshot.

A snapshot is built completely before it is published, and publishing is a
single attribute assignment, so readers see either the old or the new
collections and never a mix of the two.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, Mapping, Union

import pandas as pd

from match_analytics.schema import (
    EVENT_CONTRACT,
    PLAYER_STAT_CONTRACT,
    TEAM_STAT_CONTRACT,
    TableContract,
    rows_to_frame,
)

logger = logging.getLogger(__name__)

RowSource = Union[pd.DataFrame, Iterable[Mapping], None, Callable[[], object]]
SummarySource = Union[Mapping, None, Callable[[], object]]


class MatchSnapshot:
    """Read-only bundle of player, team, event and match-summary collections.

    Accessors hand out copies, so callers can never reach the frames the
    store publishes.
    """

    __slots__ = ("_player_stats", "_team_stats", "_events", "_match_summary", "_loaded_at")

    def __init__(
        self,
        player_stats: pd.DataFrame,
        team_stats: pd.DataFrame,
        events: pd.DataFrame,
        match_summary: Mapping[str, object],
        loaded_at: datetime | None = None,
    ):
        self._player_stats = player_stats
        self._team_stats = team_stats
        self._events = events
        self._match_summary = dict(match_summary)
        self._loaded_at = loaded_at

    @classmethod
    def empty(cls) -> "MatchSnapshot":
        return cls(
            player_stats=PLAYER_STAT_CONTRACT.empty(),
            team_stats=TEAM_STAT_CONTRACT.empty(),
            events=EVENT_CONTRACT.empty(),
            match_summary={},
            loaded_at=None,
        )

    @property
    def player_stats(self) -> pd.DataFrame:
        return self._player_stats.copy()

    @property
    def team_stats(self) -> pd.DataFrame:
        return self._team_stats.copy()

    @property
    def events(self) -> pd.DataFrame:
        return self._events.copy()

    @property
    def match_summary(self) -> dict:
        return dict(self._match_summary)

    @property
    def loaded_at(self) -> datetime | None:
        return self._loaded_at

    @property
    def is_loaded(self) -> bool:
        return self._loaded_at is not None

    def counts(self) -> dict[str, int]:
        return {
            "players": int(len(self._player_stats)),
            "teams": int(len(self._team_stats)),
            "events": int(len(self._events)),
        }


def _materialize(source):
    return source() if callable(source) else source


def _materialize_table(name: str, source: RowSource, contract: TableContract) -> pd.DataFrame:
    try:
        return rows_to_frame(_materialize(source), contract)
    except Exception as exc:
        logger.warning("Failed to load %s; continuing with an empty collection: %s", name, exc)
        return contract.empty()


def _materialize_summary(source: SummarySource) -> dict:
    try:
        raw = _materialize(source)
    except Exception as exc:
        logger.warning("Failed to load match summary; continuing with an empty record: %s", exc)
        return {}
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        logger.warning("Ignoring match summary of type %s; expected a mapping", type(raw).__name__)
        return {}
    return dict(raw)


def build_snapshot(
    player_stats: RowSource,
    team_stats: RowSource,
    events: RowSource,
    match_summary: SummarySource,
    *,
    loaded_at: datetime | None = None,
) -> MatchSnapshot:
    """Materialize all four sources into a new snapshot.

    A source that raises or cannot be framed is replaced by an empty
    collection; the other sources are unaffected.
    """
    return MatchSnapshot(
        player_stats=_materialize_table("player stats", player_stats, PLAYER_STAT_CONTRACT),
        team_stats=_materialize_table("team stats", team_stats, TEAM_STAT_CONTRACT),
        events=_materialize_table("events", events, EVENT_CONTRACT),
        match_summary=_materialize_summary(match_summary),
        loaded_at=loaded_at or datetime.now(timezone.utc),
    )


class RecordStore:
    """Owner of the active snapshot; the state goes unloaded -> loaded -> reloaded."""

    def __init__(self):
        self._snapshot = MatchSnapshot.empty()
        self._write_lock = threading.Lock()

    def load(
        self,
        player_stats: RowSource,
        team_stats: RowSource,
        events: RowSource,
        match_summary: SummarySource,
    ) -> MatchSnapshot:
        """Build a snapshot from the given sources and publish it."""
        with self._write_lock:
            snapshot = build_snapshot(player_stats, team_stats, events, match_summary)
            self._snapshot = snapshot
        counts = snapshot.counts()
        logger.info(
            "Loaded: %d players, %d teams, %d events",
            counts["players"],
            counts["teams"],
            counts["events"],
        )
        return snapshot

    def current(self) -> MatchSnapshot:
        return self._snapshot

    def health(self) -> dict:
        snapshot = self._snapshot
        return {
            "status": "ok",
            "data_loaded": snapshot.is_loaded,
            "loaded_at": snapshot.loaded_at,
            **snapshot.counts(),
        }
