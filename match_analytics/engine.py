"""Call surface of the match analytics engine.

Each query reads the store's current snapshot once, so a reload that lands
mid-query cannot mix collections from two loads.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping, Union

import pandas as pd

from constants import HEATMAP_GRID_COMPACT, HEATMAP_GRID_FULL, HEATMAP_GRID_PLAYER, ZONE_CODES
from match_analytics.config import EngineConfig, RadarCoefficients
from match_analytics.errors import NotFoundError
from match_analytics.filters import filter_records, match_id_mask, player_mask, pressure_events
from match_analytics.kpi import overview as overview_stats
from match_analytics.radar import RadarPoint, radar_profile, team_averages
from match_analytics.schema import EVENT_CONTRACT, rows_to_frame
from match_analytics.sources import directory_sources
from match_analytics.store import MatchSnapshot, RecordStore
from match_analytics.timeline import bucket_events
from match_analytics.zones import bin_grid, count_by_zone, zone_matrix
from utils import coerce_int

logger = logging.getLogger(__name__)

EventRows = Union[pd.DataFrame, Iterable[Mapping], None]


def _event_frame(events: EventRows) -> pd.DataFrame:
    if isinstance(events, pd.DataFrame):
        return events
    return rows_to_frame(events, EVENT_CONTRACT)


def _match_filter(match_id: object) -> dict:
    return {} if match_id is None else {"match_id": match_id}


class MatchAnalyticsEngine:
    """Snapshot store plus the filter / bin / bucket / aggregate views over it."""

    def __init__(self, config: EngineConfig | None = None, store: RecordStore | None = None):
        self.config = config or EngineConfig()
        self.store = store or RecordStore()

    # ── Snapshot lifecycle ─────────────────────────────────────────────

    def load_snapshot(self, player_rows, team_rows, event_rows, match_summary) -> None:
        self.store.load(player_rows, team_rows, event_rows, match_summary)

    def reload(self, data_dir: str | Path | None = None) -> dict:
        """Reload every collection from the data directory's standard files."""
        root = data_dir if data_dir is not None else self.config.data_dir
        logger.info("Loading data from %s", root)
        self.store.load(**directory_sources(root))
        return self.health()

    def health(self) -> dict:
        return self.store.health()

    def snapshot(self) -> MatchSnapshot:
        return self.store.current()

    # ── Queries ─────────────────────────────────────────────────────────

    def query_events(self, filters: Mapping[str, object] | None = None) -> pd.DataFrame:
        return filter_records(self.store.current().events, filters)

    def query_players(self, filters: Mapping[str, object] | None = None) -> pd.DataFrame:
        return filter_records(self.store.current().player_stats, filters)

    def query_teams(self, filters: Mapping[str, object] | None = None) -> pd.DataFrame:
        return filter_records(self.store.current().team_stats, filters)

    def get_player(self, name: str, match_id: object = None) -> pd.DataFrame:
        """Stat rows for one player (case-insensitive); raises NotFoundError when none match."""
        return self._player_rows(self.store.current(), name, match_id)

    @staticmethod
    def _player_rows(snapshot: MatchSnapshot, name: str, match_id: object) -> pd.DataFrame:
        players = snapshot.player_stats
        mask = player_mask(players, name)
        if match_id is not None:
            mask &= match_id_mask(players, match_id)
        rows = players.loc[mask].copy()
        if rows.empty:
            raise NotFoundError("player", name)
        return rows

    def list_matches(self) -> dict:
        return self.store.current().match_summary

    def get_match(self, match_id: object) -> dict:
        summary = self.store.current().match_summary
        target = coerce_int(match_id)
        if target is None or coerce_int(summary.get("match_id")) != target:
            raise NotFoundError("match", match_id)
        return summary

    # ── Spatial views ───────────────────────────────────────────────────

    def zone_counts(self, events: EventRows, zone_codes: Iterable[str] = ZONE_CODES) -> dict[str, int]:
        return count_by_zone(_event_frame(events), zone_codes)

    def pressure_zones(self, match_id: object = None) -> dict[str, int]:
        """Defensive-action counts per tactical zone."""
        events = self.query_events(_match_filter(match_id))
        return count_by_zone(pressure_events(events))

    def pressure_matrix(self, match_id: object = None) -> list[list[int]]:
        return zone_matrix(self.pressure_zones(match_id))

    def zone_activity(self, match_id: object = None, event_category: str | None = None, player: str | None = None) -> dict[str, int]:
        events = self.query_events({"match_id": match_id, "event_category": event_category, "player": player})
        return count_by_zone(events)

    def heatmap_grid(self, events: EventRows, n: int = HEATMAP_GRID_FULL) -> pd.DataFrame:
        return bin_grid(_event_frame(events), n)

    def compact_heatmap(self, events: EventRows) -> pd.DataFrame:
        return bin_grid(_event_frame(events), HEATMAP_GRID_COMPACT)

    def player_heatmap(self, name: str, match_id: object = None, n: int = HEATMAP_GRID_PLAYER) -> pd.DataFrame:
        events = self.query_events({"player": name, "match_id": match_id})
        return bin_grid(events, n)

    # ── Timeline ────────────────────────────────────────────────────────

    def timeline(self, events: EventRows, width_minutes: int | None = None) -> pd.DataFrame:
        width = self.config.timeline_interval if width_minutes is None else width_minutes
        return bucket_events(_event_frame(events), width, default_width=self.config.timeline_interval)

    def match_timeline(self, match_id: object = None, width_minutes: int | None = None) -> pd.DataFrame:
        return self.timeline(self.query_events(_match_filter(match_id)), width_minutes)

    # ── KPIs ────────────────────────────────────────────────────────────

    def overview(self, events: EventRows, team_row: Mapping | pd.Series | None = None) -> dict:
        return overview_stats(_event_frame(events), team_row)

    def match_overview(self, match_id: object = None) -> dict:
        """Overview for a match, merged with its first team-stat row."""
        snapshot = self.store.current()
        events = filter_records(snapshot.events, _match_filter(match_id))
        teams = filter_records(snapshot.team_stats, _match_filter(match_id))
        team_row = teams.iloc[0] if not teams.empty else None
        return overview_stats(events, team_row)

    # ── Radar ───────────────────────────────────────────────────────────

    def radar(
        self,
        player: Mapping | pd.Series,
        baseline: Mapping | pd.Series,
        coefficients: RadarCoefficients | Mapping[str, object] | None = None,
    ) -> list[RadarPoint]:
        return radar_profile(player, baseline, coefficients or self.config.radar)

    def player_radar(self, name: str, match_id: object = None) -> list[RadarPoint]:
        """Radar for a player against the outfield averages of the same match."""
        snapshot = self.store.current()
        player = self._player_rows(snapshot, name, match_id).iloc[0]
        player_match = player.get("match_id")
        peers = filter_records(snapshot.player_stats, _match_filter(None if pd.isna(player_match) else player_match))
        return radar_profile(player, team_averages(peers), self.config.radar)
