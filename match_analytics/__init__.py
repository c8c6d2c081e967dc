"""Match analytics aggregation engine."""

from match_analytics.config import EngineConfig, RadarCoefficients
from match_analytics.engine import MatchAnalyticsEngine
from match_analytics.errors import MatchAnalyticsError, NotFoundError
from match_analytics.filters import filter_records
from match_analytics.kpi import conversion_rate, duel_success_rate, overview, pass_accuracy, shot_accuracy
from match_analytics.radar import RadarPoint, radar_profile, team_averages
from match_analytics.schema import OutcomeKind, PositionCategory, classify_outcome, position_category
from match_analytics.store import MatchSnapshot, RecordStore
from match_analytics.timeline import bucket_events
from match_analytics.zones import bin_grid, count_by_zone, locate_cell

__all__ = [
    "EngineConfig",
    "RadarCoefficients",
    "MatchAnalyticsEngine",
    "MatchAnalyticsError",
    "NotFoundError",
    "filter_records",
    "pass_accuracy",
    "duel_success_rate",
    "shot_accuracy",
    "conversion_rate",
    "overview",
    "RadarPoint",
    "radar_profile",
    "team_averages",
    "OutcomeKind",
    "PositionCategory",
    "classify_outcome",
    "position_category",
    "MatchSnapshot",
    "RecordStore",
    "bucket_events",
    "bin_grid",
    "count_by_zone",
    "locate_cell",
]
