"""Radar normalization of player metrics against a baseline profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import pandas as pd

from constants import RADAR_FULL_MARK
from match_analytics.config import RadarCoefficients
from match_analytics.schema import PositionCategory, position_category
from utils import safe_float

RADAR_INPUTS = ("pass_accuracy", "duel_success_rate", "shot_accuracy", "recoveries", "total_touches")

# (label, input field, coefficient name or None for percentages)
RADAR_METRICS = (
    ("Pass Accuracy", "pass_accuracy", None),
    ("Duel Success", "duel_success_rate", None),
    ("Shot Accuracy", "shot_accuracy", None),
    ("Recoveries", "recoveries", "recoveries"),
    ("Involvement", "total_touches", "total_touches"),
)


@dataclass(frozen=True)
class RadarPoint:
    """One radar axis: player and baseline on the shared 0-100 scale."""

    metric: str
    player_value: float
    baseline_value: float
    full_mark: float = RADAR_FULL_MARK

    def as_dict(self) -> dict[str, float | str]:
        return {
            "metric": self.metric,
            "player_value": float(self.player_value),
            "baseline_value": float(self.baseline_value),
            "full_mark": float(self.full_mark),
        }


def scale_count(raw: object, coefficient: float) -> float:
    """Linear scaling clamped at the full mark."""
    return min(safe_float(raw) * float(coefficient), RADAR_FULL_MARK)


def _value(profile: Mapping | pd.Series, field: str) -> float:
    return safe_float(profile.get(field, 0.0))


def radar_profile(
    player: Mapping | pd.Series,
    baseline: Mapping | pd.Series,
    coefficients: RadarCoefficients | Mapping[str, object] | None = None,
) -> list[RadarPoint]:
    """Five radar points in fixed order.

    Percentage metrics pass through unchanged; count metrics are scaled as
    ``min(raw * coefficient, 100)``.
    """
    if not isinstance(coefficients, RadarCoefficients):
        coefficients = RadarCoefficients.from_mapping(coefficients)
    points = []
    for label, field, coefficient_name in RADAR_METRICS:
        player_raw = _value(player, field)
        baseline_raw = _value(baseline, field)
        if coefficient_name is not None:
            factor = getattr(coefficients, coefficient_name)
            player_raw = scale_count(player_raw, factor)
            baseline_raw = scale_count(baseline_raw, factor)
        points.append(RadarPoint(metric=label, player_value=player_raw, baseline_value=baseline_raw))
    return points


def team_averages(players: pd.DataFrame) -> dict[str, float]:
    """Mean radar inputs over outfield players (goalkeepers excluded)."""
    if players is None or players.empty:
        return {field: 0.0 for field in RADAR_INPUTS}
    if "position" in players.columns:
        is_keeper = players["position"].map(lambda pos: position_category(pos) == PositionCategory.GOALKEEPER)
        outfield = players.loc[~is_keeper.astype(bool)]
    else:
        outfield = players
    count = max(len(outfield), 1)
    averages = {}
    for field in RADAR_INPUTS:
        if field not in outfield.columns or outfield.empty:
            averages[field] = 0.0
            continue
        averages[field] = sum(safe_float(v) for v in outfield[field]) / count
    return averages
