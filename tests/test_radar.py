import pandas as pd
import pytest

from match_analytics.config import RadarCoefficients
from match_analytics.radar import RadarPoint, radar_profile, team_averages


def _point(points, metric):
    return next(p for p in points if p.metric == metric)


def test_recoveries_scale_linearly_and_clamp_at_full_mark():
    points = radar_profile({"recoveries": 10}, {"recoveries": 5}, {"recoveries": 7})
    recoveries = _point(points, "Recoveries")
    assert (recoveries.player_value, recoveries.baseline_value) == (70.0, 35.0)

    clamped = _point(radar_profile({"recoveries": 20}, {"recoveries": 5}, {"recoveries": 7}), "Recoveries")
    assert clamped.player_value == 100.0


def test_profile_has_five_points_in_fixed_order():
    points = radar_profile({}, {})

    assert [p.metric for p in points] == [
        "Pass Accuracy",
        "Duel Success",
        "Shot Accuracy",
        "Recoveries",
        "Involvement",
    ]
    assert all(p.full_mark == 100 for p in points)
    assert all(p.player_value == 0 and p.baseline_value == 0 for p in points)


def test_percentages_pass_through_and_touches_use_default_coefficient():
    player = {"pass_accuracy": 85.5, "duel_success_rate": 40, "shot_accuracy": 33.3, "total_touches": 40}
    baseline = {"pass_accuracy": 70, "total_touches": 80}

    points = radar_profile(player, baseline)

    assert _point(points, "Pass Accuracy").player_value == 85.5
    assert _point(points, "Shot Accuracy").player_value == 33.3
    involvement = _point(points, "Involvement")
    assert involvement.player_value == pytest.approx(60.0)
    assert involvement.baseline_value == 100.0


def test_coefficients_are_configurable():
    coefficients = RadarCoefficients.from_mapping({"total_touches": 2})

    points = radar_profile({"total_touches": 40, "recoveries": 3}, {}, coefficients)

    assert _point(points, "Involvement").player_value == 80.0
    assert _point(points, "Recoveries").player_value == 21.0


def test_profile_accepts_series_rows_with_missing_values():
    player = pd.Series({"pass_accuracy": float("nan"), "recoveries": 2})

    points = radar_profile(player, {"recoveries": None})

    assert _point(points, "Pass Accuracy").player_value == 0.0
    assert _point(points, "Recoveries").player_value == 14.0
    assert _point(points, "Recoveries").baseline_value == 0.0


def test_radar_point_as_dict():
    point = RadarPoint(metric="Recoveries", player_value=70, baseline_value=35)

    assert point.as_dict() == {
        "metric": "Recoveries",
        "player_value": 70.0,
        "baseline_value": 35.0,
        "full_mark": 100.0,
    }


def test_team_averages_exclude_goalkeepers():
    players = pd.DataFrame(
        [
            {"player": "Keeper", "position": "Goalkeeper", "recoveries": 1, "total_touches": 30, "pass_accuracy": 90},
            {"player": "A", "position": "Centre Back", "recoveries": 4, "total_touches": 50, "pass_accuracy": 80},
            {"player": "B", "position": "Striker", "recoveries": 6, "total_touches": None, "pass_accuracy": 60},
        ]
    )

    averages = team_averages(players)

    assert averages["recoveries"] == 5.0
    assert averages["total_touches"] == 25.0
    assert averages["pass_accuracy"] == 70.0
    assert averages["shot_accuracy"] == 0.0


def test_team_averages_of_empty_or_keeper_only_squads_are_zero():
    keepers = pd.DataFrame([{"player": "GK", "position": "gk", "recoveries": 3}])

    assert team_averages(pd.DataFrame()) == {
        "pass_accuracy": 0.0,
        "duel_success_rate": 0.0,
        "shot_accuracy": 0.0,
        "recoveries": 0.0,
        "total_touches": 0.0,
    }
    assert team_averages(keepers)["recoveries"] == 0.0
