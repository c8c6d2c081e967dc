import unittest

import pandas as pd
import pytest

from match_analytics.schema import OutcomeKind, classify_outcome
from match_analytics.shot_quality import (
    COL_OUTCOME_KIND,
    COL_XG,
    shot_outcome_counts,
    shot_summary,
    simple_xg,
)


class ClassifyOutcomeTests(unittest.TestCase):
    def test_ordered_case_insensitive_matching(self):
        self.assertEqual(classify_outcome("Goal - On Target"), OutcomeKind.GOAL)
        self.assertEqual(classify_outcome("on TARGET"), OutcomeKind.ON_TARGET)
        self.assertEqual(classify_outcome("Blocked"), OutcomeKind.BLOCKED)
        self.assertEqual(classify_outcome("Wide"), OutcomeKind.OFF_TARGET)

    def test_missing_outcome_is_unknown(self):
        self.assertEqual(classify_outcome(None), OutcomeKind.UNKNOWN)
        self.assertEqual(classify_outcome("  "), OutcomeKind.UNKNOWN)
        self.assertEqual(classify_outcome(float("nan")), OutcomeKind.UNKNOWN)


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (95, 50, 0.35),
        (100, 50, 0.4),
        (80, 50, 0.05),
        (10, 0, 0.0),
    ],
)
def test_simple_xg_bands(x, y, expected):
    assert simple_xg(x, y) == pytest.approx(expected)


def test_simple_xg_stays_within_probability_range():
    for x in range(0, 101, 10):
        for y in range(0, 101, 25):
            assert 0.0 <= simple_xg(x, y) <= 1.0


def test_shot_summary_adds_columns_without_touching_input():
    shots = pd.DataFrame(
        [
            {"player": "A", "x": 95.0, "y": 50.0, "outcome": "Goal"},
            {"player": "B", "x": None, "y": 40.0, "outcome": "Off Target"},
        ]
    )
    before = shots.copy()

    out = shot_summary(shots)

    assert out[COL_XG].iloc[0] == pytest.approx(0.35)
    assert out[COL_OUTCOME_KIND].tolist() == ["goal", "off_target"]
    assert {"distance_to_goal", "shot_angle"} <= set(out.columns)
    pd.testing.assert_frame_equal(shots, before)


def test_shot_summary_of_empty_frame_keeps_schema():
    out = shot_summary(pd.DataFrame(columns=["x", "y", "outcome"]))

    assert out.empty
    assert {COL_XG, COL_OUTCOME_KIND, "distance_to_goal", "shot_angle"} <= set(out.columns)


def test_shot_outcome_counts_reports_every_kind():
    shots = pd.DataFrame({"outcome": ["Goal", "On Target", "on target", "Blocked", None]})

    counts = shot_outcome_counts(shots)

    assert counts == {"goal": 1, "on_target": 2, "blocked": 1, "off_target": 0, "unknown": 1}
    assert shot_outcome_counts(pd.DataFrame()) == {
        "goal": 0,
        "on_target": 0,
        "blocked": 0,
        "off_target": 0,
        "unknown": 0,
    }
