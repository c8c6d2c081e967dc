import math
import unittest

import pandas as pd

from constants import ZONE_CODES
from match_analytics.zones import (
    assign_zones,
    bin_grid,
    count_by_zone,
    field_third,
    lane,
    locate_cell,
    zone_center,
    zone_for_point,
    zone_label,
    zone_matrix,
    zone_share,
)


def _points(coords):
    return pd.DataFrame([{"x": x, "y": y} for x, y in coords])


class LocateCellTests(unittest.TestCase):
    def test_lower_bound_is_inclusive(self):
        self.assertEqual(locate_cell(10, 10, 10), (1, 1))
        self.assertEqual(locate_cell(0, 0, 3), (0, 0))

    def test_upper_edge_falls_in_last_cell(self):
        self.assertEqual(locate_cell(100, 100, 3), (2, 2))
        self.assertEqual(locate_cell(100, 0, 10), (0, 9))

    def test_out_of_range_coordinates_are_clamped(self):
        self.assertEqual(locate_cell(-5, 120, 3), (2, 0))

    def test_missing_coordinates_have_no_cell(self):
        self.assertIsNone(locate_cell(None, 5))
        self.assertIsNone(locate_cell(float("nan"), 5))

    def test_tactical_zone_codes_and_labels(self):
        self.assertEqual(zone_for_point(10, 90), "R3C1")
        self.assertEqual(zone_for_point(90, 10), "R1C3")
        self.assertEqual(zone_label("R3C1"), "Def Left")
        self.assertEqual(zone_label("R1C3"), "Att Right")
        self.assertEqual(zone_label("R2C2"), "Mid Center")

    def test_zone_center(self):
        x, y = zone_center("R2C2")
        self.assertAlmostEqual(x, 50.0)
        self.assertAlmostEqual(y, 50.0)
        self.assertEqual(zone_center("R9C9"), (50.0, 50.0))

    def test_thirds_and_lanes(self):
        self.assertEqual(field_third(10), "Defensive Third")
        self.assertEqual(field_third(50), "Middle Third")
        self.assertEqual(field_third(80), "Attacking Third")
        self.assertEqual(lane(10), "Right Lane")
        self.assertEqual(lane(50), "Central Lane")
        self.assertEqual(lane(90), "Left Lane")


def test_count_by_zone_reports_every_requested_zone():
    events = pd.DataFrame({"zone_3x3": ["R1C1", "R1C1", "R2C2", "bogus", None]})

    counts = count_by_zone(events)

    assert list(counts.keys()) == list(ZONE_CODES)
    assert counts["R1C1"] == 2
    assert counts["R2C2"] == 1
    assert counts["R3C3"] == 0
    assert sum(counts.values()) == 3


def test_count_by_zone_with_custom_codes_and_empty_input():
    events = pd.DataFrame({"zone_3x3": ["R1C1", "R1C1"]})

    assert count_by_zone(events, ["R1C1", "R9C9"]) == {"R1C1": 2, "R9C9": 0}
    assert count_by_zone(pd.DataFrame(), ["R1C1", "R1C2"]) == {"R1C1": 0, "R1C2": 0}


def test_count_by_zone_trusts_preassigned_zone_over_coordinates():
    events = pd.DataFrame([{"x": 95.0, "y": 95.0, "zone_3x3": "R1C1"}])

    counts = count_by_zone(events)

    assert counts["R1C1"] == 1
    assert counts["R3C3"] == 0


def test_bin_grid_has_n_squared_cells_and_counts_only_on_pitch_points():
    events = _points([(100, 100), (0, 0), (50, 50), (-1, 50), (50, 101), (float("nan"), 10)])

    for n in (1, 3, 6, 8, 10):
        grid = bin_grid(events, n)
        assert len(grid) == n * n
        assert int(grid["value"].sum()) == 3


def test_bin_grid_cell_layout_and_centres():
    events = _points([(100, 100), (50, 50), (55, 51)])

    grid = bin_grid(events, 10)

    first = grid.iloc[0]
    assert (first["x"], first["y"], first["row"], first["col"]) == (5.0, 5.0, 0, 0)
    centre = grid[(grid["row"] == 5) & (grid["col"] == 5)].iloc[0]
    assert centre["value"] == 2
    assert (centre["x"], centre["y"]) == (55.0, 55.0)
    corner = grid.iloc[-1]
    assert (corner["row"], corner["col"], corner["value"]) == (9, 9, 1)
    assert list(grid.columns) == ["x", "y", "value", "row", "col"]


def test_bin_grid_is_pure():
    events = _points([(12, 34), (56, 78)])
    before = events.copy()

    first = bin_grid(events, 6)
    second = bin_grid(events, 6)

    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(events, before)


def test_bin_grid_invalid_size_falls_back_to_full_field():
    grid = bin_grid(pd.DataFrame(), 0)

    assert len(grid) == 100
    assert int(grid["value"].sum()) == 0


def test_assign_zones_rebins_from_coordinates():
    events = pd.DataFrame(
        [
            {"x": 90.0, "y": 10.0, "zone_3x3": "R2C2"},
            {"x": None, "y": None, "zone_3x3": "R3C3"},
            {"x": 100.0, "y": 100.0, "zone_3x3": None},
        ]
    )

    out = assign_zones(events)

    assert out["zone_3x3"].tolist() == ["R1C3", "R3C3", "R3C3"]
    assert events["zone_3x3"].tolist()[0] == "R2C2"


def test_zone_share():
    assert zone_share({"R1C1": 1, "R1C2": 3}) == {"R1C1": 25.0, "R1C2": 75.0}
    assert zone_share({"R1C1": 0}) == {"R1C1": 0.0}
    assert not math.isnan(sum(zone_share({"R1C1": 1, "R1C2": 2}).values()))


def test_zone_matrix_puts_left_lane_on_top():
    counts = {"R1C1": 1, "R2C2": 5, "R3C1": 7, "R3C3": 2}

    assert zone_matrix(counts) == [[7, 0, 2], [0, 5, 0], [1, 0, 0]]
