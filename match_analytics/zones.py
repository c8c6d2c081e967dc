"""Spatial binning of pitch coordinates into tactical zones and heatmap grids.

One cell rule serves every grid size: for an ``n x n`` grid a point belongs
to ``row = floor(y / (100 / n))``, ``col = floor(x / (100 / n))``, clamped to
``[0, n - 1]`` so that a coordinate of exactly 100 lands in the last cell.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from constants import (
    FIELD_HEIGHT,
    FIELD_WIDTH,
    HEATMAP_GRID_FULL,
    TACTICAL_GRID_SIZE,
    THIRD_HIGH,
    THIRD_LOW,
    ZONE_CODES,
    ZONE_DISPLAY_ORDER,
    ZONE_LABELS,
)
from utils import coerce_int, round_half_up

logger = logging.getLogger(__name__)

HEATMAP_COLUMNS = ["x", "y", "value", "row", "col"]


def _grid_size(n: object, default: int) -> int:
    size = coerce_int(n)
    if size is None or size < 1:
        logger.debug("Invalid grid size %r; falling back to %d", n, default)
        return default
    return size


def _cell_indices(values: np.ndarray, extent: float, n: int) -> np.ndarray:
    cell = extent / n
    return np.clip(np.floor(values / cell), 0, n - 1).astype(int)


def locate_cell(x: float, y: float, n: int = TACTICAL_GRID_SIZE) -> tuple[int, int] | None:
    """Return the 0-indexed ``(row, col)`` of a point, or None without coordinates."""
    try:
        fx, fy = float(x), float(y)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(fx) and math.isfinite(fy)):
        return None
    size = _grid_size(n, TACTICAL_GRID_SIZE)
    row = int(_cell_indices(np.array([fy]), FIELD_HEIGHT, size)[0])
    col = int(_cell_indices(np.array([fx]), FIELD_WIDTH, size)[0])
    return row, col


def zone_code(row: int, col: int) -> str:
    """Canonical 1-indexed code for a 0-indexed tactical cell."""
    return f"R{int(row) + 1}C{int(col) + 1}"


def zone_for_point(x: float, y: float) -> str | None:
    cell = locate_cell(x, y, TACTICAL_GRID_SIZE)
    if cell is None:
        return None
    return zone_code(*cell)


def zone_label(code: str) -> str | None:
    return ZONE_LABELS.get(code)


def zone_center(code: str) -> tuple[float, float]:
    """Centre of a tactical zone; unknown codes map to the centre spot."""
    if code not in ZONE_LABELS:
        return FIELD_WIDTH / 2, FIELD_HEIGHT / 2
    row, col = int(code[1]) - 1, int(code[3]) - 1
    width = FIELD_WIDTH / TACTICAL_GRID_SIZE
    height = FIELD_HEIGHT / TACTICAL_GRID_SIZE
    return col * width + width / 2, row * height + height / 2


def field_third(x: float) -> str:
    if x < THIRD_LOW:
        return "Defensive Third"
    if x < THIRD_HIGH:
        return "Middle Third"
    return "Attacking Third"


def lane(y: float) -> str:
    if y < THIRD_LOW:
        return "Right Lane"
    if y < THIRD_HIGH:
        return "Central Lane"
    return "Left Lane"


def count_by_zone(events: pd.DataFrame, zone_codes: Iterable[str] = ZONE_CODES) -> dict[str, int]:
    """Count events per requested zone code using the pre-assigned ``zone_3x3``.

    Every requested code is present in the result, with 0 when unmatched.
    """
    codes = list(zone_codes)
    if events is None or events.empty or "zone_3x3" not in events.columns:
        return {code: 0 for code in codes}
    counts = events["zone_3x3"].astype("string").value_counts(dropna=True)
    return {code: int(counts.get(code, 0)) for code in codes}


def zone_share(counts: Mapping[str, int]) -> dict[str, float]:
    """Percentage of the total per zone; all 0 when the total is 0."""
    total = sum(int(v) for v in counts.values())
    if total == 0:
        return {code: 0.0 for code in counts}
    return {code: round_half_up(int(v) / total * 100, 1) for code, v in counts.items()}


def zone_matrix(counts: Mapping[str, int]) -> list[list[int]]:
    """Arrange zone counts as a 3x3 grid, left lane on top and defensive third on the left."""
    order = list(ZONE_DISPLAY_ORDER)
    size = TACTICAL_GRID_SIZE
    return [[int(counts.get(code, 0)) for code in order[i:i + size]] for i in range(0, len(order), size)]


def _coordinates(events: pd.DataFrame) -> tuple[np.ndarray, np.ndarray]:
    if events is None or events.empty or "x" not in events.columns or "y" not in events.columns:
        return np.array([], dtype=float), np.array([], dtype=float)
    xs = pd.to_numeric(events["x"], errors="coerce").astype("float64").to_numpy()
    ys = pd.to_numeric(events["y"], errors="coerce").astype("float64").to_numpy()
    return xs, ys


def bin_grid(events: pd.DataFrame, n: int = HEATMAP_GRID_FULL) -> pd.DataFrame:
    """Count events per cell of an ``n x n`` grid, row-major.

    Returns ``n * n`` rows with the cell centre (``x``, ``y``), the event
    count (``value``) and the 0-indexed ``row``/``col``. Points without
    coordinates or outside the pitch are not counted.
    """
    size = _grid_size(n, HEATMAP_GRID_FULL)
    xs, ys = _coordinates(events)
    on_pitch = (
        np.isfinite(xs)
        & np.isfinite(ys)
        & (xs >= 0)
        & (xs <= FIELD_WIDTH)
        & (ys >= 0)
        & (ys <= FIELD_HEIGHT)
    )
    rows = _cell_indices(ys[on_pitch], FIELD_HEIGHT, size)
    cols = _cell_indices(xs[on_pitch], FIELD_WIDTH, size)
    counts = np.bincount(rows * size + cols, minlength=size * size)

    grid_rows = np.repeat(np.arange(size), size)
    grid_cols = np.tile(np.arange(size), size)
    cell_w = FIELD_WIDTH / size
    cell_h = FIELD_HEIGHT / size
    return pd.DataFrame(
        {
            "x": grid_cols * cell_w + cell_w / 2,
            "y": grid_rows * cell_h + cell_h / 2,
            "value": counts.astype(int),
            "row": grid_rows,
            "col": grid_cols,
        },
        columns=HEATMAP_COLUMNS,
    )


def assign_zones(events: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with ``zone_3x3`` recomputed from x/y where both are present."""
    out = events.copy()
    if "zone_3x3" not in out.columns:
        out["zone_3x3"] = pd.Series(pd.NA, index=out.index, dtype="string")
    xs, ys = _coordinates(out)
    if xs.size == 0:
        return out
    valid = np.isfinite(xs) & np.isfinite(ys)
    rows = _cell_indices(np.where(valid, ys, 0.0), FIELD_HEIGHT, TACTICAL_GRID_SIZE)
    cols = _cell_indices(np.where(valid, xs, 0.0), FIELD_WIDTH, TACTICAL_GRID_SIZE)
    codes = pd.Series([zone_code(r, c) for r, c in zip(rows, cols)], index=out.index, dtype="string")
    out["zone_3x3"] = codes.where(valid, out["zone_3x3"].astype("string"))
    return out
