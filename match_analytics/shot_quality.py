"""Shot quality heuristic and shot outcome summaries.

The xG value here is a simple distance/angle heuristic for illustration; it is
not a fitted model.
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from constants import BOX_APPROACH_X, BOX_EDGE_X, GOAL_X, GOAL_Y
from match_analytics.schema import OutcomeKind, classify_outcome_series
from utils import safe_float

# Canonical metric columns
COL_XG = "xg"
COL_OUTCOME_KIND = "outcome_kind"
COL_DIST_TO_GOAL = "distance_to_goal"
COL_SHOT_ANGLE = "shot_angle"


def distance_to_goal(x: float, y: float) -> float:
    return math.hypot(GOAL_X - float(x), GOAL_Y - float(y))


def shot_angle(x: float, y: float) -> float:
    """Angle in degrees between the shot line and the goal's centre line."""
    return math.degrees(math.atan2(abs(float(y) - GOAL_Y), abs(GOAL_X - float(x))))


def simple_xg(x: float, y: float) -> float:
    """Heuristic expected-goal probability for a shot taken at ``(x, y)``."""
    fx, fy = safe_float(x), safe_float(y)
    dist = distance_to_goal(fx, fy)
    if fx >= BOX_EDGE_X:
        xg = 0.4 - dist * 0.01 - shot_angle(fx, fy) * 0.003
    elif fx >= BOX_APPROACH_X:
        xg = 0.15 - dist * 0.005
    else:
        xg = 0.05 - dist * 0.001
    return float(np.clip(xg, 0.0, 1.0))


def shot_summary(shots: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of *shots* with geometry, xG and outcome-kind columns."""
    out = shots.copy()
    if out.empty:
        for col in (COL_DIST_TO_GOAL, COL_SHOT_ANGLE, COL_XG):
            out[col] = pd.Series(dtype=float)
        out[COL_OUTCOME_KIND] = pd.Series(dtype=object)
        return out

    xs = pd.to_numeric(out["x"], errors="coerce").fillna(0.0) if "x" in out.columns else pd.Series(0.0, index=out.index)
    ys = pd.to_numeric(out["y"], errors="coerce").fillna(0.0) if "y" in out.columns else pd.Series(0.0, index=out.index)
    out[COL_DIST_TO_GOAL] = [round(distance_to_goal(x, y), 2) for x, y in zip(xs, ys)]
    out[COL_SHOT_ANGLE] = [round(shot_angle(x, y), 2) for x, y in zip(xs, ys)]
    out[COL_XG] = [round(simple_xg(x, y), 4) for x, y in zip(xs, ys)]
    if "outcome" in out.columns:
        out[COL_OUTCOME_KIND] = classify_outcome_series(out["outcome"])
    else:
        out[COL_OUTCOME_KIND] = OutcomeKind.UNKNOWN.serialize()
    return out


def shot_outcome_counts(shots: pd.DataFrame) -> dict[str, int]:
    """Count shots per outcome kind; every kind is present."""
    counts = {kind.serialize(): 0 for kind in OutcomeKind}
    if shots is None or shots.empty or "outcome" not in shots.columns:
        if shots is not None and not shots.empty:
            counts[OutcomeKind.UNKNOWN.serialize()] = int(len(shots))
        return counts
    for kind, count in classify_outcome_series(shots["outcome"]).value_counts().items():
        counts[str(kind)] = int(count)
    return counts
