from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

import pandas as pd

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    GOAL = "goal"
    ON_TARGET = "on_target"
    BLOCKED = "blocked"
    OFF_TARGET = "off_target"
    UNKNOWN = "unknown"

    def serialize(self) -> str:
        return self.value


def classify_outcome(raw: object) -> OutcomeKind:
    """Map free-text shot outcome to an :class:`OutcomeKind`.

    Matching is case-insensitive and ordered: goal, on target, blocked. Any
    other non-empty text counts as off target.
    """
    if isinstance(raw, OutcomeKind):
        return raw
    if raw is None or pd.isna(raw):
        return OutcomeKind.UNKNOWN
    token = str(raw).strip().lower()
    if not token:
        return OutcomeKind.UNKNOWN
    if "goal" in token:
        return OutcomeKind.GOAL
    if "on target" in token:
        return OutcomeKind.ON_TARGET
    if "blocked" in token:
        return OutcomeKind.BLOCKED
    return OutcomeKind.OFF_TARGET


def classify_outcome_series(series: pd.Series) -> pd.Series:
    return series.map(lambda raw: classify_outcome(raw).serialize())


class PositionCategory(str, Enum):
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"


def position_category(raw: object) -> PositionCategory:
    """Normalize free-text player position into one of four categories."""
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return PositionCategory.MIDFIELDER
    pos = str(raw).strip().lower()
    if "goalkeeper" in pos or pos == "gk":
        return PositionCategory.GOALKEEPER
    if "defender" in pos or "back" in pos:
        return PositionCategory.DEFENDER
    if "midfielder" in pos or "mid" in pos:
        return PositionCategory.MIDFIELDER
    if "forward" in pos or "striker" in pos or "wing" in pos:
        return PositionCategory.FORWARD
    return PositionCategory.MIDFIELDER


@dataclass(frozen=True)
class TableContract:
    name: str
    columns: Mapping[str, str]

    def empty(self) -> pd.DataFrame:
        return pd.DataFrame({col: pd.Series(dtype=dtype) for col, dtype in self.columns.items()})


EVENT_CONTRACT = TableContract(
    name="event",
    columns={
        "match_id": "Int64",
        "minute": "Int64",
        "second": "Int64",
        "player": "string",
        "team": "string",
        "event_type": "string",
        "event_category": "string",
        "outcome": "string",
        "x": "float64",
        "y": "float64",
        "zone_3x3": "string",
        "is_successful": "boolean",
    },
)

PLAYER_STAT_CONTRACT = TableContract(
    name="player_stat",
    columns={
        "match_id": "Int64",
        "player": "string",
        "team": "string",
        "position": "string",
        "total_touches": "float64",
        "passes_attempted": "float64",
        "passes_successful": "float64",
        "pass_accuracy": "float64",
        "duels_attempted": "float64",
        "duels_won": "float64",
        "duel_success_rate": "float64",
        "shots_attempted": "float64",
        "shots_on_target": "float64",
        "shot_accuracy": "float64",
        "recoveries": "float64",
        "defensive_actions": "float64",
        "crosses_attempted": "float64",
        "crosses_successful": "float64",
    },
)

TEAM_STAT_CONTRACT = TableContract(
    name="team_stat",
    columns={
        "match_id": "Int64",
        "team": "string",
        "pass_accuracy": "float64",
        "conversion_rate": "float64",
        "defensive_duels_won": "float64",
    },
)

NUMERIC_DTYPES = frozenset({"Int64", "int64", "float64"})

_TRUE_TOKENS = frozenset({"true", "1", "1.0", "yes", "y", "t"})
_FALSE_TOKENS = frozenset({"false", "0", "0.0", "no", "n", "f"})


def parse_flag(value: object):
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return pd.NA
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return pd.NA


def flag_series(series: pd.Series) -> pd.Series:
    """Parse a column of true/false markers into a nullable boolean series."""
    return series.map(parse_flag).astype("boolean")


def _cast_column(series: pd.Series, dtype: str) -> pd.Series:
    if dtype in NUMERIC_DTYPES:
        numeric = pd.to_numeric(series, errors="coerce")
        if dtype == "Int64":
            # Fractional ids/minutes are not valid integers; treat as missing.
            numeric = numeric.where(numeric.isna() | (numeric % 1 == 0))
        return numeric.astype(dtype)
    if dtype == "boolean":
        return flag_series(series)
    if dtype == "string":
        return series.astype("string")
    return series.astype(dtype)


def coerce_table(df: pd.DataFrame | None, contract: TableContract) -> pd.DataFrame:
    """Return a copy of *df* with contract columns present and typed.

    Columns outside the contract are kept, after the contract columns.
    """
    if df is None or df.empty:
        base = contract.empty()
        if df is not None:
            for col in df.columns:
                if col not in base.columns:
                    base[col] = pd.Series(dtype=df[col].dtype)
        return base
    out = df.copy()
    for col, dtype in contract.columns.items():
        if col not in out.columns:
            out[col] = pd.Series(index=out.index, dtype=dtype)
            continue
        try:
            out[col] = _cast_column(out[col], dtype)
        except (TypeError, ValueError) as exc:
            logger.warning("Leaving %s.%s uncast as %s: %s", contract.name, col, dtype, exc)
    extra = [col for col in out.columns if col not in contract.columns]
    return out[list(contract.columns.keys()) + extra].reset_index(drop=True)


def rows_to_frame(rows: Iterable[Mapping] | pd.DataFrame | None, contract: TableContract) -> pd.DataFrame:
    """Frame a collection of row mappings (or a DataFrame) under *contract*."""
    if rows is None:
        return contract.empty()
    if isinstance(rows, pd.DataFrame):
        return coerce_table(rows, contract)
    return coerce_table(pd.DataFrame.from_records(list(rows)), contract)
