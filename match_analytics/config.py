"""
Runtime configuration for the match analytics engine.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from constants import DATA_DIR, DEFAULT_RADAR_COEFFICIENTS, DEFAULT_TIMELINE_INTERVAL

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return float(default)
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r; using %s", name, raw, default)
        return float(default)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r; using %s", name, raw, default)
        return int(default)
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return int(default)
    return value


@dataclass(frozen=True)
class RadarCoefficients:
    """Linear scaling factors for the count-based radar metrics."""

    recoveries: float = DEFAULT_RADAR_COEFFICIENTS["recoveries"]
    total_touches: float = DEFAULT_RADAR_COEFFICIENTS["total_touches"]

    @classmethod
    def from_mapping(cls, values: Mapping[str, object] | None) -> "RadarCoefficients":
        """Build coefficients from a partial mapping; unknown keys are ignored."""
        if not values:
            return cls()
        defaults = cls()
        out = {}
        for name in ("recoveries", "total_touches"):
            raw = values.get(name, getattr(defaults, name))
            try:
                out[name] = float(raw)
            except (TypeError, ValueError):
                out[name] = getattr(defaults, name)
        return cls(**out)

    def as_dict(self) -> dict[str, float]:
        return {"recoveries": self.recoveries, "total_touches": self.total_touches}


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine settings with defaults taken from ``constants``.
    """

    data_dir: str = DATA_DIR
    timeline_interval: int = DEFAULT_TIMELINE_INTERVAL
    radar: RadarCoefficients = field(default_factory=RadarCoefficients)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Construct settings from ``MATCH_ANALYTICS_*`` environment variables.
        """
        return cls(
            data_dir=os.getenv("MATCH_ANALYTICS_DATA_DIR", DATA_DIR),
            timeline_interval=_env_int("MATCH_ANALYTICS_TIMELINE_INTERVAL", DEFAULT_TIMELINE_INTERVAL),
            radar=RadarCoefficients(
                recoveries=_env_float(
                    "MATCH_ANALYTICS_RADAR_RECOVERIES", DEFAULT_RADAR_COEFFICIENTS["recoveries"]
                ),
                total_touches=_env_float(
                    "MATCH_ANALYTICS_RADAR_TOUCHES", DEFAULT_RADAR_COEFFICIENTS["total_touches"]
                ),
            ),
        )
