"""Error types raised by the match analytics engine."""

from __future__ import annotations


class MatchAnalyticsError(Exception):
    """Base class for engine errors."""


class NotFoundError(MatchAnalyticsError):
    """A named entity (player, match) has no record in the active snapshot."""

    def __init__(self, entity: str, key: object):
        super().__init__(f"{entity.capitalize()} not found: {key}")
        self.entity = entity
        self.key = key

    def to_dict(self) -> dict:
        return {
            "error": f"{self.entity.capitalize()} not found",
            "entity": self.entity,
            "key": self.key,
        }
