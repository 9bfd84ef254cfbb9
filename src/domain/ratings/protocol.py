"""Shared protocols and enums for rating calculators."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable

from domain.common import MatchRecord


class TeamRole(str, Enum):
    """Pre-match label of one side based on its win probability."""

    FAVORITE = "favorite"
    UNDERDOG = "underdog"
    EVEN = "even"


class Side(str, Enum):
    """Which side of a match record."""

    A = "A"
    B = "B"


class PlayerStatus(str, Enum):
    """Which roster members a report shows."""

    ACTIVE = "active"
    ALL = "all"


class SeasonBoostMode(str, Enum):
    """Whether season ratings use the graduated new-player boost."""

    BOOSTED = "boosted"
    BASE = "base"


E = TypeVar("E")


@runtime_checkable
class RatingCalculator(Protocol[E]):
    """Base contract for calculators replayed over ordered match history."""

    def process_match(self, match: MatchRecord) -> E: ...

    def tracked_entity_count(self) -> int: ...

    def ratings(self) -> dict[int, Any]: ...


__all__ = [
    "PlayerStatus",
    "RatingCalculator",
    "SeasonBoostMode",
    "Side",
    "TeamRole",
]
