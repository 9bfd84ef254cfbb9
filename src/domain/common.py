"""Shared input types for the rating engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RosterEntry:
    """One chat roster member with chat-scoped flags and lifetime seed values."""

    player_id: int
    name: str
    is_active: bool = True
    is_hidden: bool = False
    is_admin: bool = False
    initial_rating: int = 1500
    initial_games: int = 0


@dataclass(frozen=True)
class MatchRecord:
    """Canonical settled doubles match payload consumed by the engine."""

    match_id: int
    player_a1_id: int
    player_a2_id: int
    player_b1_id: int
    player_b2_id: int
    team_a_score: int
    team_b_score: int
    day: datetime
    league: int | None = None
    chat_id: str | None = None

    @property
    def team_a_ids(self) -> tuple[int, int]:
        return (self.player_a1_id, self.player_a2_id)

    @property
    def team_b_ids(self) -> tuple[int, int]:
        return (self.player_b1_id, self.player_b2_id)

    @property
    def player_ids(self) -> tuple[int, int, int, int]:
        return (self.player_a1_id, self.player_a2_id, self.player_b1_id, self.player_b2_id)

    @property
    def team_a_won(self) -> bool:
        return self.team_a_score > self.team_b_score

    @property
    def team_b_won(self) -> bool:
        return self.team_b_score > self.team_a_score

    @property
    def margin(self) -> int:
        return abs(self.team_a_score - self.team_b_score)


@dataclass(frozen=True)
class SeasonWindow:
    """Inclusive date window that switches the engine into season mode."""

    start: datetime
    end: datetime | None = None
    disable_season_boost: bool = False

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return self.end is None or moment <= self.end


@dataclass(frozen=True)
class SeasonRecord:
    """Stored season definition for one chat."""

    season_id: int
    name: str
    start_date: datetime
    end_date: datetime | None = None
    is_active: bool = False


@dataclass(frozen=True)
class ChatRecord:
    """Chat identity as exposed by the data source."""

    chat_id: str
    slug: str
    name: str | None = None


def team_key(player1_id: int, player2_id: int) -> str:
    """Canonical order-independent key for a two-player team."""
    low, high = sorted((player1_id, player2_id))
    return f"{low},{high}"


def sort_matches(matches: list[MatchRecord] | tuple[MatchRecord, ...]) -> list[MatchRecord]:
    """Return matches in replay order: day first, then insertion id."""
    return sorted(matches, key=lambda match: (match.day, match.match_id))


__all__ = [
    "ChatRecord",
    "MatchRecord",
    "RosterEntry",
    "SeasonRecord",
    "SeasonWindow",
    "sort_matches",
    "team_key",
]
