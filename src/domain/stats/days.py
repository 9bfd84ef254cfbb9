"""Calendar-day standings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime

from domain.common import MatchRecord, RosterEntry, sort_matches
from domain.ratings.protocol import PlayerStatus
from domain.stats.teams import player_name


@dataclass
class _DayTally:
    player_id: int
    name: str
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0


@dataclass(frozen=True)
class DayStanding:
    player_id: int
    name: str
    wins: int
    losses: int
    points_for: int
    points_against: int
    games: int
    point_diff: int


@dataclass(frozen=True)
class DayResults:
    """Standings and matches for one selected day plus its neighbours."""

    day: date | None
    previous_day: date | None
    next_day: date | None
    standings: list[DayStanding]
    matches: list[MatchRecord]


def day_key(moment: datetime) -> date:
    """Calendar date of a stored match timestamp.

    Timestamps are stored as naive UTC, so a day is the UTC date: a match
    played just after local midnight east of UTC still counts for the
    previous day.
    """
    return moment.date()


def filter_matches_by_status(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    status: PlayerStatus,
) -> list[MatchRecord]:
    """With ``ACTIVE`` keep only matches whose four players are all visible and active."""
    if status is PlayerStatus.ALL:
        return list(matches)
    visible_active = {entry.player_id for entry in roster if entry.is_active and not entry.is_hidden}
    return [
        match
        for match in matches
        if all(player_id in visible_active for player_id in match.player_ids)
    ]


def list_match_days(matches: Iterable[MatchRecord]) -> list[date]:
    """Distinct match days, most recent first."""
    return sorted({day_key(match.day) for match in matches}, reverse=True)


def build_day_standings(
    roster: Iterable[RosterEntry],
    day_matches: Sequence[MatchRecord],
) -> list[DayStanding]:
    entries = list(roster)
    names = {entry.player_id: entry.name for entry in entries}
    hidden = {entry.player_id for entry in entries if entry.is_hidden}
    tallies: dict[int, _DayTally] = {}

    for match in day_matches:
        sides = (
            (match.team_a_ids, match.team_a_won, match.team_a_score, match.team_b_score),
            (match.team_b_ids, match.team_b_won, match.team_b_score, match.team_a_score),
        )
        for player_ids, won, own_score, opponent_score in sides:
            for player_id in player_ids:
                if player_id in hidden:
                    continue
                tally = tallies.get(player_id)
                if tally is None:
                    tally = _DayTally(player_id=player_id, name=player_name(names, player_id))
                    tallies[player_id] = tally
                tally.points_for += own_score
                tally.points_against += opponent_score
                if won:
                    tally.wins += 1
                else:
                    tally.losses += 1

    standings = [
        DayStanding(
            player_id=tally.player_id,
            name=tally.name,
            wins=tally.wins,
            losses=tally.losses,
            points_for=tally.points_for,
            points_against=tally.points_against,
            games=tally.wins + tally.losses,
            point_diff=tally.points_for - tally.points_against,
        )
        for tally in tallies.values()
    ]
    standings.sort(key=lambda row: (row.wins, row.point_diff, row.games), reverse=True)
    return standings


def build_day_results(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    day: date | None = None,
) -> DayResults:
    """Standings restricted to ``day`` (latest match day when omitted)."""
    entries = list(roster)
    all_matches = list(matches)
    days = list_match_days(all_matches)

    selected = day if day is not None else (days[0] if days else None)
    if selected is None:
        return DayResults(day=None, previous_day=None, next_day=None, standings=[], matches=[])

    day_matches = sort_matches([match for match in all_matches if day_key(match.day) == selected])

    previous_day: date | None = None
    next_day: date | None = None
    if selected in days:
        index = days.index(selected)
        previous_day = days[index + 1] if index + 1 < len(days) else None
        next_day = days[index - 1] if index > 0 else None

    return DayResults(
        day=selected,
        previous_day=previous_day,
        next_day=next_day,
        standings=build_day_standings(entries, day_matches),
        matches=day_matches,
    )


__all__ = [
    "DayResults",
    "DayStanding",
    "build_day_results",
    "build_day_standings",
    "day_key",
    "filter_matches_by_status",
    "list_match_days",
]
