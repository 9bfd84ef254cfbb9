"""League-wide summary figures for one chat and range."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.common import MatchRecord, RosterEntry, sort_matches
from domain.constants import MIN_WINRATE_GAMES
from domain.ratings.accumulator import PlayerResult


@dataclass(frozen=True)
class Leader:
    name: str
    value: float


@dataclass(frozen=True)
class MarginRecord:
    value: int
    day: datetime


@dataclass(frozen=True)
class SideSummary:
    """How the A side (listed first, serving) and the B side fared overall."""

    games: int
    wins: int
    diff_total: int

    @property
    def diff_avg(self) -> float | None:
        return self.diff_total / self.games if self.games else None


@dataclass(frozen=True)
class LeagueSummary:
    players_total: int
    players_active: int
    players_shown: int
    matches_total: int
    last_match_day: datetime | None
    rating_high: int | None
    rating_low: int | None
    average_rating: int | None
    total_games: int
    average_games: float | None
    total_points: int
    average_points: float | None
    average_margin: float | None
    team_a_side: SideSummary
    team_b_side: SideSummary
    biggest_margin: MarginRecord | None
    closest_match: MarginRecord | None
    top_rating: Leader | None
    best_winrate: Leader | None
    most_active_player: Leader | None
    best_diff: Leader | None


def _first_max(results: Sequence[PlayerResult], value: Callable[[PlayerResult], float]) -> PlayerResult | None:
    best: PlayerResult | None = None
    for result in results:
        if best is None or value(result) > value(best):
            best = result
    return best


def build_league_summary(
    roster: Iterable[RosterEntry],
    results: Sequence[PlayerResult],
    matches: Iterable[MatchRecord],
) -> LeagueSummary:
    """Summarise already computed (and already filtered) results plus raw matches."""
    entries = list(roster)
    ordered = sort_matches(list(matches))

    ratings = [result.rating for result in results]
    total_games = sum(result.games for result in results)
    total_points = sum(match.team_a_score + match.team_b_score for match in ordered)

    a_wins = sum(1 for match in ordered if match.team_a_won)
    b_wins = sum(1 for match in ordered if match.team_b_won)
    a_diff = sum(match.team_a_score - match.team_b_score for match in ordered)

    biggest_margin: MarginRecord | None = None
    closest_match: MarginRecord | None = None
    for match in ordered:
        if biggest_margin is None or match.margin > biggest_margin.value:
            biggest_margin = MarginRecord(value=match.margin, day=match.day)
        if closest_match is None or match.margin < closest_match.value:
            closest_match = MarginRecord(value=match.margin, day=match.day)

    winrate_pool = [result for result in results if result.games >= MIN_WINRATE_GAMES] or list(results)
    best_winrate = _first_max(winrate_pool, lambda result: result.winrate)
    most_active = _first_max(results, lambda result: result.games)
    best_diff = _first_max(results, lambda result: result.point_diff)
    top = results[0] if results else None

    return LeagueSummary(
        players_total=len(entries),
        players_active=sum(1 for entry in entries if entry.is_active and not entry.is_hidden),
        players_shown=len(results),
        matches_total=len(ordered),
        last_match_day=ordered[-1].day if ordered else None,
        rating_high=max(ratings) if ratings else None,
        rating_low=min(ratings) if ratings else None,
        average_rating=round(sum(ratings) / len(ratings)) if ratings else None,
        total_games=total_games,
        average_games=total_games / len(results) if results else None,
        total_points=total_points,
        average_points=total_points / len(ordered) if ordered else None,
        average_margin=sum(match.margin for match in ordered) / len(ordered) if ordered else None,
        team_a_side=SideSummary(games=len(ordered), wins=a_wins, diff_total=a_diff),
        team_b_side=SideSummary(games=len(ordered), wins=b_wins, diff_total=-a_diff),
        biggest_margin=biggest_margin,
        closest_match=closest_match,
        top_rating=Leader(name=top.name, value=top.rating) if top is not None else None,
        best_winrate=Leader(name=best_winrate.name, value=best_winrate.winrate) if best_winrate else None,
        most_active_player=Leader(name=most_active.name, value=most_active.games) if most_active else None,
        best_diff=Leader(name=best_diff.name, value=best_diff.point_diff) if best_diff else None,
    )


__all__ = ["Leader", "LeagueSummary", "MarginRecord", "SideSummary", "build_league_summary"]
