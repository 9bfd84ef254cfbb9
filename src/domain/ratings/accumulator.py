"""Roster-strict rating replay with streak and placement tracking."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from domain.common import MatchRecord, RosterEntry, SeasonWindow, sort_matches
from domain.constants import (
    PLACE_HIGHEST_SEED,
    PLACE_LOWEST_SEED,
    RATING_HIGHEST_SEED,
    RATING_LOWEST_SEED,
    SEED_GAMES,
    SEED_RATING,
)
from domain.ratings.kernel import expected_score, k_modifier, update_rating
from domain.ratings.match_adapter import MatchAdapterMixin

logger = logging.getLogger(__name__)


class PlayerNotFoundError(ValueError):
    """A match references a player missing from the roster being replayed."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"Player not found: {player_id}")
        self.player_id = player_id


@dataclass(frozen=True)
class PlayerRatingEvent:
    player_id: int
    match_id: int
    day: datetime
    won: bool
    expected_score: float
    k_modifier: float
    cap_points: int
    pre_rating: int
    rating_delta: int
    post_rating: int


@dataclass
class PlayerState:
    """Mutable per-player accumulator state for one replay."""

    entry: RosterEntry
    rating: int
    games: int
    rating_history: list[int] = field(default_factory=list)
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    previous_place: int | None = None
    previous_rating: int | None = None
    place_highest: int = PLACE_HIGHEST_SEED
    place_lowest: int = PLACE_LOWEST_SEED
    rating_highest: int = RATING_HIGHEST_SEED
    rating_lowest: int = RATING_LOWEST_SEED
    place_change: int = 0
    rating_change: int = 0
    win_streak: int = 0
    loss_streak: int = 0
    longest_win_streak: int = 0
    longest_loss_streak: int = 0

    @property
    def is_ranked(self) -> bool:
        return self.entry.is_active and not self.entry.is_hidden

    def record_result(self, *, won: bool, points_for: int, points_against: int) -> None:
        self.points_for += points_for
        self.points_against += points_against
        if won:
            self.wins += 1
            self.win_streak += 1
            self.loss_streak = 0
            self.longest_win_streak = max(self.longest_win_streak, self.win_streak)
        else:
            self.losses += 1
            self.loss_streak += 1
            self.win_streak = 0
            self.longest_loss_streak = max(self.longest_loss_streak, self.loss_streak)

    def record_place(self, place: int) -> None:
        self.place_highest = min(self.place_highest, place)
        self.place_lowest = max(self.place_lowest, place)
        self.rating_highest = max(self.rating_highest, self.rating)
        self.rating_lowest = min(self.rating_lowest, self.rating)

        self.place_change = (self.previous_place if self.previous_place is not None else place) - place
        self.rating_change = self.rating - (
            self.previous_rating if self.previous_rating is not None else self.rating
        )

        self.previous_place = place
        self.previous_rating = self.rating


@dataclass(frozen=True)
class PlayerResult:
    """Final computed statistics for one roster player."""

    player_id: int
    name: str
    is_active: bool
    is_hidden: bool
    is_admin: bool
    rating: int
    games: int
    rating_history: tuple[int, ...]
    wins: int
    losses: int
    points_for: int
    points_against: int
    point_diff: int
    avg_points_for: float
    avg_points_against: float
    previous_place: int | None
    previous_rating: int | None
    place_highest: int
    place_lowest: int
    rating_highest: int
    rating_lowest: int
    place_change: int
    rating_change: int
    win_streak: int
    loss_streak: int
    longest_win_streak: int
    longest_loss_streak: int

    @property
    def winrate(self) -> int:
        """Win share as a rounded integer percentage."""
        decided = self.wins + self.losses
        if decided == 0:
            return 0
        return round(self.wins / decided * 100)

    @classmethod
    def from_state(cls, state: PlayerState) -> PlayerResult:
        entry = state.entry
        games_in_replay = state.wins + state.losses
        return cls(
            player_id=entry.player_id,
            name=entry.name,
            is_active=entry.is_active,
            is_hidden=entry.is_hidden,
            is_admin=entry.is_admin,
            rating=state.rating,
            games=state.games,
            rating_history=tuple(state.rating_history),
            wins=state.wins,
            losses=state.losses,
            points_for=state.points_for,
            points_against=state.points_against,
            point_diff=state.points_for - state.points_against,
            avg_points_for=state.points_for / games_in_replay if games_in_replay else 0.0,
            avg_points_against=state.points_against / games_in_replay if games_in_replay else 0.0,
            previous_place=state.previous_place,
            previous_rating=state.previous_rating,
            place_highest=state.place_highest,
            place_lowest=state.place_lowest,
            rating_highest=state.rating_highest,
            rating_lowest=state.rating_lowest,
            place_change=state.place_change,
            rating_change=state.rating_change,
            win_streak=state.win_streak,
            loss_streak=state.loss_streak,
            longest_win_streak=state.longest_win_streak,
            longest_loss_streak=state.longest_loss_streak,
        )


class ResultsAccumulator(MatchAdapterMixin):
    """Stateful match-by-match replay over a fixed roster."""

    def __init__(
        self,
        roster: Iterable[RosterEntry],
        *,
        season_mode: bool = False,
        disable_season_boost: bool = False,
    ) -> None:
        self.season_mode = season_mode
        self.disable_season_boost = disable_season_boost
        self._states: dict[int, PlayerState] = {}
        for entry in roster:
            seed_rating = SEED_RATING if season_mode else entry.initial_rating
            seed_games = SEED_GAMES if season_mode else entry.initial_games
            self._states[entry.player_id] = PlayerState(
                entry=entry,
                rating=seed_rating,
                games=seed_games,
                rating_history=[seed_rating],
            )

    def get_state(self, player_id: int) -> PlayerState:
        try:
            return self._states[player_id]
        except KeyError:
            raise PlayerNotFoundError(player_id) from None

    def tracked_entity_count(self) -> int:
        return len(self._states)

    def ratings(self) -> dict[int, int]:
        """Return a snapshot of current ratings keyed by player id."""
        return {player_id: state.rating for player_id, state in self._states.items()}

    def process_match(self, match: MatchRecord) -> list[PlayerRatingEvent]:
        self._validate_match(match)

        team_a = [self.get_state(player_id) for player_id in match.team_a_ids]
        team_b = [self.get_state(player_id) for player_id in match.team_b_ids]

        team_a_result, team_b_result, cap = self._match_outcome(match)
        team_a_rating = sum(state.rating for state in team_a)
        team_b_rating = sum(state.rating for state in team_b)

        events: list[PlayerRatingEvent] = []
        sides = (
            (team_a, team_b_rating - team_a_rating, team_a_result, match.team_a_score, match.team_b_score),
            (team_b, team_a_rating - team_b_rating, team_b_result, match.team_b_score, match.team_a_score),
        )
        for states, differential, result, own_score, opponent_score in sides:
            for state in states:
                pre_rating = state.rating
                modifier = k_modifier(
                    state.games,
                    season_mode=self.season_mode,
                    season_boost_disabled=self.disable_season_boost,
                )
                state.rating = update_rating(
                    pre_rating,
                    differential,
                    result,
                    cap,
                    state.games,
                    season_mode=self.season_mode,
                    season_boost_disabled=self.disable_season_boost,
                )
                state.rating_history.append(state.rating)
                state.games += 1
                state.record_result(
                    won=result == 1,
                    points_for=own_score,
                    points_against=opponent_score,
                )

                events.append(
                    PlayerRatingEvent(
                        player_id=state.entry.player_id,
                        match_id=match.match_id,
                        day=match.day,
                        won=result == 1,
                        expected_score=expected_score(differential),
                        k_modifier=modifier,
                        cap_points=cap,
                        pre_rating=pre_rating,
                        rating_delta=state.rating - pre_rating,
                        post_rating=state.rating,
                    )
                )

        return events

    def close_day(self, day: datetime) -> list[tuple[int, PlayerState]]:
        """Rank visible active players and roll their day-boundary snapshot."""
        ranked = sorted(
            (state for state in self._states.values() if state.is_ranked),
            key=lambda state: state.rating,
            reverse=True,
        )
        standings = list(enumerate(ranked, start=1))
        for place, state in standings:
            state.record_place(place)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "standings day=%s players=%s",
                day.date().isoformat(),
                " ".join(
                    f"{place}:{state.entry.name}={state.rating}({state.rating_change:+d})"
                    for place, state in standings
                ),
            )
        return standings

    def results(self) -> list[PlayerResult]:
        """Return final results sorted by rating, highest first."""
        ranked = sorted(self._states.values(), key=lambda state: state.rating, reverse=True)
        return [PlayerResult.from_state(state) for state in ranked]


def is_day_boundary(matches: Sequence[MatchRecord], index: int) -> bool:
    """True when ``matches[index]`` is the last match of its UTC calendar day."""
    if index == len(matches) - 1:
        return True
    return matches[index].day.date() != matches[index + 1].day.date()


def compute_results(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    season: SeasonWindow | None = None,
) -> list[PlayerResult]:
    """Replay the full match history and return per-player results.

    Lifetime mode (no ``season``) seeds every player from the roster; season
    mode seeds 1500/0 and keeps only matches inside the window. Any match
    referencing a player outside the roster aborts with PlayerNotFoundError.
    """
    accumulator = ResultsAccumulator(
        roster,
        season_mode=season is not None,
        disable_season_boost=season.disable_season_boost if season is not None else False,
    )

    replay = sort_matches(
        [match for match in matches if season is None or season.contains(match.day)]
    )
    for index, match in enumerate(replay):
        accumulator.process_match(match)
        if is_day_boundary(replay, index):
            accumulator.close_day(match.day)

    return accumulator.results()


__all__ = [
    "PlayerNotFoundError",
    "PlayerRatingEvent",
    "PlayerResult",
    "PlayerState",
    "ResultsAccumulator",
    "compute_results",
    "is_day_boundary",
]
