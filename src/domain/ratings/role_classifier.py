"""Favorite/underdog classification replayed alongside the rating kernel."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from domain.common import MatchRecord, RosterEntry, sort_matches, team_key
from domain.constants import FAVORITE_MIN_WIN_PROBABILITY, SEED_GAMES, SEED_RATING
from domain.ratings.kernel import update_rating, win_probability
from domain.ratings.match_adapter import MatchAdapterMixin
from domain.ratings.protocol import Side, TeamRole

logger = logging.getLogger(__name__)


@dataclass
class RatingState:
    rating: int
    games: int


@dataclass
class RoleStats:
    """Role-conditioned match tallies for one player or one team."""

    favorite_matches: int = 0
    favorite_wins: int = 0
    favorite_losses: int = 0
    underdog_matches: int = 0
    underdog_wins: int = 0
    underdog_losses: int = 0
    even_matches: int = 0
    even_wins: int = 0
    even_losses: int = 0

    def apply(self, role: TeamRole, did_win: bool) -> None:
        if role is TeamRole.FAVORITE:
            self.favorite_matches += 1
            if did_win:
                self.favorite_wins += 1
            else:
                self.favorite_losses += 1
        elif role is TeamRole.UNDERDOG:
            self.underdog_matches += 1
            if did_win:
                self.underdog_wins += 1
            else:
                self.underdog_losses += 1
        else:
            self.even_matches += 1
            if did_win:
                self.even_wins += 1
            else:
                self.even_losses += 1


@dataclass(frozen=True)
class EloMatchView:
    """Pre-match rating snapshot and role outcome for one match."""

    match_id: int
    team_a_win_probability: float
    team_b_win_probability: float
    team_a_avg_rating_before: float
    team_b_avg_rating_before: float
    player_a1_rating_before: int
    player_a2_rating_before: int
    player_b1_rating_before: int
    player_b2_rating_before: int
    favorite_side: Side | None
    underdog_won: bool
    team_a_role: TeamRole
    team_b_role: TeamRole


@dataclass(frozen=True)
class EloStats:
    match_views: dict[int, EloMatchView] = field(default_factory=dict)
    player_role_stats: dict[int, RoleStats] = field(default_factory=dict)
    team_role_stats: dict[str, RoleStats] = field(default_factory=dict)


def classify_sides(team_a_win_probability: float) -> tuple[Side | None, TeamRole, TeamRole]:
    """Return (favorite_side, team_a_role, team_b_role) for a pre-match probability."""
    team_b_win_probability = 1.0 - team_a_win_probability
    if team_a_win_probability >= FAVORITE_MIN_WIN_PROBABILITY:
        return Side.A, TeamRole.FAVORITE, TeamRole.UNDERDOG
    if team_b_win_probability >= FAVORITE_MIN_WIN_PROBABILITY:
        return Side.B, TeamRole.UNDERDOG, TeamRole.FAVORITE
    return None, TeamRole.EVEN, TeamRole.EVEN


class EloRoleClassifier(MatchAdapterMixin):
    """Stateful role classifier keyed by a possibly wider player-id universe.

    Players missing from the roster start from a 1500/0 fallback instead of
    failing, since these views are analytics only.
    """

    def __init__(
        self,
        roster: Iterable[RosterEntry] = (),
        *,
        season_mode: bool = False,
        disable_season_boost: bool = False,
    ) -> None:
        self.season_mode = season_mode
        self.disable_season_boost = disable_season_boost
        self._states: dict[int, RatingState] = {}
        self._player_roles: dict[int, RoleStats] = {}
        self._team_roles: dict[str, RoleStats] = {}
        self._match_views: dict[int, EloMatchView] = {}
        for entry in roster:
            self._states[entry.player_id] = RatingState(
                rating=SEED_RATING if season_mode else entry.initial_rating,
                games=SEED_GAMES if season_mode else entry.initial_games,
            )
            self._player_roles[entry.player_id] = RoleStats()

    def _ensure_state(self, player_id: int) -> RatingState:
        state = self._states.get(player_id)
        if state is None:
            logger.debug("player_id=%s missing from roster, using fallback rating", player_id)
            state = RatingState(rating=SEED_RATING, games=SEED_GAMES)
            self._states[player_id] = state
        return state

    def _player_role(self, player_id: int) -> RoleStats:
        return self._player_roles.setdefault(player_id, RoleStats())

    def _team_role(self, key: str) -> RoleStats:
        return self._team_roles.setdefault(key, RoleStats())

    def tracked_entity_count(self) -> int:
        return len(self._states)

    def ratings(self) -> dict[int, int]:
        return {player_id: state.rating for player_id, state in self._states.items()}

    def process_match(self, match: MatchRecord) -> EloMatchView:
        self._validate_match(match)

        a1, a2, b1, b2 = (self._ensure_state(player_id) for player_id in match.player_ids)
        team_a_rating = a1.rating + a2.rating
        team_b_rating = b1.rating + b2.rating
        rating_gap = team_a_rating - team_b_rating

        team_a_win_probability = win_probability(rating_gap)
        team_b_win_probability = 1.0 - team_a_win_probability
        favorite_side, team_a_role, team_b_role = classify_sides(team_a_win_probability)

        team_a_won = match.team_a_won
        team_b_won = match.team_b_won
        if favorite_side is Side.A:
            underdog_won = team_b_won
        elif favorite_side is Side.B:
            underdog_won = team_a_won
        else:
            underdog_won = False

        self._team_role(team_key(*match.team_a_ids)).apply(team_a_role, team_a_won)
        self._team_role(team_key(*match.team_b_ids)).apply(team_b_role, team_b_won)
        for player_id in match.team_a_ids:
            self._player_role(player_id).apply(team_a_role, team_a_won)
        for player_id in match.team_b_ids:
            self._player_role(player_id).apply(team_b_role, team_b_won)

        view = EloMatchView(
            match_id=match.match_id,
            team_a_win_probability=team_a_win_probability,
            team_b_win_probability=team_b_win_probability,
            team_a_avg_rating_before=team_a_rating / 2,
            team_b_avg_rating_before=team_b_rating / 2,
            player_a1_rating_before=a1.rating,
            player_a2_rating_before=a2.rating,
            player_b1_rating_before=b1.rating,
            player_b2_rating_before=b2.rating,
            favorite_side=favorite_side,
            underdog_won=underdog_won,
            team_a_role=team_a_role,
            team_b_role=team_b_role,
        )
        self._match_views[match.match_id] = view

        team_a_result, team_b_result, cap = self._match_outcome(match)
        for state, differential, result in (
            (a1, -rating_gap, team_a_result),
            (a2, -rating_gap, team_a_result),
            (b1, rating_gap, team_b_result),
            (b2, rating_gap, team_b_result),
        ):
            state.rating = update_rating(
                state.rating,
                differential,
                result,
                cap,
                state.games,
                season_mode=self.season_mode,
                season_boost_disabled=self.disable_season_boost,
            )
            state.games += 1

        return view

    def stats(self) -> EloStats:
        return EloStats(
            match_views=dict(self._match_views),
            player_role_stats=dict(self._player_roles),
            team_role_stats=dict(self._team_roles),
        )


def build_elo_stats(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    *,
    season_mode: bool = False,
    disable_season_boost: bool = False,
) -> EloStats:
    """Replay matches by (day, id) and collect match views and role tallies."""
    classifier = EloRoleClassifier(
        roster,
        season_mode=season_mode,
        disable_season_boost=disable_season_boost,
    )
    for match in sort_matches(list(matches)):
        classifier.process_match(match)
    return classifier.stats()


__all__ = [
    "EloMatchView",
    "EloRoleClassifier",
    "EloStats",
    "RoleStats",
    "build_elo_stats",
    "classify_sides",
]
