"""Elo update kernel shared by the results accumulator and the role classifier."""

from __future__ import annotations

from domain.constants import CAP_POINTS, GAMES_CUTOFF, LIFETIME_BOOST, SCALE_FACTOR


def expected_score(rating_differential: float, scale_factor: float = SCALE_FACTOR) -> float:
    """Win expectation of a side trailing its opponents by ``rating_differential`` points."""
    return 1.0 / (1.0 + 10.0 ** (rating_differential / scale_factor))


def win_probability(team_rating_gap: float, scale_factor: float = SCALE_FACTOR) -> float:
    """Win probability of a side leading its opponents by ``team_rating_gap`` points."""
    return expected_score(-team_rating_gap, scale_factor)


def k_modifier(games_played: int, *, season_mode: bool, season_boost_disabled: bool = False) -> float:
    if games_played >= GAMES_CUTOFF:
        return 1.0
    if not season_mode:
        return LIFETIME_BOOST
    if season_boost_disabled:
        return 1.0
    return 1.0 + (GAMES_CUTOFF - games_played) / GAMES_CUTOFF


def cap_points(team_a_score: int, team_b_score: int) -> int:
    """Winning score clamped to the fixed cap."""
    return min(max(team_a_score, team_b_score), CAP_POINTS)


def update_rating(
    current_rating: int,
    rating_differential: float,
    did_win: int,
    cap: int,
    games_played: int,
    *,
    season_mode: bool,
    season_boost_disabled: bool = False,
) -> int:
    """Return the new rating for one player after one match.

    ``rating_differential`` is the opposing team's rating sum minus the player's
    own team rating sum, ``did_win`` is 1 or 0 and ``cap`` is the capped
    winning score from :func:`cap_points`.
    """
    expected = expected_score(rating_differential)
    modifier = k_modifier(
        games_played,
        season_mode=season_mode,
        season_boost_disabled=season_boost_disabled,
    )
    return round(current_rating + cap * modifier * (did_win - expected))


__all__ = [
    "cap_points",
    "expected_score",
    "k_modifier",
    "update_rating",
    "win_probability",
]
