"""Unit tests for the shared Elo update kernel."""

from __future__ import annotations

import pytest

from domain.ratings.kernel import cap_points, expected_score, k_modifier, update_rating, win_probability


def test_expected_score_is_half_for_equal_teams() -> None:
    assert expected_score(0) == pytest.approx(0.5)
    assert win_probability(0) == pytest.approx(0.5)


def test_expected_score_drops_when_opponents_are_stronger() -> None:
    assert expected_score(200) < 0.5 < expected_score(-200)
    assert expected_score(200) + expected_score(-200) == pytest.approx(1.0)


def test_win_probability_favors_the_higher_rated_side() -> None:
    assert win_probability(400) == pytest.approx(1 / 1.1)
    assert win_probability(-400) == pytest.approx(1 - 1 / 1.1)


@pytest.mark.parametrize(
    ("games", "season_mode", "boost_disabled", "expected"),
    [
        (0, False, False, 2.0),
        (29, False, False, 2.0),
        (30, False, False, 1.0),
        (0, True, False, 2.0),
        (15, True, False, 1.5),
        (29, True, False, 1.0 + 1 / 30),
        (30, True, False, 1.0),
        (0, True, True, 1.0),
    ],
)
def test_k_modifier_by_mode_and_experience(
    games: int,
    season_mode: bool,
    boost_disabled: bool,
    expected: float,
) -> None:
    assert k_modifier(games, season_mode=season_mode, season_boost_disabled=boost_disabled) == pytest.approx(
        expected
    )


def test_cap_points_clamps_extended_games() -> None:
    assert cap_points(21, 15) == 21
    assert cap_points(23, 25) == 21
    assert cap_points(15, 9) == 15


def test_update_rating_basic_match_moves_twenty_one_points() -> None:
    assert update_rating(1500, 0, 1, 21, 0, season_mode=False) == 1521
    assert update_rating(1500, 0, 0, 21, 0, season_mode=False) == 1479


def test_underdog_win_gains_more_than_favorite_win() -> None:
    underdog = update_rating(1500, 200, 1, 21, 40, season_mode=False)
    favorite = update_rating(1500, -200, 1, 21, 40, season_mode=False)

    assert underdog == 1516
    assert favorite == 1505


def test_disabled_season_boost_uses_base_k() -> None:
    boosted = update_rating(1500, 0, 1, 21, 0, season_mode=True)
    base = update_rating(1500, 0, 1, 21, 0, season_mode=True, season_boost_disabled=True)

    assert boosted == 1521
    assert base == 1510
