"""Tests for favorite/underdog classification and role tallies."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.common import MatchRecord, RosterEntry
from domain.ratings.accumulator import compute_results
from domain.ratings.protocol import RatingCalculator, Side, TeamRole
from domain.ratings.role_classifier import EloRoleClassifier, build_elo_stats, classify_sides


def _roster(ratings: dict[int, int] | None = None) -> list[RosterEntry]:
    ratings = ratings or {}
    return [
        RosterEntry(player_id=player_id, name=f"P{player_id}", initial_rating=ratings.get(player_id, 1500))
        for player_id in (1, 2, 3, 4)
    ]


def _match(
    match_id: int,
    score_a: int,
    score_b: int,
    *,
    team_a: tuple[int, int] = (1, 2),
    team_b: tuple[int, int] = (3, 4),
    day: datetime = datetime(2025, 6, 1, 18, 0),
) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        player_a1_id=team_a[0],
        player_a2_id=team_a[1],
        player_b1_id=team_b[0],
        player_b2_id=team_b[1],
        team_a_score=score_a,
        team_b_score=score_b,
        day=day,
    )


def test_classify_sides_threshold() -> None:
    assert classify_sides(0.55) == (Side.A, TeamRole.FAVORITE, TeamRole.UNDERDOG)
    assert classify_sides(0.4) == (Side.B, TeamRole.UNDERDOG, TeamRole.FAVORITE)
    assert classify_sides(0.5) == (None, TeamRole.EVEN, TeamRole.EVEN)


def test_equal_teams_are_even() -> None:
    stats = build_elo_stats(_roster(), [_match(1, 21, 15)])

    view = stats.match_views[1]
    assert view.team_a_win_probability == pytest.approx(0.5)
    assert view.favorite_side is None
    assert view.underdog_won is False
    assert view.team_a_role is TeamRole.EVEN
    assert stats.player_role_stats[1].even_wins == 1
    assert stats.player_role_stats[3].even_losses == 1
    assert stats.team_role_stats["1,2"].even_matches == 1


def test_underdog_win_is_tallied_for_players_and_teams() -> None:
    roster = _roster({1: 1600, 2: 1600})

    stats = build_elo_stats(roster, [_match(1, 18, 21)])

    view = stats.match_views[1]
    assert view.team_a_win_probability == pytest.approx(1 / (1 + 10 ** -0.5))
    assert view.team_b_win_probability == pytest.approx(1 - view.team_a_win_probability)
    assert view.team_a_avg_rating_before == pytest.approx(1600.0)
    assert view.player_b1_rating_before == 1500
    assert view.favorite_side is Side.A
    assert view.underdog_won is True
    assert stats.player_role_stats[3].underdog_wins == 1
    assert stats.player_role_stats[1].favorite_losses == 1
    assert stats.team_role_stats["3,4"].underdog_wins == 1
    assert stats.team_role_stats["1,2"].favorite_matches == 1


def test_roles_are_mutually_exclusive() -> None:
    matches = [
        _match(1, 21, 5),
        _match(2, 21, 8),
        _match(3, 21, 10, team_a=(1, 3), team_b=(2, 4)),
        _match(4, 9, 21, team_a=(1, 4), team_b=(2, 3)),
        _match(5, 21, 3),
    ]

    stats = build_elo_stats(_roster(), matches)

    for view in stats.match_views.values():
        roles = {view.team_a_role, view.team_b_role}
        if TeamRole.FAVORITE in roles:
            assert roles == {TeamRole.FAVORITE, TeamRole.UNDERDOG}
        else:
            assert roles == {TeamRole.EVEN}


def test_unknown_player_uses_fallback_state() -> None:
    classifier = EloRoleClassifier(_roster())

    view = classifier.process_match(_match(1, 21, 12, team_b=(3, 9)))

    assert view.player_b2_rating_before == 1500
    assert classifier.tracked_entity_count() == 5
    assert 9 in classifier.ratings()


def test_team_keys_sort_numerically() -> None:
    roster = [RosterEntry(player_id=player_id, name=f"P{player_id}") for player_id in (2, 9, 10, 11)]

    stats = build_elo_stats(roster, [_match(1, 21, 19, team_a=(10, 9), team_b=(2, 11))])

    assert set(stats.team_role_stats) == {"9,10", "2,11"}


def test_ratings_match_results_replay() -> None:
    roster = _roster({1: 1620, 3: 1450})
    matches = [
        _match(1, 21, 15),
        _match(2, 17, 21, team_a=(1, 3), team_b=(2, 4)),
        _match(3, 21, 19, team_a=(1, 4), team_b=(2, 3), day=datetime(2025, 6, 2, 18, 0)),
    ]
    classifier = EloRoleClassifier(roster)
    for match in matches:
        classifier.process_match(match)

    results = {result.player_id: result.rating for result in compute_results(roster, matches)}

    assert classifier.ratings() == results
    assert isinstance(classifier, RatingCalculator)
