"""Tests for pairing-level team statistics."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.common import MatchRecord, RosterEntry, team_key
from domain.ratings.role_classifier import build_elo_stats
from domain.stats.form import FormMark
from domain.stats.teams import build_team_stats

ROSTER = [
    RosterEntry(player_id=1, name="Anna"),
    RosterEntry(player_id=2, name="Boris"),
    RosterEntry(player_id=3, name="Clara"),
    RosterEntry(player_id=10, name="Dmitri"),
]


def _match(match_id: int, team_a, team_b, score_a: int, score_b: int) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        player_a1_id=team_a[0],
        player_a2_id=team_a[1],
        player_b1_id=team_b[0],
        player_b2_id=team_b[1],
        team_a_score=score_a,
        team_b_score=score_b,
        day=datetime(2025, 4, 1, 18, match_id),
    )


def test_team_key_is_order_independent_and_numeric() -> None:
    assert team_key(10, 2) == team_key(2, 10) == "2,10"


def test_build_team_stats_aggregates_both_orders() -> None:
    matches = [
        _match(1, (1, 2), (3, 10), 21, 15),
        _match(2, (2, 1), (10, 3), 19, 21),
        _match(3, (3, 10), (1, 2), 21, 11),
    ]

    rows = {row.team_key: row for row in build_team_stats(ROSTER, matches)}

    pair = rows["1,2"]
    assert pair.player1_name == "Anna"
    assert pair.player2_name == "Boris"
    assert pair.games == 3
    assert pair.wins == 1
    assert pair.losses == 2
    assert pair.points_for == 21 + 19 + 11
    assert pair.points_against == 15 + 21 + 21
    assert pair.win_rate == pytest.approx(1 / 3)
    assert pair.avg_point_diff == pytest.approx((51 - 57) / 3)
    assert pair.recent_form == (FormMark.WIN, FormMark.LOSS, FormMark.LOSS)
    assert pair.current_streak.count == 2
    assert rows["3,10"].player2_name == "Dmitri"


def test_rows_sorted_by_win_rate_then_point_diff() -> None:
    matches = [
        _match(1, (1, 2), (3, 10), 21, 19),
        _match(2, (1, 3), (2, 10), 21, 5),
        _match(3, (1, 10), (2, 3), 15, 21),
    ]

    rows = build_team_stats(ROSTER, matches)

    assert [row.team_key for row in rows[:3]] == ["1,3", "2,3", "1,2"]
    assert rows[-1].win_rate == 0.0


def test_recent_form_limit_and_role_stats() -> None:
    matches = [_match(match_id, (1, 2), (3, 10), 21, 10 + match_id) for match_id in range(1, 9)]
    elo_stats = build_elo_stats(ROSTER, matches)

    rows = {
        row.team_key: row
        for row in build_team_stats(ROSTER, matches, recent_limit=3, role_stats=elo_stats.team_role_stats)
    }

    assert len(rows["1,2"].recent_form) == 3
    assert rows["1,2"].role_stats is elo_stats.team_role_stats["1,2"]
    assert rows["1,2"].role_stats.favorite_wins + rows["1,2"].role_stats.even_wins == 8


def test_unknown_player_gets_placeholder_name() -> None:
    rows = build_team_stats(ROSTER, [_match(1, (1, 42), (2, 3), 21, 12)])

    assert {row.player2_name for row in rows} >= {"Player 42"}


def test_form_and_streak_ignore_input_order() -> None:
    matches = [
        _match(1, (1, 2), (3, 10), 21, 15),
        _match(2, (1, 2), (3, 10), 21, 17),
        _match(3, (1, 2), (3, 10), 18, 21),
    ]

    in_order = {row.team_key: row for row in build_team_stats(ROSTER, matches)}["1,2"]
    newest_first = {row.team_key: row for row in build_team_stats(ROSTER, list(reversed(matches)))}["1,2"]

    assert in_order.recent_form == (FormMark.WIN, FormMark.WIN, FormMark.LOSS)
    assert newest_first.recent_form == in_order.recent_form
    assert newest_first.current_streak == in_order.current_streak
    assert newest_first.current_streak.mark is FormMark.LOSS
    assert newest_first.current_streak.count == 1
