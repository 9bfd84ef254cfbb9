"""Tests for partner and opponent breakdowns."""

from __future__ import annotations

from datetime import datetime

from domain.common import MatchRecord, RosterEntry
from domain.stats.partners import build_partner_breakdown

ROSTER = [RosterEntry(player_id=player_id, name=name) for player_id, name in enumerate("ABCDEF", start=1)]


def _match(match_id: int, team_a, team_b, score_a: int, score_b: int) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        player_a1_id=team_a[0],
        player_a2_id=team_a[1],
        player_b1_id=team_b[0],
        player_b2_id=team_b[1],
        team_a_score=score_a,
        team_b_score=score_b,
        day=datetime(2025, 8, 1, 18, match_id),
    )


MATCHES = [
    # A + B: 2 games, both won
    _match(1, (1, 2), (3, 4), 21, 10),
    _match(2, (2, 1), (5, 6), 21, 12),
    # A + C: 3 games, 2 won
    _match(3, (1, 3), (2, 4), 21, 18),
    _match(4, (1, 3), (5, 6), 21, 19),
    _match(5, (4, 2), (3, 1), 21, 15),
    # A + D: 3 games, 1 won
    _match(6, (1, 4), (5, 6), 21, 17),
    _match(7, (1, 4), (2, 3), 16, 21),
    _match(8, (5, 6), (1, 4), 21, 9),
]


def test_partner_below_minimum_sample_is_never_best() -> None:
    breakdown = build_partner_breakdown(1, MATCHES, ROSTER)

    partners = {row.other_id: row for row in breakdown.partners}
    assert partners[2].games == 2
    assert partners[2].win_rate == 1.0
    assert [row.other_id for row in breakdown.best_partners] == [3, 4]
    assert 2 not in {row.other_id for row in breakdown.worst_partners}


def test_worst_partners_lowest_win_rate_first() -> None:
    breakdown = build_partner_breakdown(1, MATCHES, ROSTER)

    assert [row.other_id for row in breakdown.worst_partners] == [4, 3]
    assert breakdown.worst_partners[0].wins == 1
    assert breakdown.worst_partners[0].losses == 2


def test_opponents_from_the_focus_players_view() -> None:
    breakdown = build_partner_breakdown(1, MATCHES, ROSTER)

    opponents = {row.other_id: row for row in breakdown.opponents}
    assert opponents[5].games == 4
    assert opponents[5].wins == 3
    assert opponents[2].games == 3
    assert opponents[2].wins == 1
    assert [row.other_id for row in breakdown.tough_opponents][0] == 2
    assert [row.other_id for row in breakdown.easy_opponents][0] == 5
    assert opponents[5].name == "E"


def test_min_games_and_limit_are_configurable() -> None:
    breakdown = build_partner_breakdown(1, MATCHES, ROSTER, min_games=2, limit=1)

    assert [row.other_id for row in breakdown.best_partners] == [2]


def test_player_without_matches_has_empty_breakdown() -> None:
    breakdown = build_partner_breakdown(42, MATCHES, ROSTER)

    assert breakdown.partners == []
    assert breakdown.best_partners == []
    assert breakdown.tough_opponents == []
