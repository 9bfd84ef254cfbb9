"""Partner and opponent breakdown for a single player."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from domain.common import MatchRecord, RosterEntry
from domain.constants import MIN_PARTNER_GAMES
from domain.stats.teams import player_name


@dataclass(frozen=True)
class HeadToHead:
    """Results of the focus player with (or against) one other player."""

    other_id: int
    name: str
    games: int
    wins: int
    losses: int

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.games else 0.0


@dataclass(frozen=True)
class PartnerBreakdown:
    player_id: int
    partners: list[HeadToHead]
    opponents: list[HeadToHead]
    best_partners: list[HeadToHead]
    worst_partners: list[HeadToHead]
    tough_opponents: list[HeadToHead]
    easy_opponents: list[HeadToHead]


def _head_to_head_rows(
    outcomes: dict[int, list[bool]],
    names: dict[int, str],
) -> list[HeadToHead]:
    rows = [
        HeadToHead(
            other_id=other_id,
            name=player_name(names, other_id),
            games=len(results),
            wins=sum(results),
            losses=len(results) - sum(results),
        )
        for other_id, results in outcomes.items()
    ]
    rows.sort(key=lambda row: (-row.games, -row.win_rate, row.other_id))
    return rows


def _ranked(rows: list[HeadToHead], *, min_games: int, limit: int, best_first: bool) -> list[HeadToHead]:
    eligible = [row for row in rows if row.games >= min_games]
    if best_first:
        eligible.sort(key=lambda row: (-row.win_rate, -row.games, row.other_id))
    else:
        eligible.sort(key=lambda row: (row.win_rate, -row.games, row.other_id))
    return eligible[:limit]


def build_partner_breakdown(
    player_id: int,
    matches: Iterable[MatchRecord],
    roster: Iterable[RosterEntry] = (),
    *,
    min_games: int = MIN_PARTNER_GAMES,
    limit: int = 3,
) -> PartnerBreakdown:
    """Split ``player_id``'s matches into teammate and opponent outcomes.

    Win rates are always from ``player_id``'s point of view, so a tough
    opponent is one the player rarely beats. Only pairings with at least
    ``min_games`` shared matches are eligible for the best/worst lists.
    """
    names = {entry.player_id: entry.name for entry in roster}
    teammate_outcomes: dict[int, list[bool]] = {}
    opponent_outcomes: dict[int, list[bool]] = {}

    for match in matches:
        if player_id in match.team_a_ids:
            own_ids, opponent_ids, won = match.team_a_ids, match.team_b_ids, match.team_a_won
        elif player_id in match.team_b_ids:
            own_ids, opponent_ids, won = match.team_b_ids, match.team_a_ids, match.team_b_won
        else:
            continue

        for teammate_id in own_ids:
            if teammate_id != player_id:
                teammate_outcomes.setdefault(teammate_id, []).append(won)
        for opponent_id in opponent_ids:
            opponent_outcomes.setdefault(opponent_id, []).append(won)

    partners = _head_to_head_rows(teammate_outcomes, names)
    opponents = _head_to_head_rows(opponent_outcomes, names)

    return PartnerBreakdown(
        player_id=player_id,
        partners=partners,
        opponents=opponents,
        best_partners=_ranked(partners, min_games=min_games, limit=limit, best_first=True),
        worst_partners=_ranked(partners, min_games=min_games, limit=limit, best_first=False),
        tough_opponents=_ranked(opponents, min_games=min_games, limit=limit, best_first=False),
        easy_opponents=_ranked(opponents, min_games=min_games, limit=limit, best_first=True),
    )


__all__ = ["HeadToHead", "PartnerBreakdown", "build_partner_breakdown"]
