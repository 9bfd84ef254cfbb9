"""Per-pairing team statistics."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from domain.common import MatchRecord, RosterEntry, sort_matches, team_key
from domain.constants import RECENT_FORM_LIMIT
from domain.ratings.role_classifier import RoleStats
from domain.stats.form import FormMark, Streak, current_streak


@dataclass
class _TeamTally:
    player1_id: int
    player2_id: int
    games: int = 0
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    form: list[FormMark] = field(default_factory=list)

    def record(self, *, won: bool, points_for: int, points_against: int) -> None:
        self.games += 1
        self.points_for += points_for
        self.points_against += points_against
        if won:
            self.wins += 1
            self.form.append(FormMark.WIN)
        else:
            self.losses += 1
            self.form.append(FormMark.LOSS)


@dataclass(frozen=True)
class TeamStats:
    team_key: str
    player1_id: int
    player2_id: int
    player1_name: str
    player2_name: str
    games: int
    wins: int
    losses: int
    points_for: int
    points_against: int
    win_rate: float
    avg_point_diff: float
    recent_form: tuple[FormMark, ...]
    current_streak: Streak
    role_stats: RoleStats | None = None


def player_name(names: Mapping[int, str], player_id: int) -> str:
    return names.get(player_id, f"Player {player_id}")


def build_team_stats(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    *,
    recent_limit: int = RECENT_FORM_LIMIT,
    role_stats: Mapping[str, RoleStats] | None = None,
) -> list[TeamStats]:
    """Aggregate every two-player pairing that appears in ``matches``.

    Matches are replayed by day, then match id, so form and streaks do not
    depend on the input order.

    Rows are sorted by win rate, then average point differential, then games,
    all descending. ``role_stats`` (keyed by team key) is attached when given.
    """
    names = {entry.player_id: entry.name for entry in roster}
    tallies: dict[str, _TeamTally] = {}

    for match in sort_matches(list(matches)):
        sides = (
            (match.team_a_ids, match.team_a_won, match.team_a_score, match.team_b_score),
            (match.team_b_ids, match.team_b_won, match.team_b_score, match.team_a_score),
        )
        for (first_id, second_id), won, own_score, opponent_score in sides:
            key = team_key(first_id, second_id)
            low, high = sorted((first_id, second_id))
            tally = tallies.setdefault(key, _TeamTally(player1_id=low, player2_id=high))
            tally.record(won=won, points_for=own_score, points_against=opponent_score)

    rows = [
        TeamStats(
            team_key=key,
            player1_id=tally.player1_id,
            player2_id=tally.player2_id,
            player1_name=player_name(names, tally.player1_id),
            player2_name=player_name(names, tally.player2_id),
            games=tally.games,
            wins=tally.wins,
            losses=tally.losses,
            points_for=tally.points_for,
            points_against=tally.points_against,
            win_rate=tally.wins / tally.games,
            avg_point_diff=(tally.points_for - tally.points_against) / tally.games,
            recent_form=tuple(tally.form[-recent_limit:]) if recent_limit > 0 else (),
            current_streak=current_streak(tally.form),
            role_stats=role_stats.get(key) if role_stats is not None else None,
        )
        for key, tally in tallies.items()
        if tally.games > 0
    ]
    rows.sort(key=lambda row: (row.win_rate, row.avg_point_diff, row.games), reverse=True)
    return rows


__all__ = ["TeamStats", "build_team_stats", "player_name"]
