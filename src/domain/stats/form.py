"""Win/loss form sequences and streaks built from match history.

Every builder replays matches by day, then match id, whatever order the
caller passes them in.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from domain.common import MatchRecord, sort_matches, team_key


class FormMark(str, Enum):
    WIN = "W"
    LOSS = "L"


@dataclass(frozen=True)
class Streak:
    """Run of identical marks at the tail of a form sequence."""

    mark: FormMark | None
    count: int


@dataclass(frozen=True)
class PlayerMatchDetail:
    match_id: int
    result: FormMark
    score: str
    teammate_ids: tuple[int, ...]
    opponent_ids: tuple[int, ...]


K = TypeVar("K")
V = TypeVar("V")


def _side_marks(match: MatchRecord) -> tuple[FormMark, FormMark]:
    if match.team_a_won:
        return FormMark.WIN, FormMark.LOSS
    return FormMark.LOSS, FormMark.WIN


def _trim(history: dict[K, list[V]], limit: int | None) -> dict[K, list[V]]:
    if limit is None:
        return history
    return {key: values[-limit:] if limit > 0 else [] for key, values in history.items()}


def build_player_form(
    matches: Iterable[MatchRecord],
    limit: int | None = None,
) -> dict[int, list[FormMark]]:
    """W/L marks per player in replay order, optionally keeping only the last ``limit``."""
    form: dict[int, list[FormMark]] = {}
    for match in sort_matches(list(matches)):
        mark_a, mark_b = _side_marks(match)
        for player_id in match.team_a_ids:
            form.setdefault(player_id, []).append(mark_a)
        for player_id in match.team_b_ids:
            form.setdefault(player_id, []).append(mark_b)
    return _trim(form, limit)


def build_player_result_details(
    matches: Iterable[MatchRecord],
    limit: int | None = None,
) -> dict[int, list[str]]:
    """Per-player result strings such as ``"W 21-15"`` from the player's side."""
    details: dict[int, list[str]] = {}
    for match in sort_matches(list(matches)):
        mark_a, mark_b = _side_marks(match)
        score_a = f"{match.team_a_score}-{match.team_b_score}"
        score_b = f"{match.team_b_score}-{match.team_a_score}"
        for player_id in match.team_a_ids:
            details.setdefault(player_id, []).append(f"{mark_a.value} {score_a}")
        for player_id in match.team_b_ids:
            details.setdefault(player_id, []).append(f"{mark_b.value} {score_b}")
    return _trim(details, limit)


def build_player_match_details(
    matches: Iterable[MatchRecord],
    limit: int | None = None,
) -> dict[int, list[PlayerMatchDetail]]:
    details: dict[int, list[PlayerMatchDetail]] = {}
    for match in sort_matches(list(matches)):
        mark_a, mark_b = _side_marks(match)
        sides = (
            (match.team_a_ids, match.team_b_ids, mark_a, f"{match.team_a_score}-{match.team_b_score}"),
            (match.team_b_ids, match.team_a_ids, mark_b, f"{match.team_b_score}-{match.team_a_score}"),
        )
        for own_ids, opponent_ids, mark, score in sides:
            for player_id in own_ids:
                details.setdefault(player_id, []).append(
                    PlayerMatchDetail(
                        match_id=match.match_id,
                        result=mark,
                        score=score,
                        teammate_ids=tuple(other for other in own_ids if other != player_id),
                        opponent_ids=tuple(opponent_ids),
                    )
                )
    return _trim(details, limit)


def build_team_form(
    matches: Iterable[MatchRecord],
    limit: int | None = None,
) -> dict[str, list[FormMark]]:
    """W/L marks per canonical team key in replay order."""
    form: dict[str, list[FormMark]] = {}
    for match in sort_matches(list(matches)):
        mark_a, mark_b = _side_marks(match)
        form.setdefault(team_key(*match.team_a_ids), []).append(mark_a)
        form.setdefault(team_key(*match.team_b_ids), []).append(mark_b)
    return _trim(form, limit)


def current_streak(form: list[FormMark]) -> Streak:
    if not form:
        return Streak(mark=None, count=0)

    last = form[-1]
    count = 0
    for mark in reversed(form):
        if mark is not last:
            break
        count += 1
    return Streak(mark=last, count=count)


def format_form(form: Iterable[FormMark]) -> str:
    """Compact form string, for example ``"WWLW"``."""
    return "".join(mark.value for mark in form)


__all__ = [
    "FormMark",
    "PlayerMatchDetail",
    "Streak",
    "build_player_form",
    "build_player_match_details",
    "build_player_result_details",
    "build_team_form",
    "current_streak",
    "format_form",
]
