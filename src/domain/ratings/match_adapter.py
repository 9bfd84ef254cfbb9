"""Shared validation and outcome helpers for doubles-match calculators."""

from __future__ import annotations

from domain.common import MatchRecord
from domain.ratings.kernel import cap_points


class MatchAdapterMixin:
    """Mixin providing shared match validation and outcome extraction.

    Subclasses implement their own state lookup, update and snapshot building.
    """

    def _validate_match(self, match: MatchRecord) -> None:
        player_ids = match.player_ids
        if len(set(player_ids)) != len(player_ids):
            raise ValueError(
                f"match_id={match.match_id} repeats a player "
                f"({match.player_a1_id},{match.player_a2_id} vs "
                f"{match.player_b1_id},{match.player_b2_id})"
            )
        if match.team_a_score == match.team_b_score:
            raise ValueError(
                f"match_id={match.match_id} is a draw "
                f"({match.team_a_score}:{match.team_b_score})"
            )

    def _match_outcome(self, match: MatchRecord) -> tuple[int, int, int]:
        """Return (team_a_result, team_b_result, cap_points)."""
        team_a_result = 1 if match.team_a_won else 0
        team_b_result = 1 if match.team_b_won else 0
        return (
            team_a_result,
            team_b_result,
            cap_points(match.team_a_score, match.team_b_score),
        )
