"""Rating kernel and the two replay calculators built on it."""

from domain.ratings.accumulator import (
    PlayerNotFoundError,
    PlayerResult,
    ResultsAccumulator,
    compute_results,
)
from domain.ratings.kernel import cap_points, expected_score, k_modifier, update_rating, win_probability
from domain.ratings.protocol import PlayerStatus, SeasonBoostMode, Side, TeamRole
from domain.ratings.role_classifier import (
    EloMatchView,
    EloRoleClassifier,
    EloStats,
    RoleStats,
    build_elo_stats,
)

__all__ = [
    "EloMatchView",
    "EloRoleClassifier",
    "EloStats",
    "PlayerNotFoundError",
    "PlayerResult",
    "PlayerStatus",
    "ResultsAccumulator",
    "RoleStats",
    "SeasonBoostMode",
    "Side",
    "TeamRole",
    "build_elo_stats",
    "cap_points",
    "compute_results",
    "expected_score",
    "k_modifier",
    "update_rating",
    "win_probability",
]
