"""Aggregate statistics derived from match history and rating results."""

from domain.stats.days import (
    DayResults,
    DayStanding,
    build_day_results,
    build_day_standings,
    day_key,
    filter_matches_by_status,
    list_match_days,
)
from domain.stats.form import (
    FormMark,
    PlayerMatchDetail,
    Streak,
    build_player_form,
    build_player_match_details,
    build_player_result_details,
    build_team_form,
    current_streak,
    format_form,
)
from domain.stats.league import Leader, LeagueSummary, MarginRecord, SideSummary, build_league_summary
from domain.stats.partners import HeadToHead, PartnerBreakdown, build_partner_breakdown
from domain.stats.teams import TeamStats, build_team_stats, player_name

__all__ = [
    "DayResults",
    "DayStanding",
    "FormMark",
    "HeadToHead",
    "Leader",
    "LeagueSummary",
    "MarginRecord",
    "PartnerBreakdown",
    "PlayerMatchDetail",
    "SideSummary",
    "Streak",
    "TeamStats",
    "build_day_results",
    "build_day_standings",
    "build_league_summary",
    "build_partner_breakdown",
    "build_player_form",
    "build_player_match_details",
    "build_player_result_details",
    "build_team_form",
    "build_team_stats",
    "current_streak",
    "day_key",
    "filter_matches_by_status",
    "format_form",
    "list_match_days",
    "player_name",
]
