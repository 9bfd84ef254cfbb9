"""Report pipeline: wires one chat's stored data through the rating engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from domain.common import ChatRecord, MatchRecord, RosterEntry, SeasonRecord, sort_matches
from domain.constants import RECENT_FORM_LIMIT
from domain.ranges import RangeOption, get_range_options, resolve_range
from domain.ratings.accumulator import PlayerResult, compute_results
from domain.ratings.protocol import PlayerStatus, SeasonBoostMode
from domain.ratings.role_classifier import EloStats, RoleStats, build_elo_stats
from domain.stats.days import day_key
from domain.stats.form import (
    FormMark,
    Streak,
    build_player_form,
    build_player_match_details,
    build_player_result_details,
    current_streak,
)
from domain.stats.league import LeagueSummary, build_league_summary
from domain.stats.teams import player_name
from repositories.chat_repository import fetch_chat, fetch_matches, fetch_roster, fetch_seasons

logger = logging.getLogger(__name__)


class ChatNotFoundError(LookupError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Chat not found: {slug}")
        self.slug = slug


@dataclass(frozen=True)
class RecentMatch:
    result: FormMark
    score: str
    teammates: tuple[str, ...]
    opponents: tuple[str, ...]


@dataclass(frozen=True)
class PlayerDashboardRow:
    """One rating table row: computed result plus recent-form decorations."""

    result: PlayerResult
    recent_form: tuple[FormMark, ...]
    current_streak: Streak
    recent_results: tuple[str, ...]
    recent_matches: tuple[RecentMatch, ...]
    played_last_day: bool
    role_stats: RoleStats | None


@dataclass(frozen=True)
class RatingReport:
    chat: ChatRecord | None
    roster: list[RosterEntry]
    range_options: list[RangeOption]
    active_range: RangeOption
    status: PlayerStatus
    season_boost: SeasonBoostMode
    matches: list[MatchRecord]
    results: list[PlayerResult]
    rows: list[PlayerDashboardRow]
    elo_stats: EloStats
    league: LeagueSummary


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def filter_visible_results(results: Iterable[PlayerResult], status: PlayerStatus) -> list[PlayerResult]:
    """Drop hidden players, and inactive ones unless ``status`` is ALL."""
    return [
        result
        for result in results
        if not result.is_hidden and (status is PlayerStatus.ALL or result.is_active)
    ]


def _last_day_players(matches: list[MatchRecord]) -> set[int]:
    if not matches:
        return set()
    last_day = day_key(matches[-1].day)
    return {
        player_id
        for match in matches
        if day_key(match.day) == last_day
        for player_id in match.player_ids
    }


def build_dashboard_rows(
    results: Iterable[PlayerResult],
    matches: list[MatchRecord],
    names: Mapping[int, str],
    *,
    recent_limit: int = RECENT_FORM_LIMIT,
    role_stats: Mapping[int, RoleStats] | None = None,
) -> list[PlayerDashboardRow]:
    """Decorate results with recent form, streaks and last-day attendance.

    The streak is taken over the whole range, the form and match lists only
    over the last ``recent_limit`` matches.
    """
    full_forms = build_player_form(matches)
    result_details = build_player_result_details(matches, recent_limit)
    match_details = build_player_match_details(matches, recent_limit)
    last_day_players = _last_day_players(matches)

    rows = []
    for result in results:
        recent_matches = tuple(
            RecentMatch(
                result=detail.result,
                score=detail.score,
                teammates=tuple(player_name(names, other) for other in detail.teammate_ids),
                opponents=tuple(player_name(names, other) for other in detail.opponent_ids),
            )
            for detail in match_details.get(result.player_id, [])
        )
        rows.append(
            PlayerDashboardRow(
                result=result,
                recent_form=tuple(detail.result for detail in recent_matches),
                current_streak=current_streak(full_forms.get(result.player_id, [])),
                recent_results=tuple(result_details.get(result.player_id, [])),
                recent_matches=recent_matches,
                played_last_day=result.player_id in last_day_players,
                role_stats=role_stats.get(result.player_id) if role_stats is not None else None,
            )
        )
    return rows


def build_rating_report(
    roster: Iterable[RosterEntry],
    matches: Iterable[MatchRecord],
    seasons: Iterable[SeasonRecord] = (),
    *,
    range_key: str = "all",
    status: PlayerStatus = PlayerStatus.ACTIVE,
    season_boost: SeasonBoostMode = SeasonBoostMode.BOOSTED,
    now: datetime | None = None,
    recent_limit: int = RECENT_FORM_LIMIT,
    fallback_start: datetime | None = None,
    fallback_end: datetime | None = None,
    chat: ChatRecord | None = None,
) -> RatingReport:
    """Compute the full rating report for already-fetched chat data.

    The season boost can only be switched off for a season range; asking for
    ``BASE`` on the all-time range is ignored.
    """
    entries = list(roster)
    range_options = get_range_options(
        seasons,
        now=now if now is not None else utc_now(),
        fallback_start=fallback_start,
        fallback_end=fallback_end,
    )
    active_range = resolve_range(range_options, range_key)

    disable_season_boost = season_boost is SeasonBoostMode.BASE and active_range.is_season
    effective_boost = SeasonBoostMode.BASE if disable_season_boost else SeasonBoostMode.BOOSTED
    window = active_range.window(disable_season_boost=disable_season_boost)

    in_range = sort_matches([match for match in matches if window is None or window.contains(match.day)])

    all_results = compute_results(entries, in_range, window)
    results = filter_visible_results(all_results, status)
    elo_stats = build_elo_stats(
        entries,
        in_range,
        season_mode=window is not None,
        disable_season_boost=disable_season_boost,
    )

    names = {entry.player_id: entry.name for entry in entries}
    rows = build_dashboard_rows(
        results,
        in_range,
        names,
        recent_limit=recent_limit,
        role_stats=elo_stats.player_role_stats,
    )
    league = build_league_summary(entries, results, in_range)

    logger.info(
        "report chat=%s range=%s status=%s season_boost=%s matches=%d players=%d",
        chat.slug if chat is not None else "-",
        active_range.key,
        status.value,
        effective_boost.value,
        len(in_range),
        len(results),
    )

    return RatingReport(
        chat=chat,
        roster=entries,
        range_options=range_options,
        active_range=active_range,
        status=status,
        season_boost=effective_boost,
        matches=in_range,
        results=results,
        rows=rows,
        elo_stats=elo_stats,
        league=league,
    )


def load_rating_report(
    session_factory,
    chat_slug: str,
    *,
    range_key: str = "all",
    status: PlayerStatus = PlayerStatus.ACTIVE,
    season_boost: SeasonBoostMode = SeasonBoostMode.BOOSTED,
    now: datetime | None = None,
    recent_limit: int = RECENT_FORM_LIMIT,
    fallback_start: datetime | None = None,
    fallback_end: datetime | None = None,
) -> RatingReport:
    """Fetch one chat's data through the repository and build its report."""
    now = now if now is not None else utc_now()
    with session_factory() as session:
        chat = fetch_chat(session, chat_slug)
        if chat is None:
            raise ChatNotFoundError(chat_slug)

        roster = fetch_roster(session, chat.chat_id)
        seasons = fetch_seasons(session, chat.chat_id)
        active_range = resolve_range(
            get_range_options(seasons, now=now, fallback_start=fallback_start, fallback_end=fallback_end),
            range_key,
        )
        matches = fetch_matches(session, chat.chat_id, start=active_range.start, end=active_range.end)

    return build_rating_report(
        roster,
        matches,
        seasons,
        range_key=range_key,
        status=status,
        season_boost=season_boost,
        now=now,
        recent_limit=recent_limit,
        fallback_start=fallback_start,
        fallback_end=fallback_end,
        chat=chat,
    )


__all__ = [
    "ChatNotFoundError",
    "PlayerDashboardRow",
    "RatingReport",
    "RecentMatch",
    "build_dashboard_rows",
    "build_rating_report",
    "filter_visible_results",
    "load_rating_report",
    "utc_now",
]
