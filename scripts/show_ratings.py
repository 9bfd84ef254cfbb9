#!/usr/bin/env python3
"""Print rating tables, league stats, day results, team stats and player breakdowns."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DB_URL_ENV, DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.config import DEFAULT_PROFILE_DIR, ReportProfile, find_report_profile, load_report_profiles
from domain.constants import RECENT_FORM_LIMIT
from domain.pipeline import ChatNotFoundError, RatingReport, load_rating_report
from domain.ratings.accumulator import PlayerNotFoundError
from domain.ratings.protocol import PlayerStatus, SeasonBoostMode
from domain.ratings.role_classifier import RoleStats
from domain.stats.days import build_day_results, filter_matches_by_status
from domain.stats.form import format_form
from domain.stats.partners import HeadToHead, build_partner_breakdown
from domain.stats.teams import build_team_stats

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Volleyball rating reports for one chat.",
)

ChatSlug = Annotated[str, typer.Argument(help="Chat slug from chats.slug.")]
DbUrl = Annotated[
    str,
    typer.Option(
        "--db-url",
        envvar=DB_URL_ENV,
        help="Database URL. Defaults to the local volley postgres instance.",
    ),
]
ProfileName = Annotated[
    str | None,
    typer.Option("--profile", help="Report profile name; explicit options override it."),
]
ProfileDir = Annotated[
    Path,
    typer.Option("--profile-dir", help="Directory holding report profile TOML files."),
]
RangeKey = Annotated[
    str | None,
    typer.Option("--range", help="Range key: all, season or season:<id>."),
]
Status = Annotated[
    PlayerStatus | None,
    typer.Option("--status", help="Show only active players, or all non-hidden players."),
]
SeasonBoost = Annotated[
    SeasonBoostMode | None,
    typer.Option("--season-boost", help="Use 'base' to rate a season without the new-player boost."),
]
SeasonStart = Annotated[
    datetime | None,
    typer.Option("--season-start", envvar="SEASON_START", help="Fallback season start when none are stored."),
]
SeasonEnd = Annotated[
    datetime | None,
    typer.Option("--season-end", envvar="SEASON_END", help="Fallback season end when none are stored."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _resolve_profile(profile_name: str | None, profile_dir: Path) -> ReportProfile | None:
    if profile_name is None:
        return None
    try:
        return find_report_profile(load_report_profiles(profile_dir), profile_name)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--profile") from exc


def _load_report(
    *,
    chat_slug: str,
    db_url: str,
    profile_name: str | None,
    profile_dir: Path,
    range_key: str | None,
    status: PlayerStatus | None,
    season_boost: SeasonBoostMode | None,
    season_start: datetime | None,
    season_end: datetime | None,
) -> RatingReport:
    profile = _resolve_profile(profile_name, profile_dir)
    if profile is not None:
        range_key = range_key if range_key is not None else profile.range_key
        status = status if status is not None else profile.status
        season_boost = season_boost if season_boost is not None else profile.season_boost
    recent_limit = profile.recent_form_limit if profile is not None else RECENT_FORM_LIMIT

    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)
    try:
        return load_rating_report(
            session_factory,
            chat_slug,
            range_key=range_key or "all",
            status=status or PlayerStatus.ACTIVE,
            season_boost=season_boost or SeasonBoostMode.BOOSTED,
            recent_limit=recent_limit,
            fallback_start=season_start,
            fallback_end=season_end,
        )
    except ChatNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="CHAT_SLUG") from exc
    except PlayerNotFoundError as exc:
        typer.echo(f"Cannot compute ratings: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_header(report: RatingReport) -> None:
    note = f" ({report.active_range.note})" if report.active_range.note else ""
    typer.echo(
        f"chat={report.chat.slug if report.chat else '-'} "
        f"range={report.active_range.key}{note} "
        f"status={report.status.value} season_boost={report.season_boost.value} "
        f"matches={len(report.matches)}"
    )


def _format_roles(stats: RoleStats | None) -> str:
    if stats is None:
        return ""
    return (
        f"fav {stats.favorite_wins}-{stats.favorite_losses} "
        f"dog {stats.underdog_wins}-{stats.underdog_losses} "
        f"even {stats.even_wins}-{stats.even_losses}"
    )


def _format_head_to_head(rows: list[HeadToHead]) -> str:
    if not rows:
        return "-"
    return ", ".join(f"{row.name} {row.wins}-{row.losses}" for row in rows)


@app.command()
def table(
    chat_slug: ChatSlug,
    db_url: DbUrl = DEFAULT_DB_URL,
    profile: ProfileName = None,
    profile_dir: ProfileDir = DEFAULT_PROFILE_DIR,
    range_key: RangeKey = None,
    status: Status = None,
    season_boost: SeasonBoost = None,
    season_start: SeasonStart = None,
    season_end: SeasonEnd = None,
) -> None:
    """Print the rating table with recent form and favorite/underdog records."""
    report = _load_report(
        chat_slug=chat_slug,
        db_url=db_url,
        profile_name=profile,
        profile_dir=profile_dir,
        range_key=range_key,
        status=status,
        season_boost=season_boost,
        season_start=season_start,
        season_end=season_end,
    )
    _echo_header(report)
    if not report.rows:
        typer.echo("No players to show.")
        return

    for index, row in enumerate(report.rows, start=1):
        result = row.result
        streak = f"{row.current_streak.mark.value}{row.current_streak.count}" if row.current_streak.mark else "-"
        marker = "*" if row.played_last_day else " "
        typer.echo(
            f"{index:2d}.{marker}{result.name:<20} rating={result.rating:5d} "
            f"({result.rating_change:+d}) games={result.games:4d} "
            f"w/l={result.wins}-{result.losses} winrate={result.winrate:3d}% "
            f"streak={streak:<4} form={format_form(row.recent_form):<6} "
            f"{_format_roles(row.role_stats)}"
        )


@app.command()
def league(
    chat_slug: ChatSlug,
    db_url: DbUrl = DEFAULT_DB_URL,
    profile: ProfileName = None,
    profile_dir: ProfileDir = DEFAULT_PROFILE_DIR,
    range_key: RangeKey = None,
    status: Status = None,
    season_boost: SeasonBoost = None,
    season_start: SeasonStart = None,
    season_end: SeasonEnd = None,
) -> None:
    """Print league-wide summary figures and leaders."""
    report = _load_report(
        chat_slug=chat_slug,
        db_url=db_url,
        profile_name=profile,
        profile_dir=profile_dir,
        range_key=range_key,
        status=status,
        season_boost=season_boost,
        season_start=season_start,
        season_end=season_end,
    )
    _echo_header(report)
    summary = report.league

    typer.echo(
        f"players total={summary.players_total} active={summary.players_active} "
        f"shown={summary.players_shown}"
    )
    typer.echo(
        f"rating high={summary.rating_high} low={summary.rating_low} avg={summary.average_rating}"
    )
    typer.echo(
        f"games total={summary.total_games} avg={summary.average_games} "
        f"points total={summary.total_points} avg={summary.average_points} "
        f"margin avg={summary.average_margin}"
    )
    for label, side in (("A", summary.team_a_side), ("B", summary.team_b_side)):
        typer.echo(
            f"side {label}: wins={side.wins}/{side.games} diff_total={side.diff_total:+d} "
            f"diff_avg={side.diff_avg}"
        )
    if summary.biggest_margin is not None and summary.closest_match is not None:
        typer.echo(
            f"biggest margin={summary.biggest_margin.value} on {summary.biggest_margin.day:%b %d} "
            f"closest={summary.closest_match.value} on {summary.closest_match.day:%b %d}"
        )
    for label, leader in (
        ("top rating", summary.top_rating),
        ("best winrate", summary.best_winrate),
        ("most active", summary.most_active_player),
        ("best diff", summary.best_diff),
    ):
        if leader is not None:
            typer.echo(f"{label}: {leader.name} ({leader.value})")


@app.command()
def days(
    chat_slug: ChatSlug,
    day: Annotated[
        datetime | None,
        typer.Option("--day", formats=["%Y-%m-%d"], help="Day to show; defaults to the latest match day."),
    ] = None,
    db_url: DbUrl = DEFAULT_DB_URL,
    profile: ProfileName = None,
    profile_dir: ProfileDir = DEFAULT_PROFILE_DIR,
    range_key: RangeKey = None,
    status: Status = None,
    season_start: SeasonStart = None,
    season_end: SeasonEnd = None,
) -> None:
    """Print standings and matches for one calendar day."""
    report = _load_report(
        chat_slug=chat_slug,
        db_url=db_url,
        profile_name=profile,
        profile_dir=profile_dir,
        range_key=range_key,
        status=status,
        season_boost=None,
        season_start=season_start,
        season_end=season_end,
    )
    matches = filter_matches_by_status(report.roster, report.matches, report.status)
    results = build_day_results(report.roster, matches, day.date() if day is not None else None)
    if results.day is None:
        typer.echo("No matches recorded.")
        return

    typer.echo(
        f"day={results.day.isoformat()} "
        f"previous={results.previous_day.isoformat() if results.previous_day else '-'} "
        f"next={results.next_day.isoformat() if results.next_day else '-'}"
    )
    for index, standing in enumerate(results.standings, start=1):
        typer.echo(
            f"{index:2d}. {standing.name:<20} w/l={standing.wins}-{standing.losses} "
            f"points={standing.points_for}-{standing.points_against} diff={standing.point_diff:+d}"
        )
    names = {entry.player_id: entry.name for entry in report.roster}
    for match in results.matches:
        team_a = " & ".join(names.get(player_id, f"Player {player_id}") for player_id in match.team_a_ids)
        team_b = " & ".join(names.get(player_id, f"Player {player_id}") for player_id in match.team_b_ids)
        typer.echo(f"    {team_a} {match.team_a_score}:{match.team_b_score} {team_b}")


@app.command()
def teams(
    chat_slug: ChatSlug,
    min_games: Annotated[
        int,
        typer.Option("--min-games", help="Hide pairings with fewer games than this."),
    ] = 1,
    db_url: DbUrl = DEFAULT_DB_URL,
    profile: ProfileName = None,
    profile_dir: ProfileDir = DEFAULT_PROFILE_DIR,
    range_key: RangeKey = None,
    season_boost: SeasonBoost = None,
    season_start: SeasonStart = None,
    season_end: SeasonEnd = None,
) -> None:
    """Print per-pairing team statistics."""
    if min_games < 0:
        raise typer.BadParameter("--min-games must be >= 0")

    report = _load_report(
        chat_slug=chat_slug,
        db_url=db_url,
        profile_name=profile,
        profile_dir=profile_dir,
        range_key=range_key,
        status=PlayerStatus.ALL,
        season_boost=season_boost,
        season_start=season_start,
        season_end=season_end,
    )
    _echo_header(report)
    rows = [
        row
        for row in build_team_stats(
            report.roster,
            report.matches,
            role_stats=report.elo_stats.team_role_stats,
        )
        if row.games >= min_games
    ]
    if not rows:
        typer.echo("No team pairings to show.")
        return

    for index, row in enumerate(rows, start=1):
        team = f"{row.player1_name} & {row.player2_name}"
        typer.echo(
            f"{index:2d}. {team:<32} games={row.games:3d} w/l={row.wins}-{row.losses} "
            f"winrate={row.win_rate:6.1%} avg_diff={row.avg_point_diff:+6.2f} "
            f"form={format_form(row.recent_form):<6} {_format_roles(row.role_stats)}"
        )


@app.command()
def player(
    chat_slug: ChatSlug,
    player_id: Annotated[int, typer.Option("--player-id", help="User id from users.id.")],
    db_url: DbUrl = DEFAULT_DB_URL,
    profile: ProfileName = None,
    profile_dir: ProfileDir = DEFAULT_PROFILE_DIR,
    range_key: RangeKey = None,
    season_boost: SeasonBoost = None,
    season_start: SeasonStart = None,
    season_end: SeasonEnd = None,
) -> None:
    """Print one player's rating line with best/worst partners and opponents."""
    report = _load_report(
        chat_slug=chat_slug,
        db_url=db_url,
        profile_name=profile,
        profile_dir=profile_dir,
        range_key=range_key,
        status=PlayerStatus.ALL,
        season_boost=season_boost,
        season_start=season_start,
        season_end=season_end,
    )
    row = next((row for row in report.rows if row.result.player_id == player_id), None)
    if row is None:
        raise typer.BadParameter(f"No visible player with id {player_id}", param_hint="--player-id")

    result = row.result
    _echo_header(report)
    typer.echo(
        f"{result.name}: rating={result.rating} games={result.games} "
        f"w/l={result.wins}-{result.losses} winrate={result.winrate}% "
        f"points={result.points_for}-{result.points_against} "
        f"best_place={result.place_highest} worst_place={result.place_lowest} "
        f"longest_win={result.longest_win_streak} longest_loss={result.longest_loss_streak}"
    )
    typer.echo(f"recent: {', '.join(row.recent_results) or '-'}")

    breakdown = build_partner_breakdown(player_id, report.matches, report.roster)
    typer.echo(f"best partners: {_format_head_to_head(breakdown.best_partners)}")
    typer.echo(f"worst partners: {_format_head_to_head(breakdown.worst_partners)}")
    typer.echo(f"tough opponents: {_format_head_to_head(breakdown.tough_opponents)}")
    typer.echo(f"easy opponents: {_format_head_to_head(breakdown.easy_opponents)}")


@app.command()
def profiles(profile_dir: ProfileDir = DEFAULT_PROFILE_DIR) -> None:
    """List available report profiles."""
    try:
        loaded = load_report_profiles(profile_dir)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--profile-dir") from exc

    for item in loaded:
        typer.echo(f"{item.name} file={item.file_path.name} {item.as_config_json()}")


if __name__ == "__main__":
    app()
