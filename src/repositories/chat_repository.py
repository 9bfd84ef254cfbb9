"""Read-only queries for one chat's roster, seasons and match history."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import ChatRecord, MatchRecord, RosterEntry, SeasonRecord
from models import Chat, ChatUser, Match, Season, User


def fetch_chat(session: Session, slug: str) -> ChatRecord | None:
    """Look up a chat by its public slug."""
    row = session.execute(select(Chat.id, Chat.slug, Chat.name).where(Chat.slug == slug)).first()
    if row is None:
        return None
    return ChatRecord(chat_id=row.id, slug=row.slug, name=row.name)


def fetch_roster(session: Session, chat_id: str) -> list[RosterEntry]:
    """Chat members with their chat-scoped flags, ordered by user id."""
    statement = (
        select(
            ChatUser.user_id,
            User.name,
            ChatUser.is_active,
            ChatUser.is_hidden,
            ChatUser.is_admin,
            ChatUser.initial_rating,
            ChatUser.initial_games,
        )
        .join(User, User.id == ChatUser.user_id)
        .where(ChatUser.chat_id == chat_id)
        .order_by(ChatUser.user_id.asc())
    )
    return [
        RosterEntry(
            player_id=int(row.user_id),
            name=str(row.name),
            is_active=bool(row.is_active),
            is_hidden=bool(row.is_hidden),
            is_admin=bool(row.is_admin),
            initial_rating=int(row.initial_rating),
            initial_games=int(row.initial_games),
        )
        for row in session.execute(statement)
    ]


def fetch_matches(
    session: Session,
    chat_id: str,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[MatchRecord]:
    """Fetch a chat's matches in replay order, optionally inside ``[start, end]``."""
    conditions = [Match.chat_id == chat_id]
    if start is not None:
        conditions.append(Match.day >= start)
    if end is not None:
        conditions.append(Match.day <= end)

    statement = select(Match).where(*conditions).order_by(Match.day.asc(), Match.id.asc())
    return [
        MatchRecord(
            match_id=int(match.id),
            player_a1_id=int(match.player_a1_id),
            player_a2_id=int(match.player_a2_id),
            player_b1_id=int(match.player_b1_id),
            player_b2_id=int(match.player_b2_id),
            team_a_score=int(match.team_a_score),
            team_b_score=int(match.team_b_score),
            day=match.day,
            league=match.league,
            chat_id=match.chat_id,
        )
        for match in session.scalars(statement)
    ]


def fetch_seasons(session: Session, chat_id: str) -> list[SeasonRecord]:
    """Stored seasons for a chat, newest start first."""
    statement = select(Season).where(Season.chat_id == chat_id).order_by(Season.start_date.desc())
    return [
        SeasonRecord(
            season_id=int(season.id),
            name=season.name,
            start_date=season.start_date,
            end_date=season.end_date,
            is_active=bool(season.is_active),
        )
        for season in session.scalars(statement)
    ]


__all__ = ["fetch_chat", "fetch_matches", "fetch_roster", "fetch_seasons"]
