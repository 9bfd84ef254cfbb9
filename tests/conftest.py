"""Shared fixtures for database-backed tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from models import Base, Chat, ChatUser, Match, Season, User


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    """File-backed SQLite database with the read-model tables created."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'volley.db'}")
    Base.metadata.create_all(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def seeded_chat(session_factory: sessionmaker[Session]) -> str:
    """Insert one chat with a small roster, two seasons and five matches."""
    with session_factory() as session:
        session.add_all(
            [
                Chat(id="-1001", slug="beach", name="Beach crew"),
                Chat(id="-1002", slug="other", name="Other"),
            ]
        )
        names = ["Anna", "Boris", "Clara", "Dmitri", "Elena"]
        session.add_all([User(id=user_id, name=name) for user_id, name in enumerate(names, start=1)])
        session.flush()
        session.add_all(
            [
                ChatUser(chat_id="-1001", user_id=1, initial_rating=1620, initial_games=35),
                ChatUser(chat_id="-1001", user_id=2, initial_rating=1540, initial_games=12),
                ChatUser(chat_id="-1001", user_id=3),
                ChatUser(chat_id="-1001", user_id=4, is_active=False),
                ChatUser(chat_id="-1001", user_id=5, is_hidden=True, is_admin=True),
                ChatUser(chat_id="-1002", user_id=1),
            ]
        )
        session.add_all(
            [
                Season(chat_id="-1001", name="Spring", start_date=datetime(2025, 3, 1), end_date=datetime(2025, 5, 31)),
                Season(chat_id="-1001", name="Summer", start_date=datetime(2025, 6, 1), is_active=True),
            ]
        )
        session.add_all(
            [
                _match(10, "-1001", datetime(2025, 4, 2, 18, 0), (1, 2), (3, 4), 21, 17),
                _match(11, "-1001", datetime(2025, 6, 3, 18, 0), (1, 3), (2, 4), 18, 21),
                _match(13, "-1001", datetime(2025, 6, 3, 17, 0), (1, 4), (2, 3), 21, 12),
                _match(12, "-1001", datetime(2025, 6, 10, 18, 0), (1, 2), (3, 5), 25, 23),
                _match(14, "-1002", datetime(2025, 6, 10, 18, 0), (1, 2), (3, 4), 21, 3),
            ]
        )
        session.commit()
    return "beach"


def _match(match_id: int, chat_id: str, day: datetime, team_a, team_b, score_a: int, score_b: int) -> Match:
    return Match(
        id=match_id,
        chat_id=chat_id,
        player_a1_id=team_a[0],
        player_a2_id=team_a[1],
        player_b1_id=team_b[0],
        player_b2_id=team_b[1],
        team_a_score=score_a,
        team_b_score=score_b,
        day=day,
    )
