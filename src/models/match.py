"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Match(Base):
    """One recorded two-vs-two match result."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("team_a_score <> team_b_score", name="ck_match_not_draw"),
        Index("idx_match_chat_day", "chat_id", "day", "id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    chat_id: Mapped[str | None] = mapped_column(ForeignKey("chats.id"), nullable=True)
    player_a1_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    player_a2_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    player_b1_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    player_b2_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    team_a_score: Mapped[int] = mapped_column(Integer, nullable=False)
    team_b_score: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    league: Mapped[int | None] = mapped_column(Integer, nullable=True)
