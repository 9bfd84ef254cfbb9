"""ORM read models."""

from models.base import Base
from models.chat import Chat
from models.match import Match
from models.season import Season
from models.user import ChatUser, User

__all__ = [
    "Base",
    "Chat",
    "ChatUser",
    "Match",
    "Season",
    "User",
]
