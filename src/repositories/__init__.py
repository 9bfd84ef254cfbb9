"""Database repository helpers."""

from repositories.chat_repository import fetch_chat, fetch_matches, fetch_roster, fetch_seasons

__all__ = ["fetch_chat", "fetch_matches", "fetch_roster", "fetch_seasons"]
