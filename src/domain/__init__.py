"""Volleyball rating engine domain modules."""

from domain.common import ChatRecord, MatchRecord, RosterEntry, SeasonRecord, SeasonWindow

__all__ = ["ChatRecord", "MatchRecord", "RosterEntry", "SeasonRecord", "SeasonWindow"]
