"""Selectable report ranges: all time plus one option per season."""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.common import SeasonRecord, SeasonWindow

ALL_TIME_KEY = "all"
SEASON_KEY = "season"
SEASON_KEY_PREFIX = "season:"
FALLBACK_SEASON_KEY = "season:env"
FALLBACK_SEASON_MONTHS = 6


@dataclass(frozen=True)
class RangeOption:
    key: str
    label: str
    start: datetime | None = None
    end: datetime | None = None
    note: str | None = None

    @property
    def is_season(self) -> bool:
        return self.key.startswith(SEASON_KEY_PREFIX)

    def window(self, *, disable_season_boost: bool = False) -> SeasonWindow | None:
        """Season window for the rating engine, or None for all time."""
        if self.start is None:
            return None
        return SeasonWindow(start=self.start, end=self.end, disable_season_boost=disable_season_boost)


def format_range(start: datetime, end: datetime) -> str:
    """Human readable span, for example ``"Mar 1, 2025 - Aug 31, 2025"``."""
    return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"


def months_before(moment: datetime, months: int) -> datetime:
    """Shift ``moment`` back by whole months, clamping to the target month's last day."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def get_range_options(
    seasons: Iterable[SeasonRecord],
    *,
    now: datetime,
    fallback_start: datetime | None = None,
    fallback_end: datetime | None = None,
) -> list[RangeOption]:
    """Build the range list shown for a chat.

    Stored seasons become ``season:<id>`` options, active ones first and then
    newest start first; an open season ends at ``now``. Without stored
    seasons a single ``season:env`` option is built from the fallback dates.
    """
    options = [RangeOption(key=ALL_TIME_KEY, label="All time")]

    stored = sorted(seasons, key=lambda season: season.start_date, reverse=True)
    stored.sort(key=lambda season: not season.is_active)
    if stored:
        for season in stored:
            end = season.end_date if season.end_date is not None else now
            options.append(
                RangeOption(
                    key=f"{SEASON_KEY_PREFIX}{season.season_id}",
                    label=season.name,
                    start=season.start_date,
                    end=end,
                    note=format_range(season.start_date, end),
                )
            )
        return options

    end = fallback_end if fallback_end is not None else now
    start = fallback_start if fallback_start is not None else months_before(end, FALLBACK_SEASON_MONTHS)
    options.append(
        RangeOption(
            key=FALLBACK_SEASON_KEY,
            label="Season",
            start=start,
            end=end,
            note=format_range(start, end),
        )
    )
    return options


def resolve_range(options: Sequence[RangeOption], key: str | None) -> RangeOption:
    """Pick the option for ``key``; ``"season"`` means the first season option.

    Unknown keys fall back to the first option (all time).
    """
    if not options:
        raise ValueError("no range options to resolve against")

    if key == SEASON_KEY:
        for option in options:
            if option.is_season:
                return option

    for option in options:
        if option.key == key:
            return option
    return options[0]


__all__ = [
    "ALL_TIME_KEY",
    "FALLBACK_SEASON_KEY",
    "RangeOption",
    "format_range",
    "get_range_options",
    "months_before",
    "resolve_range",
]
