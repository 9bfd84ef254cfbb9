"""Tests for report range options."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.common import SeasonRecord
from domain.ranges import format_range, get_range_options, months_before, resolve_range

NOW = datetime(2025, 10, 15, 12, 0)

SEASONS = [
    SeasonRecord(season_id=1, name="Spring", start_date=datetime(2025, 3, 1), end_date=datetime(2025, 5, 31)),
    SeasonRecord(season_id=2, name="Autumn", start_date=datetime(2025, 9, 1), is_active=True),
    SeasonRecord(season_id=3, name="Summer", start_date=datetime(2025, 6, 1), end_date=datetime(2025, 8, 31)),
]


def test_all_time_first_then_active_then_newest() -> None:
    options = get_range_options(SEASONS, now=NOW)

    assert [option.key for option in options] == ["all", "season:2", "season:3", "season:1"]
    assert options[0].start is None
    assert options[0].window() is None


def test_open_season_ends_now() -> None:
    autumn = get_range_options(SEASONS, now=NOW)[1]

    assert autumn.label == "Autumn"
    assert autumn.end == NOW
    assert autumn.note == "Sep 1, 2025 - Oct 15, 2025"


def test_fallback_season_without_stored_seasons() -> None:
    options = get_range_options([], now=NOW)

    assert [option.key for option in options] == ["all", "season:env"]
    assert options[1].start == datetime(2025, 4, 15, 12, 0)
    assert options[1].end == NOW


def test_fallback_season_uses_configured_dates() -> None:
    start = datetime(2025, 1, 1)
    end = datetime(2025, 6, 30)

    option = get_range_options([], now=NOW, fallback_start=start, fallback_end=end)[1]

    assert (option.start, option.end) == (start, end)


def test_months_before_clamps_to_month_end() -> None:
    assert months_before(datetime(2025, 8, 31), 6) == datetime(2025, 2, 28)
    assert months_before(datetime(2024, 8, 31), 6) == datetime(2024, 2, 29)
    assert months_before(datetime(2025, 3, 15), 6) == datetime(2024, 9, 15)


def test_resolve_range() -> None:
    options = get_range_options(SEASONS, now=NOW)

    assert resolve_range(options, "season").key == "season:2"
    assert resolve_range(options, "season:3").label == "Summer"
    assert resolve_range(options, "season:99").key == "all"
    assert resolve_range(options, None).key == "all"


def test_resolve_range_requires_options() -> None:
    with pytest.raises(ValueError, match="no range options"):
        resolve_range([], "all")


def test_season_window_carries_boost_flag() -> None:
    option = get_range_options(SEASONS, now=NOW)[1]

    window = option.window(disable_season_boost=True)

    assert window.start == datetime(2025, 9, 1)
    assert window.disable_season_boost is True


def test_format_range() -> None:
    assert format_range(datetime(2025, 3, 1), datetime(2025, 5, 31)) == "Mar 1, 2025 - May 31, 2025"
