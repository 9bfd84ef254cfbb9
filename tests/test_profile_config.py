"""Tests for TOML-based report profile loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.config import DEFAULT_PROFILE_DIR, find_report_profile, load_report_profiles
from domain.ratings.protocol import PlayerStatus, SeasonBoostMode


def _write(path: Path, body: str) -> None:
    path.write_text(body.strip())


def test_load_report_profiles_from_directory(tmp_path: Path) -> None:
    _write(
        tmp_path / "season.toml",
        """
[profile]
name = "season_all"
description = "Season view with everyone"

[report]
range = "season:4"
status = "all"
season_boost = "base"
recent_form_limit = 10
""",
    )

    profiles = load_report_profiles(tmp_path)
    assert len(profiles) == 1

    profile = profiles[0]
    assert profile.name == "season_all"
    assert profile.description == "Season view with everyone"
    assert profile.range_key == "season:4"
    assert profile.status is PlayerStatus.ALL
    assert profile.season_boost is SeasonBoostMode.BASE
    assert profile.recent_form_limit == 10
    assert profile.as_config_json()["status"] == "all"


def test_report_defaults(tmp_path: Path) -> None:
    _write(tmp_path / "minimal.toml", '[profile]\nname = "minimal"\n')

    profile = load_report_profiles(tmp_path)[0]

    assert profile.description is None
    assert profile.range_key == "all"
    assert profile.status is PlayerStatus.ACTIVE
    assert profile.season_boost is SeasonBoostMode.BOOSTED
    assert profile.recent_form_limit == 6


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ('[profile]\nname = ""\n', r"\[profile\]\.name is required"),
        ('[profile]\nname = "x"\n[report]\nstatus = "hidden"\n', r"\[report\]\.status must be one of"),
        ('[profile]\nname = "x"\n[report]\nseason_boost = "double"\n', r"\[report\]\.season_boost must be one of"),
        ('[profile]\nname = "x"\n[report]\nrange = "last-week"\n', r"\[report\]\.range must be"),
        ('[profile]\nname = "x"\n[report]\nrecent_form_limit = -1\n', r"\[report\]\.recent_form_limit must be >= 0"),
        ('[profile]\nname = "x"\n[report]\nseason_boost = "base"\n', r"requires a season range"),
    ],
)
def test_invalid_profiles_name_file_and_field(tmp_path: Path, body: str, message: str) -> None:
    _write(tmp_path / "bad.toml", body)

    with pytest.raises(ValueError, match=message):
        load_report_profiles(tmp_path)


def test_duplicate_profile_names_rejected(tmp_path: Path) -> None:
    _write(tmp_path / "a.toml", '[profile]\nname = "same"\n')
    _write(tmp_path / "b.toml", '[profile]\nname = "same"\n')

    with pytest.raises(ValueError, match="Duplicate profile names"):
        load_report_profiles(tmp_path)


def test_missing_or_empty_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_report_profiles(tmp_path / "missing")
    with pytest.raises(ValueError, match="No .toml config files"):
        load_report_profiles(tmp_path)

    file_path = tmp_path / "file.toml"
    _write(file_path, '[profile]\nname = "x"\n')
    with pytest.raises(NotADirectoryError):
        load_report_profiles(file_path)


def test_bundled_profiles_load() -> None:
    profiles = load_report_profiles(DEFAULT_PROFILE_DIR)

    assert {profile.name for profile in profiles} == {"all-time", "season", "season-base"}
    assert find_report_profile(profiles, "season-base").season_boost is SeasonBoostMode.BASE
    with pytest.raises(ValueError, match="Unknown profile"):
        find_report_profile(profiles, "nope")
