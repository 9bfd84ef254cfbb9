"""Load named report profiles from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseNamedConfig, load_named_configs, read_header
from domain.constants import RECENT_FORM_LIMIT
from domain.ranges import ALL_TIME_KEY, SEASON_KEY, SEASON_KEY_PREFIX
from domain.ratings.protocol import PlayerStatus, SeasonBoostMode

DEFAULT_PROFILE_DIR = Path(__file__).resolve().parents[2] / "configs" / "profiles"


@dataclass(frozen=True)
class ReportProfile(BaseNamedConfig):
    """Saved set of report options for one chat view."""

    range_key: str
    status: PlayerStatus
    season_boost: SeasonBoostMode
    recent_form_limit: int

    def as_config_json(self) -> dict[str, Any]:
        return {
            "range": self.range_key,
            "status": self.status.value,
            "season_boost": self.season_boost.value,
            "recent_form_limit": self.recent_form_limit,
        }


def load_report_profiles(config_dir: Path = DEFAULT_PROFILE_DIR) -> list[ReportProfile]:
    """Load and validate all report profile TOML files in a directory."""
    return load_named_configs(
        config_dir,
        _parse_report_profile,
        duplicate_name_label="profile",
    )


def find_report_profile(profiles: list[ReportProfile], name: str) -> ReportProfile:
    for profile in profiles:
        if profile.name == name:
            return profile
    available = ", ".join(profile.name for profile in profiles)
    raise ValueError(f"Unknown profile {name!r}; available: {available}")


def _parse_report_profile(raw: dict[str, Any], file_path: Path) -> ReportProfile:
    name, description = read_header(raw, file_path, "profile")
    report_raw = raw.get("report", {})

    range_key = str(report_raw.get("range", ALL_TIME_KEY)).strip()

    status_value = str(report_raw.get("status", PlayerStatus.ACTIVE.value))
    try:
        status = PlayerStatus(status_value)
    except ValueError:
        raise ValueError(f"{file_path}: [report].status must be one of: active, all") from None

    boost_value = str(report_raw.get("season_boost", SeasonBoostMode.BOOSTED.value))
    try:
        season_boost = SeasonBoostMode(boost_value)
    except ValueError:
        raise ValueError(f"{file_path}: [report].season_boost must be one of: boosted, base") from None

    recent_form_limit = int(report_raw.get("recent_form_limit", RECENT_FORM_LIMIT))

    profile = ReportProfile(
        name=name,
        description=description,
        file_path=file_path,
        range_key=range_key,
        status=status,
        season_boost=season_boost,
        recent_form_limit=recent_form_limit,
    )
    _validate_profile(file_path=file_path, profile=profile)
    return profile


def _validate_profile(*, file_path: Path, profile: ReportProfile) -> None:
    if profile.range_key not in (ALL_TIME_KEY, SEASON_KEY) and not profile.range_key.startswith(
        SEASON_KEY_PREFIX
    ):
        raise ValueError(f"{file_path}: [report].range must be 'all', 'season' or 'season:<id>'")
    if profile.recent_form_limit < 0:
        raise ValueError(f"{file_path}: [report].recent_form_limit must be >= 0")
    if profile.season_boost is SeasonBoostMode.BASE and profile.range_key == ALL_TIME_KEY:
        raise ValueError(f"{file_path}: [report].season_boost = 'base' requires a season range")


__all__ = ["DEFAULT_PROFILE_DIR", "ReportProfile", "find_report_profile", "load_report_profiles"]
