"""Shared TOML loading utilities for named configs."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib


@dataclass(frozen=True)
class BaseNamedConfig:
    """Name, optional description and source file of one TOML config."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar("T", bound=BaseNamedConfig)


def config_files_in(config_dir: Path) -> list[Path]:
    """Sorted ``*.toml`` files of an existing, non-empty config directory."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    files = sorted(config_dir.glob("*.toml"))
    if not files:
        raise ValueError(f"No .toml config files found in: {config_dir}")
    return files


def read_header(raw: dict[str, Any], file_path: Path, section: str) -> tuple[str, str | None]:
    """Return the required ``name`` and optional ``description`` of ``[section]``."""
    header = raw.get(section, {})
    name = str(header.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [{section}].name is required")
    description = header.get("description")
    return name, None if description is None else str(description)


def load_named_configs(
    config_dir: Path,
    parser: Callable[[dict[str, Any], Path], T],
    *,
    duplicate_name_label: str = "profile",
) -> list[T]:
    """Parse every TOML file in ``config_dir``; names must be unique."""
    configs: list[T] = []
    for file_path in config_files_in(config_dir):
        with file_path.open("rb") as file:
            configs.append(parser(tomllib.load(file), file_path))

    duplicates = sorted(name for name, count in Counter(config.name for config in configs).items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate {duplicate_name_label} names found in {config_dir}: {duplicates}")

    return configs


__all__ = ["BaseNamedConfig", "config_files_in", "load_named_configs", "read_header"]
