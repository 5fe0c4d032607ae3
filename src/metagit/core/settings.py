"""Status settings data structures and persistence.

Settings live per repository in `<git dir>/metagit/config.toml` and are loaded
once at CLI entry into MetagitContext.
"""

import logging
import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from metagit.core.status_flags import (
    ALL_STATUSES,
    NO_STATUSES,
    StatusFlags,
    flag_names,
    parse_flag_names,
)
from metagit.status.models.status_data import TreeSettings

logger = logging.getLogger(__name__)

SETTINGS_DIR_NAME = "metagit"
SETTINGS_FILE_NAME = "config.toml"

BOOL_FIELDS = ("show_empty_folders", "detect_renames", "include_ignored")
INT_FIELDS = ("project_status_overlay_depth",)
FLAG_FIELDS = ("status_filter", "minimized_statuses")
SETTINGS_FIELDS = BOOL_FIELDS + INT_FIELDS + FLAG_FIELDS


@dataclass(frozen=True)
class StatusSettings:
    """Immutable status settings.

    project_status_overlay_depth is the tree rollup depth: the number of levels
    above a changed file that are marked as changed; -1 means no limit.
    """

    show_empty_folders: bool = False
    project_status_overlay_depth: int = 1
    detect_renames: bool = True
    include_ignored: bool = False
    status_filter: StatusFlags = field(default=ALL_STATUSES)
    minimized_statuses: StatusFlags = field(default=NO_STATUSES)

    def tree_settings(self) -> TreeSettings:
        return TreeSettings(
            show_empty_folders=self.show_empty_folders,
            rollup_depth=self.project_status_overlay_depth,
        )


def _flags_to_toml(flags: StatusFlags) -> list[str]:
    if flags == ALL_STATUSES:
        return ["all"]
    if flags == NO_STATUSES:
        return []
    return flag_names(flags)


def _flags_from_toml(value: Any, key: str, path: Path) -> StatusFlags:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' must be a list of status flag names in {path}")
    try:
        return parse_flag_names(value)
    except ValueError as e:
        raise ValueError(f"Invalid '{key}' in {path}: {e}") from e


def settings_from_dict(data: dict[str, Any], path: Path) -> StatusSettings:
    """Build StatusSettings from parsed TOML, falling back to defaults per key.

    Raises:
        ValueError: If a value has the wrong type or names an unknown flag
    """
    defaults = StatusSettings()
    values: dict[str, Any] = {}

    for key in BOOL_FIELDS:
        if key in data:
            if not isinstance(data[key], bool):
                raise ValueError(f"'{key}' must be true or false in {path}")
            values[key] = data[key]

    for key in INT_FIELDS:
        if key in data:
            if isinstance(data[key], bool) or not isinstance(data[key], int):
                raise ValueError(f"'{key}' must be an integer in {path}")
            if data[key] < -1:
                raise ValueError(f"'{key}' must be -1 (unlimited) or greater in {path}")
            values[key] = data[key]

    for key in FLAG_FIELDS:
        if key in data:
            values[key] = _flags_from_toml(data[key], key, path)

    return StatusSettings(
        show_empty_folders=values.get("show_empty_folders", defaults.show_empty_folders),
        project_status_overlay_depth=values.get(
            "project_status_overlay_depth", defaults.project_status_overlay_depth
        ),
        detect_renames=values.get("detect_renames", defaults.detect_renames),
        include_ignored=values.get("include_ignored", defaults.include_ignored),
        status_filter=values.get("status_filter", defaults.status_filter),
        minimized_statuses=values.get("minimized_statuses", defaults.minimized_statuses),
    )


class SettingsStore(ABC):
    """Abstract interface for status settings persistence.

    Provides dependency injection for settings access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if settings have been saved."""
        ...

    @abstractmethod
    def load(self) -> StatusSettings:
        """Load settings, returning defaults when none are saved.

        Raises:
            ValueError: If the stored settings are malformed
        """
        ...

    @abstractmethod
    def save(self, settings: StatusSettings) -> None:
        """Persist settings."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the settings location (for error messages and debugging)."""
        ...


class FilesystemSettingsStore(SettingsStore):
    """Production implementation that reads/writes `<git dir>/metagit/config.toml`."""

    def __init__(self, config_path: Path) -> None:
        self._path = config_path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> StatusSettings:
        if not self._path.exists():
            logger.debug("No settings at %s, using defaults", self._path)
            return StatusSettings()

        try:
            data = tomllib.loads(self._path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed settings file {self._path}: {e}") from e

        settings = settings_from_dict(data, self._path)
        logger.debug("Loaded settings from %s: %s", self._path, settings)
        return settings

    def save(self, settings: StatusSettings) -> None:
        """Save settings, preserving comments and unknown keys in an existing file.

        Raises:
            PermissionError: If directory or file cannot be written
        """
        parent = self._path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable."
            )
        parent.mkdir(parents=True, exist_ok=True)

        if self._path.exists():
            doc = tomlkit.parse(self._path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("metagit status settings"))

        doc["show_empty_folders"] = settings.show_empty_folders
        doc["project_status_overlay_depth"] = settings.project_status_overlay_depth
        doc["detect_renames"] = settings.detect_renames
        doc["include_ignored"] = settings.include_ignored
        doc["status_filter"] = _flags_to_toml(settings.status_filter)
        doc["minimized_statuses"] = _flags_to_toml(settings.minimized_statuses)

        self._path.write_text(tomlkit.dumps(doc), encoding="utf-8")
        logger.debug("Saved settings to %s", self._path)

    def path(self) -> Path:
        return self._path


class InMemorySettingsStore(SettingsStore):
    """Test implementation that stores settings in memory without touching filesystem."""

    def __init__(self, settings: StatusSettings | None = None) -> None:
        """Initialize in-memory store.

        Args:
            settings: Initial saved settings (None = nothing saved yet)
        """
        self._settings = settings

    def exists(self) -> bool:
        return self._settings is not None

    def load(self) -> StatusSettings:
        if self._settings is None:
            return StatusSettings()
        return self._settings

    def save(self, settings: StatusSettings) -> None:
        self._settings = settings

    def path(self) -> Path:
        return Path("/fake/.git/metagit/config.toml")
