"""Settings manager for asmprobe settings.yaml files.

Manages three-scope settings system:
- User global (~/.asmprobe/settings.yaml)
- Project (.asmprobe/settings.yaml)
- Local (.asmprobe/settings.local.yaml)

Environment variables override the merged files:
- ASMPROBE_IGNORE_FILE: excluded assembly file name
- ASMPROBE_SHARED_DIR: shared runtime directory
- ASMPROBE_SEARCH_DIRS: extra search directories (os.pathsep separated),
  probed before the configured ones
"""

import logging
import os
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import ValidationError

from .exclusion_filter import ExclusionFilter
from .resolvers import AssemblyResolver
from .schema import ProbeSettings
from .schema import Settings

logger = logging.getLogger(__name__)

ScopeType = Literal["local", "project", "global"]


class SettingsError(Exception):
    """Raised when a settings file cannot be read or fails validation."""

    def __init__(self, path: Path | None, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, asmprobe_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            asmprobe_dir: Base directory for project/local settings (for testing).
                          If None, uses .asmprobe in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.asmprobe.
        """
        if asmprobe_dir is None:
            asmprobe_dir = Path(".asmprobe")
        if user_dir is None:
            user_dir = Path.home() / ".asmprobe"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = asmprobe_dir / "settings.yaml"
        self.local_settings_file = asmprobe_dir / "settings.local.yaml"

    def scope_path(self, scope: ScopeType) -> Path:
        return {
            "local": self.local_settings_file,
            "project": self.project_settings_file,
            "global": self.user_settings_file,
        }[scope]

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            data = self._read_settings(path)
            if data:
                merged = self._deep_merge(merged, data)
        return merged

    def get_settings(self, *, strict: bool = False) -> Settings:
        """Get validated effective settings, including environment overrides.

        Args:
            strict: Raise SettingsError on invalid values instead of falling
                    back to defaults

        Raises:
            SettingsError: Invalid settings (strict mode only)
        """
        probe = self.get_merged_settings().get("probe") or {}

        if ignore := os.getenv("ASMPROBE_IGNORE_FILE"):
            probe = {**probe, "ignore_file": ignore}
        if shared := os.getenv("ASMPROBE_SHARED_DIR"):
            probe = {**probe, "shared_dir": shared}

        try:
            settings = Settings(probe=ProbeSettings.model_validate(probe))
        except ValidationError as e:
            if strict:
                raise SettingsError(None, f"invalid probe settings: {e}") from e
            logger.warning(f"Ignoring invalid probe settings: {e}")
            settings = Settings()

        if extra := os.getenv("ASMPROBE_SEARCH_DIRS"):
            env_dirs = [d for d in extra.split(os.pathsep) if d]
            settings.probe.search_dirs = env_dirs + settings.probe.search_dirs

        return settings

    def get_search_dirs(self) -> list[str]:
        return list(self.get_settings().probe.search_dirs)

    def get_ignore_file(self) -> str:
        return self.get_settings().probe.ignore_file

    def set_ignore_file(self, name: str, scope: ScopeType = "local") -> None:
        """Set the excluded assembly file name in a scope.

        Args:
            name: File name to exclude ("" clears it)
            scope: Scope to write
        """
        self._update_settings(self.scope_path(scope), {"probe": {"ignore_file": name}})
        logger.info(f"Set ignore_file to '{name}' in {scope} settings")

    def add_search_dir(self, directory: str, scope: ScopeType = "local") -> bool:
        """Append a search directory to a scope.

        Returns:
            False if the directory was already listed in that scope
        """
        path = self.scope_path(scope)
        settings = self._read_settings(path) or {}
        probe = settings.get("probe") or {}
        dirs = list(probe.get("search_dirs") or [])
        if directory in dirs:
            return False
        dirs.append(directory)
        self._update_settings(path, {"probe": {"search_dirs": dirs}})
        logger.info(f"Added search dir {directory} to {scope} settings")
        return True

    def create_resolver(self) -> AssemblyResolver:
        """Build a resolver from the effective settings."""
        probe = self.get_settings().probe
        return AssemblyResolver(exclusion=ExclusionFilter(probe.ignore_file), shared_dir=probe.shared_dir)

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist or is unreadable
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {path}: top level must be a mapping")
            return None
        return data

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        """Write settings to YAML file.

        Args:
            path: Path to settings file
            settings: Settings dictionary
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w") as f:
                yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to write settings to {path}: {e}")
            raise SettingsError(path, f"cannot write settings: {e}") from e

    def _update_settings(self, path: Path, updates: dict[str, Any]) -> None:
        existing = self._read_settings(path) or {}
        merged = self._deep_merge(existing, updates)
        self._write_settings(path, merged)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            overlay: Overlay dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
