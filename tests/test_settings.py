"""Tests for SettingsManager scope merging, env overrides and writes."""

import os
from pathlib import Path
from textwrap import dedent

import pytest
import yaml

from asmprobe.settings import SettingsError
from asmprobe.settings import SettingsManager


@pytest.fixture
def manager(tmp_path: Path, monkeypatch) -> SettingsManager:
    for var in ("ASMPROBE_IGNORE_FILE", "ASMPROBE_SHARED_DIR", "ASMPROBE_SEARCH_DIRS"):
        monkeypatch.delenv(var, raising=False)
    return SettingsManager(asmprobe_dir=tmp_path / "project" / ".asmprobe", user_dir=tmp_path / "user" / ".asmprobe")


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text))


class TestReading:
    def test_defaults_without_files(self, manager: SettingsManager) -> None:
        probe = manager.get_settings().probe
        assert probe.ignore_file == ""
        assert probe.search_dirs == []
        assert probe.shared_dir is None

    def test_scopes_merge_local_over_project_over_user(self, manager: SettingsManager) -> None:
        _write(
            manager.user_settings_file,
            """
            probe:
              ignore_file: user.dll
              shared_dir: /user/shared
            """,
        )
        _write(
            manager.project_settings_file,
            """
            probe:
              ignore_file: project.dll
              search_dirs: [/project/libs]
            """,
        )
        _write(
            manager.local_settings_file,
            """
            probe:
              ignore_file: local.dll
            """,
        )

        probe = manager.get_settings().probe

        assert probe.ignore_file == "local.dll"
        assert probe.search_dirs == ["/project/libs"]
        assert probe.shared_dir == "/user/shared"

    def test_single_search_dir_string_is_accepted(self, manager: SettingsManager) -> None:
        _write(manager.project_settings_file, "probe:\n  search_dirs: /only\n")
        assert manager.get_search_dirs() == ["/only"]

    def test_empty_probe_section(self, manager: SettingsManager) -> None:
        _write(manager.project_settings_file, "probe:\n")
        assert manager.get_settings().probe.search_dirs == []

    def test_malformed_yaml_is_skipped(self, manager: SettingsManager) -> None:
        _write(manager.user_settings_file, "probe:\n  ignore_file: good.dll\n")
        _write(manager.project_settings_file, "probe: [unclosed\n")
        assert manager.get_ignore_file() == "good.dll"

    def test_non_mapping_file_is_skipped(self, manager: SettingsManager) -> None:
        _write(manager.project_settings_file, "- just\n- a list\n")
        assert manager.get_merged_settings() == {}

    def test_invalid_values_fall_back_to_defaults(self, manager: SettingsManager) -> None:
        _write(manager.project_settings_file, "probe:\n  search_dirs: {not: a list}\n")
        assert manager.get_settings().probe.search_dirs == []

    def test_invalid_values_raise_in_strict_mode(self, manager: SettingsManager) -> None:
        _write(manager.project_settings_file, "probe:\n  search_dirs: {not: a list}\n")
        with pytest.raises(SettingsError):
            manager.get_settings(strict=True)


class TestEnvironment:
    def test_env_overrides_files(self, manager: SettingsManager, monkeypatch) -> None:
        _write(manager.project_settings_file, "probe:\n  ignore_file: file.dll\n  search_dirs: [/cfg]\n")
        monkeypatch.setenv("ASMPROBE_IGNORE_FILE", "env.dll")
        monkeypatch.setenv("ASMPROBE_SHARED_DIR", "/env/shared")
        monkeypatch.setenv("ASMPROBE_SEARCH_DIRS", os.pathsep.join(["/env/a", "/env/b"]))

        probe = manager.get_settings().probe

        assert probe.ignore_file == "env.dll"
        assert probe.shared_dir == "/env/shared"
        assert probe.search_dirs == ["/env/a", "/env/b", "/cfg"]


class TestWriting:
    def test_set_ignore_file_writes_scope(self, manager: SettingsManager) -> None:
        manager.set_ignore_file("host.dll", "project")

        data = yaml.safe_load(manager.project_settings_file.read_text())
        assert data == {"probe": {"ignore_file": "host.dll"}}
        assert manager.get_ignore_file() == "host.dll"

    def test_set_ignore_file_keeps_other_settings(self, manager: SettingsManager) -> None:
        _write(manager.local_settings_file, "other: 1\nprobe:\n  search_dirs: [/a]\n")
        manager.set_ignore_file("host.dll")

        data = yaml.safe_load(manager.local_settings_file.read_text())
        assert data == {"other": 1, "probe": {"search_dirs": ["/a"], "ignore_file": "host.dll"}}

    def test_add_search_dir_appends_once(self, manager: SettingsManager) -> None:
        assert manager.add_search_dir("/a", "global") is True
        assert manager.add_search_dir("/b", "global") is True
        assert manager.add_search_dir("/a", "global") is False
        assert manager.get_search_dirs() == ["/a", "/b"]


class TestCreateResolver:
    def test_resolver_uses_configured_exclusion_and_shared_dir(
        self, manager: SettingsManager, tmp_path: Path, make_files
    ) -> None:
        shared = make_files(tmp_path / "shared", "host.dll", "Tool.exe")
        manager.set_ignore_file("host.dll")
        _write(manager.project_settings_file, f"probe:\n  shared_dir: {shared}\n")

        resolver = manager.create_resolver()

        assert resolver.ignore_file_name == "host.dll"
        assert resolver.find_assembly("host", []) == []
        assert resolver.find_assembly("Tool", []) == [str(shared / "Tool.exe")]
