"""Tests for launcher configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from relaunch.config import ConfigError, LauncherConfig, load_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self) -> None:
        """Should fall back to built-in defaults."""
        config = load_config(environ={})

        assert config.cache_root == Path.home() / ".nuget" / "packages"
        assert config.release_package == "UltimateStreamManager"
        assert config.beta_package == "UltimateStreamManager-Beta"
        assert config.registry_timeout == 10.0

    def test_yaml_file(self, tmp_path: Path) -> None:
        """Should read values from a YAML file."""
        path = tmp_path / "relaunch.yaml"
        path.write_text(
            "cache_root: /opt/cache\n"
            "release_package: MyApp\n"
            "registry_timeout: 3\n"
        )

        config = load_config(path, environ={})

        assert config.cache_root == Path("/opt/cache")
        assert config.release_package == "MyApp"
        assert config.registry_timeout == 3.0

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        """Should let RELAUNCH_* variables win over the file."""
        path = tmp_path / "relaunch.yaml"
        path.write_text("release_package: FromFile\n")

        config = load_config(
            path,
            environ={
                "RELAUNCH_RELEASE_PACKAGE": "FromEnv",
                "RELAUNCH_REGISTRY_TOKEN": "secret",
                "UNRELATED": "x",
            },
        )

        assert config.release_package == "FromEnv"
        assert config.registry_token == "secret"

    def test_records_source_file(self, tmp_path: Path) -> None:
        """Should remember which file the values came from."""
        path = tmp_path / "relaunch.yaml"
        path.write_text("launcher_binary: custom.exe\n")

        config = load_config(path, environ={})

        assert config.source == path.resolve()
        assert config.launcher_binary == "custom.exe"

    def test_no_source_without_file(self) -> None:
        """Should report no source when only defaults and environment apply."""
        with patch("relaunch.config.default_launcher_dir", return_value=Path("/nonexistent")):
            config = load_config(environ={})

        assert config.source is None

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should accept an empty YAML file."""
        path = tmp_path / "relaunch.yaml"
        path.write_text("")

        assert load_config(path, environ={}).app_name == "UltimateStreamManager"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Should reject an explicit path that does not exist."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", environ={})

    @pytest.mark.parametrize(
        ("content", "match"),
        [
            ("- just\n- a list\n", "mapping"),
            ("key: [unclosed\n", "Cannot read"),
            ("registry_timeout: soon\n", "Invalid"),
        ],
    )
    def test_invalid_file(self, tmp_path: Path, content: str, match: str) -> None:
        """Should raise ConfigError for unusable files."""
        path = tmp_path / "relaunch.yaml"
        path.write_text(content)

        with pytest.raises(ConfigError, match=match):
            load_config(path, environ={})

    def test_invalid_environment(self) -> None:
        """Should raise ConfigError for invalid environment values."""
        with pytest.raises(ConfigError):
            load_config(environ={"RELAUNCH_INSTALL_TIMEOUT": "forever"})


class TestLauncherConfig:
    """Tests for LauncherConfig helpers."""

    def test_relative_preference_file(self, tmp_path: Path) -> None:
        """Should resolve the preference file next to the launcher."""
        config = LauncherConfig(launcher_dir=tmp_path)

        assert config.preference_path == tmp_path / "version.txt"

    def test_absolute_preference_file(self, tmp_path: Path) -> None:
        """Should keep an absolute preference file path."""
        target = tmp_path / "prefs" / "version.txt"
        config = LauncherConfig(launcher_dir=tmp_path / "launcher", preference_file=str(target))

        assert config.preference_path == target
