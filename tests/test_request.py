"""Tests for version request parsing."""

from pathlib import Path

import pytest

from relaunch.domain import Channel, VersionRequest
from relaunch.resolver import determine_request, load_preference, parse_version_token


class TestParseVersionToken:
    """Tests for parse_version_token()."""

    @pytest.mark.parametrize(
        ("token", "channel", "version"),
        [
            ("beta-2.3.1", Channel.BETA, "2.3.1"),
            ("2.3.1", Channel.RELEASE, "2.3.1"),
            ("latest", Channel.RELEASE, "latest"),
            ("beta-latest", Channel.BETA, "latest"),
            ("", Channel.RELEASE, ""),
            ("  beta-1.0.0\n", Channel.BETA, "1.0.0"),
        ],
    )
    def test_splits_channel_and_version(self, token: str, channel: Channel, version: str) -> None:
        """Should map the beta- prefix to the beta channel."""
        request = parse_version_token(token)

        assert request.channel == channel
        assert request.version == version

    def test_prefix_only_inside_token(self) -> None:
        """Should only treat a leading beta- as a channel prefix."""
        request = parse_version_token("2.0.0-beta-1")

        assert request.channel == Channel.RELEASE
        assert request.version == "2.0.0-beta-1"


class TestLoadPreference:
    """Tests for load_preference()."""

    def test_missing_file_means_latest_release(self, tmp_path: Path) -> None:
        """Should default to the latest release when there is no file."""
        request = load_preference(tmp_path / "version.txt")

        assert request == VersionRequest(channel=Channel.RELEASE, version="")
        assert request.wants_latest

    def test_reads_first_line(self, tmp_path: Path) -> None:
        """Should parse the first line of the file."""
        path = tmp_path / "version.txt"
        path.write_text("beta-1.4.0\nignored\n")

        request = load_preference(path)

        assert request.channel == Channel.BETA
        assert request.version == "1.4.0"

    def test_empty_file(self, tmp_path: Path) -> None:
        """Should treat an empty file as a request for latest."""
        path = tmp_path / "version.txt"
        path.write_text("\n")

        assert load_preference(path).wants_latest


class TestDetermineRequest:
    """Tests for determine_request()."""

    def test_command_line_wins(self, tmp_path: Path) -> None:
        """Should prefer the command line token over the file."""
        path = tmp_path / "version.txt"
        path.write_text("1.0.0")

        request = determine_request(path, "beta-2.0.0")

        assert request.channel == Channel.BETA
        assert request.version == "2.0.0"

    def test_file_used_without_override(self, tmp_path: Path) -> None:
        """Should use the file when no command line token is given."""
        path = tmp_path / "version.txt"
        path.write_text("1.0.0")

        request = determine_request(path, None)

        assert request.channel == Channel.RELEASE
        assert request.version == "1.0.0"
