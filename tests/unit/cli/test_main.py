"""Tests for the top-level fxpack CLI."""

from importlib import metadata
from unittest.mock import patch

from fxpack.cli.main import app, get_version


class TestMain:
    def test_version_flag(self, runner):
        with patch("fxpack.cli.main.get_version", return_value="1.2.3"):
            result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "fxpack v1.2.3" in result.stdout

    def test_no_arguments_shows_help(self, runner):
        result = runner.invoke(app, [])

        assert "Usage" in result.stdout

    def test_help_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("build", "list", "manifest", "clean"):
            assert command in result.stdout

    def test_get_version_without_distribution(self):
        with patch(
            "fxpack.cli.main.metadata.version",
            side_effect=metadata.PackageNotFoundError,
        ):
            assert get_version() == "unknown"
