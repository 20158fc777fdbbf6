"""Fixtures shared by the CLI tests."""

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_env(monkeypatch, tmp_path, source_dir):
    """Point the environment-based configuration at the temporary tree.

    Returns:
        Path of the directory built resources land in.
    """
    monkeypatch.setenv("FXPACK_SOURCE_DIR", str(source_dir))
    monkeypatch.setenv("FXPACK_DIST_DIR", str(tmp_path / "dist"))
    monkeypatch.setenv("FXPACK_CACHE_DIR", str(tmp_path / ".cache"))
    monkeypatch.delenv("FXPACK_BUNDLE_SCRIPTS", raising=False)
    monkeypatch.delenv("FXPACK_HOOK_TIMEOUT", raising=False)
    return tmp_path / "dist" / "server-data" / "resources"
