"""
Test configuration and fixtures for fxpack tests.

Provides shared fixtures for:
- Temporary source trees with resources
- Build configuration pointing into the temporary directory
- Build sessions
- Environment variable management
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import pytest
import yaml

from fxpack.config import BuildConfig
from fxpack.core.session import BuildSession


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Provide an empty source tree.

    Returns:
        Path to the ``src`` directory resources are created in.
    """
    src = tmp_path / "src"
    src.mkdir()
    return src


@pytest.fixture
def build_config(tmp_path: Path, source_dir: Path) -> BuildConfig:
    """Provide a build configuration rooted in the temporary directory.

    Returns:
        BuildConfig with source, dist and cache folders under ``tmp_path``.
    """
    return BuildConfig(
        source_dir=str(source_dir),
        dist_dir=str(tmp_path / "dist"),
        cache_dir=str(tmp_path / ".cache"),
    )


@pytest.fixture
def session(build_config: BuildConfig) -> BuildSession:
    """Provide a build session over the temporary source tree."""
    return BuildSession(config=build_config)


@pytest.fixture
def make_resource(source_dir: Path) -> Callable[..., Path]:
    """Provide a factory creating resource directories.

    The factory takes the resource name, its manifest (mapping, raw YAML
    text, or None for no manifest file), a mapping of relative file paths to
    contents and an optional parent folder inside the source tree.

    Returns:
        Callable returning the resource root.
    """

    def _make(
        name: str,
        manifest: Optional[Union[Dict[str, Any], str]] = None,
        files: Optional[Dict[str, str]] = None,
        parent: str = "",
    ) -> Path:
        root = source_dir / parent / name if parent else source_dir / name
        root.mkdir(parents=True, exist_ok=True)

        if manifest is not None:
            text = (
                manifest
                if isinstance(manifest, str)
                else yaml.safe_dump(manifest, sort_keys=False)
            )
            (root / "manifest.yaml").write_text(text)

        for relative, content in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)

        return root

    return _make


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Dict[str, str]:
    """Provide patched environment variables for configuration tests.

    Returns:
        Dictionary of environment variables set.
    """
    env_vars = {
        "FXPACK_SOURCE_DIR": str(tmp_path / "resources"),
        "FXPACK_DIST_DIR": str(tmp_path / "out"),
        "FXPACK_CACHE_DIR": str(tmp_path / "cache"),
        "FXPACK_BUNDLE_SCRIPTS": "true",
        "FXPACK_HOOK_TIMEOUT": "2.5",
        "FXPACK_ENV_DEBUG": "1",
        "LOG_LEVEL": "ERROR",  # Suppress logs during tests
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    return env_vars
