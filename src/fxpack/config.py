"""Configuration management for fxpack."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

ENV_PREFIX = "FXPACK_ENV_"

MANIFEST_FILENAME = "manifest.yaml"
OUTPUT_MANIFEST_FILENAME = "fxmanifest.lua"
SERVER_BUNDLE_FILENAME = "server_bundle.lua"
CLIENT_BUNDLE_FILENAME = "client_bundle.lua"


def normalize(path) -> str:
    """Return an absolute, forward-slash form of ``path``."""
    return Path(os.path.abspath(path)).as_posix()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class BuildConfig:
    """Paths and switches shared by every resource of a build session."""

    source_dir: str = field(default_factory=lambda: normalize("src"))
    dist_dir: str = field(default_factory=lambda: normalize("dist"))
    cache_dir: str = field(default_factory=lambda: normalize(".cache"))
    bundle_scripts: bool = False
    hook_timeout: Optional[float] = None
    global_env: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.source_dir = normalize(self.source_dir)
        self.dist_dir = normalize(self.dist_dir)
        self.cache_dir = normalize(self.cache_dir)

    @property
    def resources_dir(self) -> str:
        """Directory holding every built resource."""
        return f"{self.dist_dir}/server-data/resources"

    def output_target(self, resource_name: str) -> str:
        return f"{self.resources_dir}/{resource_name}"

    def build_cache_dir(self, resource_name: str) -> str:
        return f"{self.cache_dir}/build/{resource_name}"

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """Load configuration from environment variables.

        Environment variables:
        - FXPACK_SOURCE_DIR: Tree searched for resources (default: ./src)
        - FXPACK_DIST_DIR: Build output root (default: ./dist)
        - FXPACK_CACHE_DIR: Cache root (default: ./.cache)
        - FXPACK_BUNDLE_SCRIPTS: Reference bundles instead of scripts (default: false)
        - FXPACK_HOOK_TIMEOUT: Seconds a hook may run (default: unlimited)
        - FXPACK_ENV_<KEY>: Entries of the default resource environment

        Returns:
            BuildConfig initialized from environment variables.
        """
        timeout = os.getenv("FXPACK_HOOK_TIMEOUT")

        global_env = {
            key[len(ENV_PREFIX) :]: value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX)
        }

        return cls(
            source_dir=os.getenv("FXPACK_SOURCE_DIR", "src"),
            dist_dir=os.getenv("FXPACK_DIST_DIR", "dist"),
            cache_dir=os.getenv("FXPACK_CACHE_DIR", ".cache"),
            bundle_scripts=_env_flag("FXPACK_BUNDLE_SCRIPTS"),
            hook_timeout=float(timeout) if timeout else None,
            global_env=global_env,
        )
