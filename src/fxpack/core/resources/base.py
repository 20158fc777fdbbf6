import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ...config import MANIFEST_FILENAME, BuildConfig, normalize
from ..exceptions import ManifestLoadError
from ..hooks import HookInvoker
from ..models import (
    BuildOptions,
    BuildResult,
    FileEntry,
    ManifestScripts,
    ResolvedItem,
    ResourceFile,
    ResourceManifest,
    ResourceState,
    ScriptEnv,
)
from ..resolver import find_files, resolve
from ..writer import ManifestWriter

if TYPE_CHECKING:
    from .registry import ResourceRegistry

log = logging.getLogger(__name__)


def load_manifest_file(resource_name: str, manifest_path: str) -> ResourceManifest:
    """Read and validate a ``manifest.yaml``.

    Raises:
        ManifestLoadError: The file is missing, empty, not YAML or not a manifest.
    """
    try:
        content = Path(manifest_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestLoadError(
            resource_name, f"Failed to read manifest for resource {resource_name}: {e}"
        ) from e

    if not content.strip():
        raise ManifestLoadError(
            resource_name, f"Manifest for resource {resource_name} is empty"
        )

    try:
        data = yaml.safe_load(content)
        if not isinstance(data, dict):
            raise ManifestLoadError(
                resource_name,
                f"Manifest for resource {resource_name} is not a mapping",
            )
        return ResourceManifest.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        raise ManifestLoadError(
            resource_name, f"Failed to parse manifest for resource {resource_name}: {e}"
        ) from e


class Resource:
    """A named, independently buildable unit with its own manifest.

    The base class provides the building blocks of a build pass (file copy,
    manifest generation, hooks); concrete pipelines implement ``build``.
    """

    def __init__(
        self,
        name: str,
        resource_root: str,
        registry: "ResourceRegistry",
        config: Optional[BuildConfig] = None,
        hooks: Optional[HookInvoker] = None,
    ):
        self._name = name
        self._resource_root = normalize(resource_root)
        self._registry = registry
        self._config = config or BuildConfig()
        self._hooks = hooks or HookInvoker(timeout=self._config.hook_timeout)
        self._writer = ManifestWriter(bundle_scripts=self._config.bundle_scripts)
        self._output_target = self._config.output_target(name)

        self._manifest = ResourceManifest()
        self._env: Dict[str, str] = {}
        self.state = ResourceState.LOADED

        self.load_manifest()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r}, {self._resource_root!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def resource_root(self) -> str:
        return self._resource_root

    @property
    def output_target(self) -> str:
        return self._output_target

    @property
    def manifest(self) -> ResourceManifest:
        return self._manifest

    @property
    def env(self) -> Dict[str, str]:
        return self._env

    @property
    def manifest_path(self) -> str:
        return f"{self._resource_root}/{MANIFEST_FILENAME}"

    def load_manifest(self) -> None:
        """(Re)load ``manifest.yaml``; failures leave an empty manifest."""
        try:
            self._manifest = load_manifest_file(self._name, self.manifest_path)
        except ManifestLoadError as e:
            log.error(str(e))
            self._manifest = ResourceManifest()

        self._refresh_env()
        self.state = ResourceState.LOADED

    def replace_manifest(self, manifest: ResourceManifest) -> None:
        """Swap in a new manifest as a whole (used by hooks)."""
        self._manifest = ResourceManifest.model_validate(manifest)
        self._refresh_env()

    def _refresh_env(self) -> None:
        env = dict(self._config.global_env)
        if self._manifest.env:
            env.update(self._manifest.env)
        self._env = env

    async def build(self, options: Optional[BuildOptions] = None) -> BuildResult:
        log.error(f"Build method not implemented for resource {self._name}.")
        return BuildResult.failed("Not implemented.")

    def get_resource_files(self, pattern: str) -> List[ResourceFile]:
        """Files under this resource root matching ``pattern``."""
        return find_files(self._resource_root, pattern)

    def resolve_file_path(self, spec: str) -> List[ResolvedItem]:
        """Expand a path-spec declared by this resource."""
        return resolve(self, spec, self._registry, self._config.source_dir)

    def resolve_script_items(self) -> Dict[ScriptEnv, List[ResolvedItem]]:
        """Resolve the script specs of every environment without copying."""
        scripts = self._manifest.scripts or ManifestScripts()
        return {
            env: [item for spec in scripts.for_env(env) for item in self.resolve_file_path(spec)]
            for env in ScriptEnv
        }

    def resolve_scripts(
        self, items: Optional[Dict[ScriptEnv, List[ResolvedItem]]] = None
    ) -> ManifestScripts:
        """Manifest paths of every script, as the generated manifest lists them."""
        if items is None:
            items = self.resolve_script_items()

        resolved = ManifestScripts()
        for env, env_items in items.items():
            resolved.for_env(env).extend(item.target_manifest for item in env_items)
        return resolved

    def file_specs(self, include_skip_copy: bool = True) -> List[str]:
        specs = []
        for entry in self._manifest.files or []:
            if isinstance(entry, FileEntry):
                if entry.skipCopy and not include_skip_copy:
                    continue
                specs.append(entry.src)
            else:
                specs.append(entry)
        return specs

    def copy_items(self, items: List[ResolvedItem]) -> None:
        for item in items:
            os.makedirs(os.path.dirname(item.target), exist_ok=True)
            shutil.copyfile(item.source, item.target)

    def copy_resource_files(self) -> List[ResolvedItem]:
        """Copy every declared file (except ``skipCopy`` entries) to the output."""
        copied = []
        for spec in self.file_specs(include_skip_copy=False):
            items = self.resolve_file_path(spec)
            self.copy_items(items)
            copied.extend(items)

        log.debug(f"Copied {len(copied)} files for resource {self._name}")
        self.state = ResourceState.FILES_COPIED
        return copied

    def render_resource_manifest(self, scripts: Optional[ManifestScripts] = None) -> str:
        return self._writer.render(self, scripts)

    def generate_resource_manifest(
        self, scripts: Optional[ManifestScripts] = None
    ) -> Path:
        path = self._writer.write(self, scripts)
        self.state = ResourceState.MANIFEST_RENDERED
        return path

    async def call_hook(self, hook_name: str, data: Any = None) -> Optional[Any]:
        return await self._hooks.invoke(self, hook_name, data)

    def clean_output(self) -> None:
        if os.path.isdir(self._output_target):
            shutil.rmtree(self._output_target)

    def delete_build_folder(self) -> None:
        """Remove ``<cache>/build/<name>``; nothing to do when it is absent."""
        build_folder = self._config.build_cache_dir(self._name)
        if os.path.isdir(build_folder):
            shutil.rmtree(build_folder)
            log.debug(f"Removed build folder {build_folder}")
