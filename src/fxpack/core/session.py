"""Build session: the shared context of one fxpack invocation."""

import logging
import os
from typing import Dict, Iterable, Optional, Type

from ..config import MANIFEST_FILENAME, BuildConfig
from .hooks import HookInvoker
from .models import BuildOptions, BuildResult
from .resolver import glob_files, join_pattern
from .resources.base import Resource
from .resources.registry import ResourceRegistry
from .resources.script import ScriptResource

log = logging.getLogger(__name__)


class BuildSession:
    """Owns the configuration, resource registry and hook invoker of a build.

    Every resource created through the session shares the same registry, so
    cross-resource references resolve against one instance per name.
    """

    def __init__(
        self,
        config: Optional[BuildConfig] = None,
        resource_class: Type[Resource] = ScriptResource,
        hooks: Optional[HookInvoker] = None,
    ):
        self.config = config or BuildConfig.from_env()
        self.resource_class = resource_class
        self.hooks = hooks or HookInvoker(timeout=self.config.hook_timeout)
        self.registry = ResourceRegistry(self._create_resource)

    def _create_resource(
        self, name: str, resource_root: str, registry: ResourceRegistry
    ) -> Resource:
        return self.resource_class(
            name, resource_root, registry, config=self.config, hooks=self.hooks
        )

    def discover(self) -> Dict[str, str]:
        """Map every resource under the source tree to its root directory.

        A resource is a directory holding a ``manifest.yaml``; when two
        directories share a name the first in lexicographic order wins.
        """
        discovered: Dict[str, str] = {}
        pattern = join_pattern(self.config.source_dir, f"**/{MANIFEST_FILENAME}")
        for manifest in glob_files(pattern):
            root = os.path.dirname(manifest)
            if root == self.config.source_dir:
                continue
            name = os.path.basename(root)
            if name in discovered:
                log.warning(
                    f"Duplicate resource {name} at {root}, using {discovered[name]}"
                )
                continue
            discovered[name] = root
        return discovered

    def resource(self, name: str) -> Optional[Resource]:
        """Get resource ``name`` from the registry, discovering it if needed."""
        if name in self.registry:
            return self.registry.get(name)

        root = self.discover().get(name)
        if root is None:
            return None
        return self.registry.get_or_create(name, root)

    async def build(
        self,
        names: Optional[Iterable[str]] = None,
        options: Optional[BuildOptions] = None,
    ) -> Dict[str, BuildResult]:
        """Build resources one after another.

        A failing resource is reported in the result and does not stop the
        remaining ones.
        """
        options = options or BuildOptions()
        discovered = self.discover()
        targets = list(names) if names else list(discovered)

        results: Dict[str, BuildResult] = {}
        for name in targets:
            if name not in discovered and name not in self.registry:
                log.error(f"Resource {name} not found under {self.config.source_dir}")
                results[name] = BuildResult.failed("Resource not found.")
                continue

            resource = self.registry.get(name) or self.registry.get_or_create(
                name, discovered[name]
            )
            results[name] = await resource.build(options)

        return results

    def clean(self, names: Iterable[str]) -> None:
        """Delete the build cache folders of ``names``."""
        for name in names:
            resource = self.resource(name)
            if resource is None:
                log.warning(f"Resource {name} not found, nothing to clean")
                continue
            resource.delete_build_folder()
