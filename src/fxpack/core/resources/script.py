import logging
from typing import Dict, List, Optional

from ..exceptions import AmbiguousTargetError
from ..models import (
    BuildOptions,
    BuildResult,
    ResolvedItem,
    ScriptEnv,
)
from .base import Resource

log = logging.getLogger(__name__)

# Hook points, in the order a build pass reaches them
PRE_BUILD = "pre_build"
POST_COPY = "post_copy"
PRE_MANIFEST = "pre_manifest"
POST_BUILD = "post_build"


class ScriptResource(Resource):
    """Build pipeline for plain Lua resources.

    Declared files and scripts are copied as-is into the output target and
    listed in the generated manifest. No bundling takes place.
    """

    def copy_scripts(self) -> Dict[ScriptEnv, List[ResolvedItem]]:
        """Resolve and copy the script specs of every environment."""
        items = self.resolve_script_items()
        for env_items in items.values():
            self.copy_items(env_items)
        return items

    def _inclusions(self, items: List[ResolvedItem]) -> List[str]:
        return sorted({item.resource_name for item in items if item.resource_name != self.name})

    async def build(self, options: Optional[BuildOptions] = None) -> BuildResult:
        options = options or BuildOptions()

        if options.reload_manifest:
            self.load_manifest()

        await self.call_hook(PRE_BUILD, options)

        try:
            if options.force:
                self.clean_output()

            copied = self.copy_resource_files()
            await self.call_hook(POST_COPY, [item.target for item in copied])

            script_items = self.copy_scripts()
            scripts = self.resolve_scripts(script_items)
            await self.call_hook(PRE_MANIFEST, scripts)

            manifest_path = self.generate_resource_manifest(scripts)
        except (AmbiguousTargetError, OSError) as e:
            log.error(f"Failed to build resource {self.name}: {e}")
            return BuildResult.failed(str(e))

        await self.call_hook(POST_BUILD, manifest_path.as_posix())

        for env_items in script_items.values():
            copied.extend(env_items)

        log.info(f"Built resource {self.name} into {self.output_target}")
        return BuildResult.ok(self._inclusions(copied))
