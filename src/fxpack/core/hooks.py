"""Resource hooks.

A hook is a Python script declared in the ``hooks`` section of a resource
manifest::

    hooks:
      pre_manifest: hooks/pre_manifest.py

The script exposes a ``hook`` callable (plain or ``async``) that receives a
:class:`HookContext` and returns a :class:`HookResult` (or an equivalent
mapping). The manifest carried by the result replaces the resource manifest
as a whole, and ``returned`` is handed back to the build step that invoked
the hook. Hooks never abort a build: every failure is logged and treated as
if no hook was registered.
"""

import asyncio
import importlib.util
import inspect
import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol

from pydantic import BaseModel, ValidationError

from .exceptions import HookError
from .models import ResourceManifest

if TYPE_CHECKING:
    from .resources.base import Resource

log = logging.getLogger(__name__)

HOOK_ENTRYPOINT = "hook"


class HookContext(BaseModel):
    """Snapshot handed to a hook."""

    resource_name: str
    resource_path: str
    output_target: str
    manifest: ResourceManifest
    data: Any = None


class HookResultContext(BaseModel):
    manifest: ResourceManifest


class HookResult(BaseModel):
    """What a hook hands back: the new manifest and a value for the caller."""

    ctx: HookResultContext
    returned: Any = None


class HookLoader(Protocol):
    """Strategy turning a hook script path into a callable."""

    def load(self, hook_path: str) -> Callable[[HookContext], Any]: ...


class FileHookLoader:
    """Loads hooks by importing the script file as a module."""

    def __init__(self, entrypoint: str = HOOK_ENTRYPOINT):
        self.entrypoint = entrypoint

    def load(self, hook_path: str) -> Callable[[HookContext], Any]:
        module_name = f"fxpack_hook_{abs(hash(hook_path))}"
        spec = importlib.util.spec_from_file_location(module_name, hook_path)
        if not spec or not spec.loader:
            raise HookError(f"Cannot load hook module from {hook_path}")

        module = importlib.util.module_from_spec(spec)
        # dataclasses in the hook resolve their module through sys.modules
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        finally:
            sys.modules.pop(spec.name, None)

        func = getattr(module, self.entrypoint, None)
        if not callable(func):
            raise HookError(f"Hook module {hook_path} has no callable '{self.entrypoint}'")

        return func


class HookInvoker:
    """Calls the hooks declared by resource manifests."""

    def __init__(
        self, loader: Optional[HookLoader] = None, timeout: Optional[float] = None
    ):
        self.loader = loader or FileHookLoader()
        self.timeout = timeout
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, resource_name: str) -> asyncio.Lock:
        if resource_name not in self._locks:
            self._locks[resource_name] = asyncio.Lock()
        return self._locks[resource_name]

    async def invoke(
        self, resource: "Resource", hook_name: str, data: Any = None
    ) -> Optional[Any]:
        """Run hook ``hook_name`` of ``resource``.

        Returns:
            The hook's ``returned`` value, or None when the hook is not
            registered, missing on disk or failed.
        """
        hooks = resource.manifest.hooks or {}
        if not hooks.get(hook_name):
            return None

        hook_path = os.path.abspath(os.path.join(resource.resource_root, hooks[hook_name]))
        if not os.path.isfile(hook_path):
            log.error(
                f"Hook {hook_name} for resource {resource.name} at '{hook_path}' does not exist."
            )
            return None

        async with self._lock_for(resource.name):
            try:
                result = await self._run(resource, hook_path, data)
            except Exception as e:
                log.error(
                    f"Failed to call hook {hook_name} for resource {resource.name}: {e}",
                    exc_info=True,
                )
                return None

            resource.replace_manifest(result.ctx.manifest)
            return result.returned

    async def _run(self, resource: "Resource", hook_path: str, data: Any) -> HookResult:
        func = self.loader.load(hook_path)

        context = HookContext(
            resource_name=resource.name,
            resource_path=resource.resource_root,
            output_target=resource.output_target,
            manifest=resource.manifest.model_copy(deep=True),
            data=data,
        )

        outcome = func(context)
        if inspect.isawaitable(outcome):
            if self.timeout is not None:
                outcome = await asyncio.wait_for(outcome, timeout=self.timeout)
            else:
                outcome = await outcome

        if isinstance(outcome, HookResult):
            return outcome

        try:
            return HookResult.model_validate(outcome)
        except ValidationError as e:
            raise HookError(f"Hook at {hook_path} returned an invalid result: {e}") from e
