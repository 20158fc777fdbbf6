"""Data models for resource manifests, resolution results and build outcomes."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScriptEnv(str, Enum):
    """Script environments of a resource manifest."""

    SHARED = "shared"
    SERVER = "server"
    CLIENT = "client"


class FileEntry(BaseModel):
    """Structured entry of the manifest ``files`` list."""

    model_config = ConfigDict(extra="allow")

    src: str
    skipCopy: bool = False
    skipResolve: bool = False
    serverOnly: bool = False


class ExportEntry(BaseModel):
    """Structured entry of the manifest ``exports`` list."""

    model_config = ConfigDict(extra="allow")

    function: str
    env: ScriptEnv = ScriptEnv.SERVER


class ManifestScripts(BaseModel):
    """Path-specs (or resolved paths) per script environment."""

    model_config = ConfigDict(extra="allow")

    shared: List[str] = Field(default_factory=list)
    server: List[str] = Field(default_factory=list)
    client: List[str] = Field(default_factory=list)

    @field_validator("shared", "server", "client", mode="before")
    @classmethod
    def empty_bucket(cls, value):
        # `server:` with nothing under it parses as None
        return [] if value is None else value

    def for_env(self, env: ScriptEnv) -> List[str]:
        return getattr(self, env.value)


def _to_str(value: Any) -> Any:
    """Spell YAML scalars the way they were written (`true`, `30120`)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ResourceManifest(BaseModel):
    """Parsed ``manifest.yaml`` of one resource.

    Every field is optional. Keys this model does not know about are kept
    so hooks can round-trip them.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    info: Optional[Dict[str, Any]] = None

    fx_version: Optional[str] = None
    game: Optional[str] = None
    use_fxv2_oal: Optional[bool] = None
    lua54: Optional[bool] = None
    ui_page: Optional[str] = None

    env: Optional[Dict[str, str]] = None
    files: Optional[List[Union[str, FileEntry]]] = None
    scripts: Optional[ManifestScripts] = None
    exports: Optional[List[Union[str, ExportEntry]]] = None
    hooks: Optional[Dict[str, str]] = None

    @field_validator("env", "hooks", mode="before")
    @classmethod
    def stringify_values(cls, value):
        if not isinstance(value, dict):
            return value
        return {str(key): _to_str(item) for key, item in value.items()}


# Emission order of the scalar fields in fxmanifest.lua
MANIFEST_CORE_FIELDS = ("fx_version", "game", "use_fxv2_oal", "lua54", "ui_page")

DEFAULT_MANIFEST_OPTIONS: Dict[str, Any] = {
    "fx_version": "cerulean",
    "game": "gta5",
    "use_fxv2_oal": True,
    "lua54": True,
    "ui_page": None,
}


class ResourceFile(BaseModel):
    """A file found under a resource root."""

    model_config = ConfigDict(frozen=True)

    manifest_path: str  # relative to the owning resource root
    source_path: str  # absolute


class ResolvedItem(BaseModel):
    """One (source, target) mapping produced by path resolution."""

    model_config = ConfigDict(frozen=True)

    resource_name: str
    source: str
    source_manifest: str
    target: str
    target_manifest: str


class BuildOptions(BaseModel):
    force: bool = False
    reload_manifest: bool = False


class BuildResult(BaseModel):
    """Outcome of ``Resource.build``."""

    success: bool
    message: Optional[str] = None
    resource_inclusions: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, resource_inclusions: Optional[List[str]] = None) -> "BuildResult":
        return cls(success=True, resource_inclusions=resource_inclusions or [])

    @classmethod
    def failed(cls, message: str) -> "BuildResult":
        return cls(success=False, message=message)


class ResourceState(str, Enum):
    """Stage reached by the current build pass of a resource."""

    LOADED = "loaded"
    FILES_COPIED = "files_copied"
    MANIFEST_RENDERED = "manifest_rendered"
