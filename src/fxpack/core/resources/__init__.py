from ..models import (
    BuildOptions,
    BuildResult,
    ExportEntry,
    FileEntry,
    ManifestScripts,
    ResolvedItem,
    ResourceFile,
    ResourceManifest,
    ResourceState,
    ScriptEnv,
)
from .base import Resource
from .registry import ResourceRegistry
from .script import ScriptResource


__all__ = [
    "BuildOptions",
    "BuildResult",
    "ExportEntry",
    "FileEntry",
    "ManifestScripts",
    "ResolvedItem",
    "Resource",
    "ResourceFile",
    "ResourceManifest",
    "ResourceRegistry",
    "ResourceState",
    "ScriptEnv",
    "ScriptResource",
]
