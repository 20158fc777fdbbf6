"""Generation of the runtime manifest (``fxmanifest.lua``).

The document is assembled as an ordered list of sections and rendered in a
single pass. Section order is fixed: info block, core fields, scripts,
files, exports. Rendering only reads the manifest and the filesystem, so two
renders over unchanged inputs are byte-identical.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..config import (
    CLIENT_BUNDLE_FILENAME,
    OUTPUT_MANIFEST_FILENAME,
    SERVER_BUNDLE_FILENAME,
)
from .models import (
    DEFAULT_MANIFEST_OPTIONS,
    MANIFEST_CORE_FIELDS,
    ExportEntry,
    FileEntry,
    ManifestScripts,
    ResourceManifest,
    ScriptEnv,
)

if TYPE_CHECKING:
    from .resources.base import Resource

log = logging.getLogger(__name__)

SCRIPT_ENVS = (ScriptEnv.SERVER, ScriptEnv.CLIENT)
EXPORT_ENVS = (ScriptEnv.SHARED, ScriptEnv.SERVER, ScriptEnv.CLIENT)


def quote(value: str, mark: str = "'") -> str:
    escaped = value.replace("\\", "\\\\").replace(mark, f"\\{mark}")
    return f"{mark}{escaped}{mark}"


def convert_manifest_value(value: Any) -> str:
    """Encode a scalar as a manifest literal.

    Strings are single-quoted, booleans and numbers are written bare.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return quote(str(value))


def _block(header: str, lines: List[str]) -> str:
    body = "".join(f"\t{line},\n" for line in lines)
    return f"{header} {{\n{body}}}\n\n"


@dataclass
class InfoSection:
    info: Dict[str, Any]

    def render(self) -> str:
        body = "".join(f"\t@{key} {value}\n" for key, value in self.info.items())
        return f"--[[\n{body}]]\n\n"


@dataclass
class FieldsSection:
    fields: List[Tuple[str, Any]]

    def render(self) -> str:
        body = "".join(f"{key} {convert_manifest_value(value)}\n" for key, value in self.fields)
        return f"{body}\n\n"


@dataclass
class BundledScriptsSection:
    server_bundle: bool
    client_bundle: bool

    def render(self) -> str:
        output = ""
        if self.server_bundle:
            output += f"server_script {quote(SERVER_BUNDLE_FILENAME)}\n"
        if self.client_bundle:
            output += f"client_script {quote(CLIENT_BUNDLE_FILENAME)}\n"
        return output


@dataclass
class ScriptsSection:
    env: ScriptEnv
    scripts: List[str]

    def render(self) -> str:
        return _block(
            f"{self.env.value}_scripts", [quote(script, '"') for script in self.scripts]
        )


@dataclass
class FilesSection:
    files: List[str]

    def render(self) -> str:
        return _block("files", [quote(path) for path in self.files])


@dataclass
class ExportsSection:
    env: ScriptEnv
    functions: List[str]

    def render(self) -> str:
        return _block(
            f"{self.env.value}_exports", [quote(name, '"') for name in self.functions]
        )


@dataclass
class ManifestDocument:
    """Ordered sections of an output manifest."""

    sections: List[Any] = field(default_factory=list)

    def add(self, section) -> "ManifestDocument":
        self.sections.append(section)
        return self

    def render(self) -> str:
        return "".join(section.render() for section in self.sections)


def core_fields(manifest: ResourceManifest) -> List[Tuple[str, Any]]:
    fields = []
    for key in MANIFEST_CORE_FIELDS:
        value = getattr(manifest, key) or DEFAULT_MANIFEST_OPTIONS.get(key)
        if not value:
            continue
        fields.append((key, value))
    return fields


def export_env(entry) -> ScriptEnv:
    if isinstance(entry, ExportEntry):
        return entry.env
    return ScriptEnv.SERVER


def export_name(entry) -> str:
    return entry.function if isinstance(entry, ExportEntry) else entry


class ManifestWriter:
    """Renders and writes the runtime manifest of a resource."""

    def __init__(self, bundle_scripts: bool = False):
        self.bundle_scripts = bundle_scripts

    def build_document(
        self, resource: "Resource", scripts: Optional[ManifestScripts] = None
    ) -> ManifestDocument:
        manifest = resource.manifest
        scripts = scripts or ManifestScripts()
        document = ManifestDocument()

        if manifest.info is not None:
            document.add(InfoSection(dict(manifest.info)))

        document.add(FieldsSection(core_fields(manifest)))

        if self.bundle_scripts:
            document.add(
                BundledScriptsSection(
                    server_bundle=os.path.exists(
                        os.path.join(resource.output_target, SERVER_BUNDLE_FILENAME)
                    ),
                    client_bundle=os.path.exists(
                        os.path.join(resource.output_target, CLIENT_BUNDLE_FILENAME)
                    ),
                )
            )
        else:
            for env in SCRIPT_ENVS:
                document.add(ScriptsSection(env, [*scripts.shared, *scripts.for_env(env)]))

        if manifest.files is not None:
            document.add(FilesSection(self._file_lines(resource)))

        if manifest.exports is not None:
            for env in EXPORT_ENVS:
                document.add(
                    ExportsSection(
                        env,
                        [
                            export_name(entry)
                            for entry in manifest.exports
                            if export_env(entry) == env
                        ],
                    )
                )

        return document

    def _file_lines(self, resource: "Resource") -> List[str]:
        lines = []
        for entry in resource.manifest.files or []:
            if isinstance(entry, FileEntry):
                if entry.serverOnly:
                    continue
                if entry.skipResolve:
                    lines.append(entry.src)
                spec = entry.src
            else:
                spec = entry

            lines.extend(item.target_manifest for item in resource.resolve_file_path(spec))
        return lines

    def render(
        self, resource: "Resource", scripts: Optional[ManifestScripts] = None
    ) -> str:
        """Render the manifest text of ``resource``."""
        return self.build_document(resource, scripts).render()

    def write(
        self, resource: "Resource", scripts: Optional[ManifestScripts] = None
    ) -> Path:
        """Render and write ``<output_target>/fxmanifest.lua``."""
        output = Path(resource.output_target) / OUTPUT_MANIFEST_FILENAME
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.render(resource, scripts), encoding="utf-8", newline="\n")
        log.debug(f"Wrote manifest for resource {resource.name} to {output}")
        return output
