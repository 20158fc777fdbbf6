"""Path-spec resolution.

A path-spec is either a plain glob relative to the resolving resource root
(``client/*.lua``, ``html/[id].html``) or a cross-resource reference of the
form ``$name/inner/path[:target]`` that imports files from another resource
into the ``_imports/<name>/`` namespace of the resolving resource.

Matches are always returned in lexicographic order of their absolute path,
so the emitted ``files`` block is stable between builds.
"""

import glob
import logging
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, List, NamedTuple, Optional

from ..config import MANIFEST_FILENAME
from .exceptions import AmbiguousTargetError
from .models import ResolvedItem, ResourceFile

if TYPE_CHECKING:
    from .resources.base import Resource
    from .resources.registry import ResourceRegistry

log = logging.getLogger(__name__)

CROSS_RESOURCE_PATTERN = re.compile(r"^\$([a-zA-Z0-9_\-]{1,24})/(.*?)(?::(.*))?$")
IMPORTS_DIR = "_imports"


class CrossReference(NamedTuple):
    resource_name: str
    inner_path: str
    target_path: Optional[str]


def parse_cross_reference(spec: str) -> Optional[CrossReference]:
    """Split ``$name/inner[:target]`` into its parts, or None for plain specs."""
    matched = CROSS_RESOURCE_PATTERN.match(spec)
    if not matched:
        return None

    resource_name, inner_path, target_path = matched.groups()
    return CrossReference(resource_name, inner_path, target_path or None)


def sanitize_brackets(spec: str) -> str:
    """Make literal ``[`` and ``]`` in a path-spec match themselves."""
    return re.sub(r"[\[\]]", lambda m: f"[{m.group(0)}]", spec)


def to_posix(path: str) -> str:
    return Path(path).as_posix()


def relative_to(path: str, root: str) -> str:
    return to_posix(os.path.relpath(path, root))


def glob_files(pattern: str) -> List[str]:
    """Expand ``pattern`` to the sorted list of matching files.

    Directories are skipped: only files can be copied or listed in a manifest.
    """
    return sorted(
        to_posix(match)
        for match in glob.glob(pattern, recursive=True)
        if os.path.isfile(match)
    )


def join_pattern(root: str, spec: str) -> str:
    """Join an escaped root with a sanitized spec into one glob pattern."""
    return f"{glob.escape(to_posix(root)).rstrip('/')}/{sanitize_brackets(to_posix(spec))}"


def find_files(root: str, pattern: str) -> List[ResourceFile]:
    """Files under ``root`` matching ``pattern`` (a glob relative to ``root``)."""
    return [
        ResourceFile(manifest_path=relative_to(match, root), source_path=match)
        for match in glob_files(join_pattern(root, pattern))
    ]


def find_resource_root(resource_name: str, source_dir: str) -> Optional[str]:
    """Locate the directory of resource ``resource_name`` under ``source_dir``.

    The first ``<resource_name>/manifest.yaml`` in lexicographic order wins.
    """
    pattern = f"{glob.escape(to_posix(source_dir)).rstrip('/')}/**/{resource_name}/{MANIFEST_FILENAME}"
    matches = glob_files(pattern)
    if not matches:
        return None

    return to_posix(os.path.dirname(matches[0]))


def resolve_cross_reference(
    resource: "Resource",
    spec: str,
    reference: CrossReference,
    registry: "ResourceRegistry",
    source_dir: str,
) -> List[ResolvedItem]:
    resource_root = find_resource_root(reference.resource_name, source_dir)
    if not resource_root:
        log.debug(
            f"Resource {resource.name}: '{spec}' references unknown resource "
            f"{reference.resource_name}"
        )
        return []

    target_resource = registry.get_or_create(reference.resource_name, resource_root)
    matches = target_resource.get_resource_files(reference.inner_path)

    if reference.target_path and len(matches) > 1:
        raise AmbiguousTargetError(
            spec, reference.target_path, [m.manifest_path for m in matches]
        )

    imports_dir = f"{IMPORTS_DIR}/{target_resource.name}"
    items = []
    for match in matches:
        # an explicit target renames the single match, in the manifest and on disk
        relative = reference.target_path or match.manifest_path
        items.append(
            ResolvedItem(
                resource_name=target_resource.name,
                source=match.source_path,
                source_manifest=match.manifest_path,
                target=f"{resource.output_target}/{imports_dir}/{relative}",
                target_manifest=f"{imports_dir}/{relative}",
            )
        )
    return items


def resolve(
    resource: "Resource",
    spec: str,
    registry: "ResourceRegistry",
    source_dir: str,
) -> List[ResolvedItem]:
    """Expand ``spec`` into concrete (source, target) mappings for ``resource``.

    Args:
        resource: The resource whose manifest declares ``spec``.
        spec: Plain glob or ``$name/inner[:target]`` reference.
        registry: Registry used to obtain referenced resources.
        source_dir: Tree searched for referenced resources.

    Returns:
        Resolved items in lexicographic match order; empty when nothing matched.

    Raises:
        AmbiguousTargetError: An explicit target was given for several matches.
    """
    reference = parse_cross_reference(spec)
    if reference:
        return resolve_cross_reference(resource, spec, reference, registry, source_dir)

    return [
        ResolvedItem(
            resource_name=resource.name,
            source=match.source_path,
            source_manifest=match.manifest_path,
            target=f"{resource.output_target}/{match.manifest_path}",
            target_manifest=match.manifest_path,
        )
        for match in find_files(resource.resource_root, spec)
    ]
