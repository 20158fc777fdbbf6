import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ...config import normalize

if TYPE_CHECKING:
    from .base import Resource

log = logging.getLogger(__name__)

ResourceFactory = Callable[[str, str, "ResourceRegistry"], "Resource"]


class ResourceRegistry:
    """Single-instance-per-name store of the resources of a build session.

    Resources are keyed purely by name: the first registration of a name
    wins, and later ``get_or_create`` calls return that instance even when
    they pass a different root. Cross-resource lookups therefore share the
    manifest and state of the resource they reference.
    """

    def __init__(self, factory: ResourceFactory):
        self._factory = factory
        self._resources: Dict[str, "Resource"] = {}

    def get_or_create(self, name: str, resource_root: str) -> "Resource":
        """Return the resource registered as ``name``, creating it on first use."""
        resource = self._resources.get(name)
        if resource is not None:
            if normalize(resource_root) != resource.resource_root:
                log.warning(
                    f"Resource {name} already registered from {resource.resource_root}, "
                    f"ignoring {normalize(resource_root)}"
                )
            return resource

        log.debug(f"Registering resource {name} from {resource_root}")
        resource = self._factory(name, resource_root, self)
        self._resources[name] = resource
        return resource

    def get(self, name: str) -> Optional["Resource"]:
        return self._resources.get(name)

    def names(self) -> List[str]:
        return list(self._resources)

    def clear(self) -> None:
        self._resources.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._resources

    def __len__(self) -> int:
        return len(self._resources)
