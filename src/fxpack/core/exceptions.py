"""Custom exceptions for fxpack."""

from typing import List, Optional


class FxpackError(Exception):
    """Base class for fxpack errors."""


class AmbiguousTargetError(FxpackError, ValueError):
    """Raised when an explicit target path is given for a multi-file match.

    A cross-resource reference such as ``$shared/config/*.json:config.json``
    cannot copy several source files to one target name.
    """

    def __init__(self, spec: str, target_path: str, matches: List[str]):
        self.spec = spec
        self.target_path = target_path
        self.matches = matches
        super().__init__(
            f"Cannot resolve multiple files with target path: {target_path} "
            f"('{spec}' matched {len(matches)} files)"
        )


class ManifestLoadError(FxpackError):
    """Raised when a resource manifest cannot be read or parsed."""

    def __init__(self, resource_name: str, message: Optional[str] = None):
        self.resource_name = resource_name
        super().__init__(
            message or f"Failed to load manifest for resource {resource_name}"
        )


class HookError(FxpackError):
    """Raised when a hook module is unusable or returns an invalid result."""
