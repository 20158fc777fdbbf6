# Load .env vars from file before everything else
from dotenv import load_dotenv

load_dotenv()

from .logger import setup_logging  # noqa: E402

setup_logging()

from .config import BuildConfig  # noqa: E402
from .core.exceptions import AmbiguousTargetError, FxpackError  # noqa: E402
from .core.hooks import HookInvoker  # noqa: E402
from .core.resources import (  # noqa: E402
    BuildOptions,
    BuildResult,
    Resource,
    ResourceManifest,
    ResourceRegistry,
    ResolvedItem,
    ScriptResource,
)
from .core.session import BuildSession  # noqa: E402
from .core.writer import ManifestWriter  # noqa: E402

__all__ = [
    "AmbiguousTargetError",
    "BuildConfig",
    "BuildOptions",
    "BuildResult",
    "BuildSession",
    "FxpackError",
    "HookInvoker",
    "ManifestWriter",
    "Resource",
    "ResourceManifest",
    "ResourceRegistry",
    "ResolvedItem",
    "ScriptResource",
]
