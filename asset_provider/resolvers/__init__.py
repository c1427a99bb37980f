"""Namespace resolvers.

- OrdinaryResolver: real packages from the package graph
- ToolSupportResolver: the "tool" pseudo-package
- PlatformLibraryResolver: the "platform" pseudo-package
"""

from .base import AssetResolver
from .ordinary import OrdinaryResolver
from .platform_library import PLATFORM_NAMESPACE
from .platform_library import PlatformLibraryResolver
from .tool_support import TOOL_NAMESPACE
from .tool_support import ToolSupportResolver

__all__ = [
    "AssetResolver",
    "OrdinaryResolver",
    "PLATFORM_NAMESPACE",
    "PlatformLibraryResolver",
    "TOOL_NAMESPACE",
    "ToolSupportResolver",
]
