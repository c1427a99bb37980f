"""Asset provider - resolves logical asset ids to content for the asset graph.

Three namespaces are served behind one contract:
- real packages from the package graph
- "tool": the provider's own support sources, version-templated on demand
- "platform": the platform's standard-library sources (direct or archived)
"""

from .environment import PlatformLayout
from .environment import PlatformMode
from .environment import detect_platform_layout
from .errors import AssetNotFoundError
from .errors import AssetProviderError
from .errors import InvalidAssetIdError
from .errors import UnknownPackageError
from .models import Asset
from .models import AssetId
from .models import ByteStream
from .models import FileHandle
from .models import InlineText
from .models import PackageInfo
from .package_graph import PackageGraph
from .package_graph import load_package_graph
from .provider import AssetProvider
from .provider import ResolverKind
from .provider import create_asset_provider

__all__ = [
    "Asset",
    "AssetId",
    "AssetNotFoundError",
    "AssetProvider",
    "AssetProviderError",
    "ByteStream",
    "FileHandle",
    "InlineText",
    "InvalidAssetIdError",
    "PackageGraph",
    "PackageInfo",
    "PlatformLayout",
    "PlatformMode",
    "ResolverKind",
    "UnknownPackageError",
    "create_asset_provider",
    "detect_platform_layout",
    "load_package_graph",
]
