"""Asset provider - dispatches asset requests to namespace resolvers.

The provider is stateless apart from the platform layout chosen when it is
created, so any number of requests may run in parallel.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from .environment import PlatformLayout
from .environment import detect_platform_layout
from .errors import UnknownPackageError
from .models import Asset
from .models import AssetId
from .package_graph import PackageGraph
from .resolvers import PLATFORM_NAMESPACE
from .resolvers import TOOL_NAMESPACE
from .resolvers import AssetResolver
from .resolvers import OrdinaryResolver
from .resolvers import PlatformLibraryResolver
from .resolvers import ToolSupportResolver
from .settings import ProviderSettings

logger = logging.getLogger(__name__)


class ResolverKind(str, Enum):
    """Closed set of resolver variants."""

    ORDINARY = "ordinary"
    TOOL_SUPPORT = "tool_support"
    PLATFORM_LIBRARY = "platform_library"


PSEUDO_NAMESPACES = {
    TOOL_NAMESPACE: ResolverKind.TOOL_SUPPORT,
    PLATFORM_NAMESPACE: ResolverKind.PLATFORM_LIBRARY,
}


class AssetProvider:
    """Finds assets within packages on behalf of the asset-graph engine."""

    def __init__(
        self,
        graph: PackageGraph,
        tool_resolver: ToolSupportResolver,
        platform_resolver: PlatformLibraryResolver,
    ):
        self.graph = graph
        self._resolvers: dict[ResolverKind, AssetResolver] = {
            ResolverKind.ORDINARY: OrdinaryResolver(graph),
            ResolverKind.TOOL_SUPPORT: tool_resolver,
            ResolverKind.PLATFORM_LIBRARY: platform_resolver,
        }

    @property
    def packages(self) -> set[str]:
        """Real packages whose assets are provided dynamically."""
        return {name for name in self.graph.packages if not self.graph.is_package_static(name)}

    @property
    def static_packages(self) -> list[str]:
        """Pseudo-packages and statically bundled packages."""
        return [*PSEUDO_NAMESPACES, *(name for name in self.graph.packages if self.graph.is_package_static(name))]

    def list_namespaces(self) -> set[str]:
        """Every namespace this provider serves."""
        return self.packages | set(PSEUDO_NAMESPACES)

    def resolver_kind(self, package: str) -> ResolverKind:
        """Select the resolver variant for a namespace.

        Static packages still resolve here; static only means the engine
        reads them directly instead of transforming them.

        Raises:
            UnknownPackageError: Not a pseudo-namespace or a graph package
        """
        if package in PSEUDO_NAMESPACES:
            return PSEUDO_NAMESPACES[package]
        if self.graph.has_package(package):
            return ResolverKind.ORDINARY
        raise UnknownPackageError(package)

    def get_asset(self, id: AssetId) -> Asset:
        """Resolve an id to its content.

        Raises:
            AssetNotFoundError: The physical file does not exist
            InvalidAssetIdError: The id violates its namespace's path shape
        """
        return self._resolvers[self.resolver_kind(id.package)].get_asset(id)

    def get_all_asset_ids(self, package: str) -> Iterator[AssetId]:
        """Enumerate every asset id in a namespace. The result is single-pass."""
        kind = self.resolver_kind(package)
        logger.debug(f"[asset:list] {package} via {kind.value}")
        return self._resolvers[kind].get_all_asset_ids(package)

    def __repr__(self) -> str:
        return f"AssetProvider({self.graph!r})"


def create_asset_provider(
    graph: PackageGraph,
    settings: ProviderSettings | None = None,
    layout: PlatformLayout | None = None,
) -> AssetProvider:
    """Wire an AssetProvider with the default collaborators.

    Args:
        graph: Package graph to serve
        settings: Provider settings (defaults when None)
        layout: Platform layout; detected from the environment when None
    """
    settings = settings or ProviderSettings()
    layout = layout or detect_platform_layout(settings)

    tool_resolver = ToolSupportResolver(
        graph,
        engine_package=settings.engine_package,
        extension=settings.source_extension,
    )
    platform_resolver = PlatformLibraryResolver(layout, extension=settings.source_extension)
    return AssetProvider(graph, tool_resolver, platform_resolver)
