"""Resolver for assets of real packages in the package graph."""

import logging
from collections.abc import Iterator

from ..errors import UnknownPackageError
from ..models import AssetId
from ..models import FileHandle
from ..package_graph import Package
from ..package_graph import PackageGraph
from .base import assert_exists
from .base import require_relative
from .base import to_asset_path

logger = logging.getLogger(__name__)


class OrdinaryResolver:
    """Serves files of real packages straight from their package roots."""

    def __init__(self, graph: PackageGraph):
        self.graph = graph

    def get_asset(self, id: AssetId) -> FileHandle:
        package = self._package(id.package)
        file = package.path(*require_relative(id))
        assert_exists(file, id)
        logger.debug(f"[asset:resolve] {id} -> {file}")
        return FileHandle(id, file)

    def get_all_asset_ids(self, package: str) -> Iterator[AssetId]:
        """Yield one id per file beneath the package's lib directory."""
        pkg = self._package(package)
        return (
            AssetId(package=package, path=to_asset_path(pkg.relative(file)))
            for file in pkg.list_files(beneath="lib")
        )

    def _package(self, name: str) -> Package:
        package = self.graph.packages.get(name)
        if package is None:
            raise UnknownPackageError(name)
        return package

    def __repr__(self) -> str:
        return f"OrdinaryResolver({self.graph!r})"
