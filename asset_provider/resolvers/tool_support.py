"""Resolver for the "tool" pseudo-package.

Exposes the provider's own support sources through the same protocol as real
packages, so loaders of transform code need no special case. When the graph
depends on the asset-graph engine, sources are run through version templating
first.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from ..models import AssetId
from ..models import FileHandle
from ..models import InlineText
from ..package_graph import PackageGraph
from ..preprocess import Preprocessor
from ..preprocess import substitute_versions
from .base import assert_exists
from .base import require_leading_lib
from .base import to_asset_path

logger = logging.getLogger(__name__)

TOOL_NAMESPACE = "tool"

DEFAULT_SOURCE_ROOT = Path(__file__).resolve().parent.parent / "data" / "support"


class ToolSupportResolver:
    """Maps "tool|lib/<path>" onto the support source root."""

    def __init__(
        self,
        graph: PackageGraph,
        source_root: Path = DEFAULT_SOURCE_ROOT,
        preprocess: Preprocessor = substitute_versions,
        engine_package: str = "assetgraph",
        extension: str = ".py",
    ):
        self.graph = graph
        self.source_root = Path(source_root).absolute()
        self.preprocess = preprocess
        self.engine_package = engine_package
        self.extension = extension

    def get_asset(self, id: AssetId) -> FileHandle | InlineText:
        parts = require_leading_lib(id, 1)
        file = self.source_root.joinpath(*parts)
        assert_exists(file, id)

        # Without the engine in the graph no transform code is ever loaded,
        # so the sources are served untouched.
        if not self.graph.has_package(self.engine_package):
            logger.debug(f"[asset:resolve] {id} -> {file} (raw, no {self.engine_package})")
            return FileHandle(id, file)

        contents = file.read_text(encoding="utf-8")
        contents = self.preprocess(contents, self.graph.versions(), file.as_uri())
        logger.debug(f"[asset:resolve] {id} -> {file} (preprocessed)")
        return InlineText(id, contents)

    def get_all_asset_ids(self, package: str = TOOL_NAMESPACE) -> Iterator[AssetId]:
        """Yield an id for every support source file."""
        return (
            AssetId(package=TOOL_NAMESPACE, path=to_asset_path("lib", file.relative_to(self.source_root)))
            for file in sorted(self.source_root.rglob(f"*{self.extension}"))
            if file.is_file()
        )

    def __repr__(self) -> str:
        return f"ToolSupportResolver({self.source_root})"
