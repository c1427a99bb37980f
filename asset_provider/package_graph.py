"""Package graph - the set of packages whose assets can be provided.

The provider only reads from the graph. Graphs are normally built by the
caller; load_package_graph() reads the YAML manifest format used by the CLI:

    root: myapp
    packages:
      myapp: {path: ., version: 1.0.0}
      http: {path: ../http, version: 0.13.4}
      generated: {path: ../generated, version: 0.0.1, static: true}
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from collections.abc import Mapping
from pathlib import Path

import yaml

from .errors import PackageGraphError
from .models import PackageInfo

logger = logging.getLogger(__name__)

# Namespaces served by the pseudo-package resolvers; no real package may use them.
RESERVED_NAMES = frozenset({"tool", "platform"})


class Package:
    """A package on disk, described by a PackageInfo."""

    def __init__(self, info: PackageInfo):
        self.info = info

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def version(self) -> str:
        return self.info.version

    @property
    def root(self) -> Path:
        return self.info.root

    def path(self, *parts: str | Path) -> Path:
        """Absolute path of a native relative path inside this package."""
        return self.root.joinpath(*parts)

    def relative(self, file: str | Path) -> Path:
        """Path of ``file`` relative to the package root."""
        return Path(file).relative_to(self.root)

    def list_files(self, beneath: str = "lib") -> Iterator[Path]:
        """Yield every regular file beneath a subdirectory of the package.

        Entries whose name starts with "." are skipped along with their
        contents. A missing directory yields nothing.
        """
        base = self.path(beneath)
        if not base.is_dir():
            return
        for entry in sorted(base.iterdir()):
            yield from self._walk(entry)

    def _walk(self, entry: Path) -> Iterator[Path]:
        if entry.name.startswith("."):
            return
        if entry.is_dir():
            for child in sorted(entry.iterdir()):
                yield from self._walk(child)
        elif entry.is_file():
            yield entry

    def __repr__(self) -> str:
        return f"Package({self.name} {self.version} @ {self.root})"


class PackageGraph:
    """Read-only collection of packages keyed by name."""

    def __init__(self, packages: Mapping[str, PackageInfo] | list[PackageInfo], root_package: str | None = None):
        infos = list(packages.values()) if isinstance(packages, Mapping) else list(packages)
        reserved = sorted(info.name for info in infos if info.name in RESERVED_NAMES)
        if reserved:
            raise PackageGraphError(f"Package names are reserved for pseudo-packages: {', '.join(reserved)}")

        self.packages: dict[str, Package] = {info.name: Package(info) for info in infos}
        self.root_package = root_package

    def has_package(self, name: str) -> bool:
        return name in self.packages

    def is_package_static(self, name: str) -> bool:
        package = self.packages.get(name)
        return package is not None and package.info.is_static

    def versions(self) -> dict[str, str]:
        """Map of every package name to its version string."""
        return {name: package.version for name, package in self.packages.items()}

    def __repr__(self) -> str:
        return f"PackageGraph({len(self.packages)} packages, root={self.root_package})"


def load_package_graph(manifest_path: str | Path) -> PackageGraph:
    """Load a package graph from a YAML manifest.

    Args:
        manifest_path: Path to the manifest file

    Returns:
        PackageGraph with package roots resolved against the manifest directory

    Raises:
        PackageGraphError: Manifest missing, unreadable, or malformed
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.exists():
        raise PackageGraphError(f"Package manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise PackageGraphError(f"Invalid YAML in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise PackageGraphError(f"{manifest_path}: manifest must be a mapping")

    entries = data.get("packages")
    if not isinstance(entries, dict):
        raise PackageGraphError(f"{manifest_path}: 'packages' must be a mapping of name to package")

    base_dir = manifest_path.parent.resolve()
    infos = []
    for name, entry in entries.items():
        if not isinstance(entry, dict) or "path" not in entry or "version" not in entry:
            raise PackageGraphError(f"{manifest_path}: package '{name}' needs 'path' and 'version'")
        infos.append(
            PackageInfo(
                name=str(name),
                version=str(entry["version"]),
                root=(base_dir / entry["path"]).resolve(),
                is_static=bool(entry.get("static", False)),
            )
        )

    graph = PackageGraph(infos, root_package=data.get("root"))
    logger.debug(f"[graph:load] {manifest_path} -> {graph}")
    return graph
