"""Tests for the "tool" pseudo-package resolver."""

from pathlib import Path

import pytest

from asset_provider.errors import AssetNotFoundError
from asset_provider.errors import InvalidAssetIdError
from asset_provider.models import AssetId
from asset_provider.models import FileHandle
from asset_provider.models import InlineText
from asset_provider.models import PackageInfo
from asset_provider.package_graph import PackageGraph
from asset_provider.resolvers import ToolSupportResolver
from asset_provider.resolvers.tool_support import DEFAULT_SOURCE_ROOT

SOURCE = 'ENGINE = "{{version:assetgraph}}"\nHTTP = "{{version:http}}"\n'


@pytest.fixture
def source_root(tmp_path: Path, make_files) -> Path:
    root = tmp_path / "support"
    make_files(
        root,
        {
            "x.py": SOURCE,
            "transform/loader.py": "LOADER = True\n",
            "transform/notes.md": "# notes\n",
        },
    )
    return root


@pytest.fixture
def engine_graph(graph: PackageGraph, packages_dir: Path) -> PackageGraph:
    infos = [package.info for package in graph.packages.values()]
    infos.append(PackageInfo(name="assetgraph", version="0.15.2", root=packages_dir / "assetgraph"))
    return PackageGraph(infos)


def test_without_engine_returns_raw_file(graph, source_root: Path):
    resolver = ToolSupportResolver(graph, source_root=source_root)

    asset = resolver.get_asset(AssetId(package="tool", path="lib/x.py"))

    assert isinstance(asset, FileHandle)
    assert asset.path == source_root / "x.py"
    assert asset.read_bytes() == (source_root / "x.py").read_bytes()


def test_with_engine_fills_versions(engine_graph, source_root: Path):
    resolver = ToolSupportResolver(engine_graph, source_root=source_root)

    asset = resolver.get_asset(AssetId(package="tool", path="lib/x.py"))

    assert isinstance(asset, InlineText)
    assert asset.read_text() == 'ENGINE = "0.15.2"\nHTTP = "0.13.4"\n'


def test_preprocessor_call_contract(engine_graph, source_root: Path):
    calls = []

    def preprocess(text, versions, source_url):
        calls.append((text, dict(versions), source_url))
        return "processed"

    resolver = ToolSupportResolver(engine_graph, source_root=source_root, preprocess=preprocess)
    asset = resolver.get_asset(AssetId(package="tool", path="lib/x.py"))

    assert asset.read_text() == "processed"
    assert calls == [(SOURCE, engine_graph.versions(), (source_root / "x.py").as_uri())]


def test_custom_engine_package(graph, source_root: Path):
    resolver = ToolSupportResolver(graph, source_root=source_root, engine_package="http", preprocess=lambda t, v, u: t)

    assert isinstance(resolver.get_asset(AssetId(package="tool", path="lib/x.py")), InlineText)


def test_missing_file(graph, source_root: Path):
    resolver = ToolSupportResolver(graph, source_root=source_root)

    with pytest.raises(AssetNotFoundError):
        resolver.get_asset(AssetId(package="tool", path="lib/missing.py"))


@pytest.mark.parametrize("path", ["x.py", "src/x.py", "lib", "lib/../x.py"])
def test_path_must_start_with_lib(graph, source_root: Path, path: str):
    resolver = ToolSupportResolver(graph, source_root=source_root)

    with pytest.raises(InvalidAssetIdError):
        resolver.get_asset(AssetId(package="tool", path=path))


def test_enumerate_filters_extension(graph, source_root: Path):
    resolver = ToolSupportResolver(graph, source_root=source_root)

    ids = set(resolver.get_all_asset_ids("tool"))

    assert ids == {
        AssetId(package="tool", path="lib/x.py"),
        AssetId(package="tool", path="lib/transform/loader.py"),
    }


def test_bundled_support_sources_resolve(engine_graph):
    resolver = ToolSupportResolver(engine_graph)
    ids = list(resolver.get_all_asset_ids("tool"))

    assert DEFAULT_SOURCE_ROOT.is_dir()
    assert AssetId(package="tool", path="lib/version.py") in ids
    for asset_id in ids:
        text = resolver.get_asset(asset_id).read_text()
        assert "{{version:" not in text

    version = resolver.get_asset(AssetId(package="tool", path="lib/version.py")).read_text()
    assert 'ENGINE_VERSION = "0.15.2"' in version
