"""Shared fixtures for asset provider tests."""

import zlib
from pathlib import Path

import pytest

from asset_provider.environment import PlatformLayout
from asset_provider.models import PackageInfo
from asset_provider.package_graph import PackageGraph


def write_files(root: Path, files: dict[str, str | bytes]) -> None:
    """Create ``files`` (relative POSIX path -> content) under ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)


@pytest.fixture
def packages_dir(tmp_path: Path) -> Path:
    """
    Create two real packages and one static package.

    Creates:
    - http/lib/client.py, http/lib/src/util.py, http/README.md
    - myapp/lib/main.py, myapp/web/index.html
    - generated/lib/gen.py (static)
    """
    root = tmp_path / "packages"
    write_files(
        root / "http",
        {
            "lib/client.py": "def get(url): ...\n",
            "lib/src/util.py": "DEBUG = False\n",
            "README.md": "# http\n",
        },
    )
    write_files(
        root / "myapp",
        {
            "lib/main.py": "import http\n",
            "web/index.html": "<html></html>\n",
        },
    )
    write_files(root / "generated", {"lib/gen.py": "# generated\n"})
    return root


@pytest.fixture
def graph(packages_dir: Path) -> PackageGraph:
    return PackageGraph(
        [
            PackageInfo(name="myapp", version="1.0.0", root=packages_dir / "myapp"),
            PackageInfo(name="http", version="0.13.4", root=packages_dir / "http"),
            PackageInfo(name="generated", version="0.0.1", root=packages_dir / "generated", is_static=True),
        ],
        root_package="myapp",
    )


@pytest.fixture
def make_files():
    """Expose write_files to tests outside this module."""
    return write_files


PLATFORM_SOURCES = {
    "core/core.py": "print('core')\n",
    "collections/abc.py": "class Mapping: ...\n" * 50,
    "README.txt": "not a source\n",
}


@pytest.fixture
def platform_root(tmp_path: Path) -> Path:
    """Installed platform with its sources under lib/."""
    root = tmp_path / "platform-install"
    write_files(root / "lib", PLATFORM_SOURCES)
    return root


@pytest.fixture
def archive_root(tmp_path: Path) -> Path:
    """Secondary archive package holding the same sources zlib-compressed."""
    root = tmp_path / "platform-archive"
    archived = {}
    for relative, content in PLATFORM_SOURCES.items():
        archived[relative + "_"] = zlib.compress(content.encode())
    write_files(root / "platform", archived)
    return root


@pytest.fixture
def direct_layout(platform_root: Path) -> PlatformLayout:
    return PlatformLayout.direct(platform_root)


@pytest.fixture
def archived_layout(archive_root: Path) -> PlatformLayout:
    return PlatformLayout.archived(archive_root)
