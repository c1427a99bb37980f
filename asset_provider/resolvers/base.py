"""Shared resolver protocol and path-shape helpers."""

from collections.abc import Iterator
from pathlib import Path
from pathlib import PurePath
from typing import Protocol

from ..errors import AssetNotFoundError
from ..errors import InvalidAssetIdError
from ..models import Asset
from ..models import AssetId


class AssetResolver(Protocol):
    """Capability shared by every namespace resolver."""

    def get_asset(self, id: AssetId) -> Asset: ...

    def get_all_asset_ids(self, package: str) -> Iterator[AssetId]: ...


def require_relative(id: AssetId) -> list[str]:
    """Return the path segments, rejecting absolute or escaping paths.

    Raises:
        InvalidAssetIdError: Path has empty, "." or ".." segments
    """
    segments = id.segments
    if any(segment in ("", ".", "..") for segment in segments):
        raise InvalidAssetIdError(id, "path must be relative without empty, '.' or '..' segments")
    return segments


def require_leading_lib(id: AssetId, count: int) -> list[str]:
    """Check that ``id.path`` starts with ``count`` "lib" segments.

    Returns:
        The path segments after the first "lib"

    Raises:
        InvalidAssetIdError: Path is too short or has the wrong leading segments
    """
    segments = require_relative(id)
    expected = ["lib"] * count
    if len(segments) <= count or segments[:count] != expected:
        raise InvalidAssetIdError(id, f"path must start with '{'/'.join(expected)}/'")
    return segments[1:]


def assert_exists(path: Path, id: AssetId) -> None:
    """Raise AssetNotFoundError for ``id`` if ``path`` is not a file."""
    if not path.is_file():
        raise AssetNotFoundError(id)


def to_asset_path(*parts: str | PurePath) -> str:
    """Join native path parts into a POSIX asset path."""
    return PurePath(*parts).as_posix()
