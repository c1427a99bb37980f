"""Resolver for the "platform" pseudo-package.

Exposes the platform's standard-library sources. Ids always carry two leading
"lib" segments: the first is the public-asset convention shared by every
package, the second belongs to the platform tree itself and is kept because
consumers expect it.

In archived mode the sources come from a secondary package that stores each
file zlib-compressed with a trailing "_"; they are inflated lazily while the
caller reads.
"""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from ..compression import ARCHIVE_SUFFIX
from ..compression import Decoder
from ..compression import zlib_decode
from ..environment import PlatformLayout
from ..environment import PlatformMode
from ..models import CHUNK_SIZE
from ..models import AssetId
from ..models import ByteStream
from ..models import FileHandle
from .base import assert_exists
from .base import require_leading_lib
from .base import to_asset_path

logger = logging.getLogger(__name__)

PLATFORM_NAMESPACE = "platform"

Opener = Callable[[Path], BinaryIO]


def _open_binary(path: Path) -> BinaryIO:
    return open(path, "rb")


class PlatformLibraryResolver:
    """Maps "platform|lib/lib/<path>" onto the layout chosen at start-up."""

    def __init__(
        self,
        layout: PlatformLayout,
        decoder: Decoder = zlib_decode,
        opener: Opener = _open_binary,
        extension: str = ".py",
    ):
        self.layout = layout
        self.decoder = decoder
        self.opener = opener
        self.extension = extension

    def get_asset(self, id: AssetId) -> FileHandle | ByteStream:
        # Strip only the first "lib"; the platform's own "lib" names its
        # library directory.
        parts = require_leading_lib(id, 2)

        if self.layout.mode is PlatformMode.DIRECT:
            file = self.layout.library_dir.joinpath(*parts[1:])
            assert_exists(file, id)
            logger.debug(f"[asset:resolve] {id} -> {file}")
            return FileHandle(id, file)

        # The archive stores the platform's lib directory under its own name,
        # so the second "lib" is dropped here too.
        file = self.layout.library_dir.joinpath(*parts[1:])
        file = file.with_name(file.name + ARCHIVE_SUFFIX)
        assert_exists(file, id)
        logger.debug(f"[asset:resolve] {id} -> {file} (archived)")
        return ByteStream(id, lambda: self._inflate(file))

    def _inflate(self, file: Path) -> Iterator[bytes]:
        with self.opener(file) as f:
            yield from self.decoder(iter(lambda: f.read(CHUNK_SIZE), b""))

    def get_all_asset_ids(self, package: str = PLATFORM_NAMESPACE) -> Iterator[AssetId]:
        """Yield an id for every platform source file."""
        library_dir = self.layout.library_dir
        archived = self.layout.mode is PlatformMode.ARCHIVED
        return (
            AssetId(package=PLATFORM_NAMESPACE, path=to_asset_path("lib", "lib", relative))
            for relative in self._source_files(library_dir, archived)
        )

    def _source_files(self, library_dir: Path, archived: bool) -> Iterator[str]:
        for file in library_dir.rglob("*"):
            if not file.is_file():
                continue
            relative = file.relative_to(library_dir).as_posix()
            if archived:
                # Only marked files are compressed sources
                if not relative.endswith(ARCHIVE_SUFFIX):
                    continue
                relative = relative[: -len(ARCHIVE_SUFFIX)]
            if relative.endswith(self.extension):
                yield relative

    def __repr__(self) -> str:
        return f"PlatformLibraryResolver({self.layout.mode.value}, {self.layout.library_dir})"
