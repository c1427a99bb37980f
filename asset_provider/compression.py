"""Streaming zlib codec for archived platform sources.

Archived files are stored zlib-compressed with a trailing "_" on the
filename. Both directions work chunk by chunk so no file is ever held in
memory whole.
"""

from __future__ import annotations

import logging
import zlib
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path

from .models import CHUNK_SIZE

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = "_"

Decoder = Callable[[Iterable[bytes]], Iterator[bytes]]


def zlib_decode(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Lazily inflate a zlib stream.

    Raises:
        zlib.error: Input is corrupt or truncated
    """
    decompressor = zlib.decompressobj()
    for chunk in chunks:
        data = decompressor.decompress(chunk)
        if data:
            yield data
    tail = decompressor.flush()
    if tail:
        yield tail
    if not decompressor.eof:
        raise zlib.error("incomplete or truncated zlib stream")


def zlib_encode(chunks: Iterable[bytes], level: int = zlib.Z_DEFAULT_COMPRESSION) -> Iterator[bytes]:
    """Lazily deflate a byte stream into zlib format."""
    compressor = zlib.compressobj(level)
    for chunk in chunks:
        data = compressor.compress(chunk)
        if data:
            yield data
    yield compressor.flush()


def build_platform_archive(source_dir: Path, dest_dir: Path, extension: str = ".py") -> int:
    """Write a compressed copy of every ``extension`` file under ``source_dir``.

    Each file lands at the same relative location under ``dest_dir`` with
    ARCHIVE_SUFFIX appended to its name.

    Returns:
        Number of files written
    """
    count = 0
    for file in sorted(source_dir.rglob(f"*{extension}")):
        if not file.is_file():
            continue
        target = dest_dir / file.relative_to(source_dir)
        target = target.with_name(target.name + ARCHIVE_SUFFIX)
        target.parent.mkdir(parents=True, exist_ok=True)

        with open(file, "rb") as src, open(target, "wb") as dst:
            for data in zlib_encode(iter(lambda: src.read(CHUNK_SIZE), b"")):
                dst.write(data)
        count += 1

    logger.info(f"Archived {count} files from {source_dir} into {dest_dir}")
    return count
