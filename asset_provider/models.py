"""Data models for asset resolution.

Defines the identifiers and results exchanged with the asset-graph engine:
- AssetId: logical reference (package namespace + POSIX path)
- PackageInfo: read-only package description from the package graph
- FileHandle / InlineText / ByteStream: the three asset variants
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

CHUNK_SIZE = 64 * 1024


class AssetId(BaseModel):
    """Logical reference to an asset.

    Attributes:
        package: Namespace of the asset - a real package name or a pseudo-namespace
        path: Slash-separated path relative to the package, usually rooted at "lib"
    """

    model_config = ConfigDict(frozen=True)

    package: str
    path: str

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        return value.replace("\\", "/")

    @classmethod
    def parse(cls, text: str) -> AssetId:
        """Parse the "package|path" form, e.g. "http|lib/client.py".

        Raises:
            ValueError: Text has no "|" separator or an empty side
        """
        package, sep, path = text.partition("|")
        if not sep or not package or not path:
            raise ValueError(f"Asset id must look like 'package|path', got '{text}'")
        return cls(package=package, path=path)

    @property
    def namespace(self) -> str:
        return self.package

    @property
    def segments(self) -> list[str]:
        return self.path.split("/")

    def __str__(self) -> str:
        return f"{self.package}|{self.path}"


class PackageInfo(BaseModel):
    """Package description supplied by the package graph."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    root: Path
    is_static: bool = False


def _read_file_chunks(path: Path) -> Iterator[bytes]:
    with open(path, "rb") as f:
        while chunk := f.read(CHUNK_SIZE):
            yield chunk


@dataclass(frozen=True)
class FileHandle:
    """Asset backed by a file on disk. Content is not read until requested."""

    id: AssetId
    path: Path

    def chunks(self) -> Iterator[bytes]:
        return _read_file_chunks(self.path)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.path.read_text(encoding=encoding)

    def __repr__(self) -> str:
        return f"FileHandle({self.id}, {self.path})"


@dataclass(frozen=True)
class InlineText:
    """Asset whose content is already materialized, e.g. after preprocessing."""

    id: AssetId
    text: str
    encoding: str = "utf-8"

    def chunks(self) -> Iterator[bytes]:
        yield self.read_bytes()

    def read_bytes(self) -> bytes:
        return self.text.encode(self.encoding)

    def read_text(self, encoding: str | None = None) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"InlineText({self.id}, {len(self.text)} chars)"


@dataclass(frozen=True)
class ByteStream:
    """Asset produced lazily as a pull-based sequence of byte chunks.

    ``source`` is called once per ``chunks()`` call, so nothing is opened until
    the caller starts pulling. Closing the returned iterator early releases
    whatever the source holds open.
    """

    id: AssetId
    source: Callable[[], Iterator[bytes]]

    def chunks(self) -> Iterator[bytes]:
        return self.source()

    def read_bytes(self) -> bytes:
        return b"".join(self.chunks())

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding)

    def __repr__(self) -> str:
        return f"ByteStream({self.id})"


Asset = Union[FileHandle, InlineText, ByteStream]
