"""Unpack a tar stream produced by ``tar cf - <path>`` inside a pod."""

from __future__ import annotations

import os
import posixpath
import shutil
import tarfile
from typing import BinaryIO


class TarContentsCorrupted(ValueError):
    """A tar member lies outside the path that was asked for."""

    def __init__(self, name: str, prefix: str) -> None:
        self.name = name
        self.prefix = prefix
        super().__init__("tar contents corrupted")


def get_prefix(path: str) -> str:
    """Return ``path`` without its leading slashes, as tar stores it."""
    return path.lstrip("/")


def strip_path_shortcuts(path: str) -> str:
    """Drop leading ``../`` parts and a bare ``.`` or ``..`` from ``path``."""
    while path.startswith("../"):
        path = path[len("../"):]
    if path in (".", ".."):
        path = ""
    if path.startswith("/"):
        return path[1:]
    return path


def copy_destination(src_path: str, dst_path: str) -> tuple[str, str]:
    """Return ``(destination, prefix)`` for copying ``src_path`` into ``dst_path``.

    ``prefix`` is the name the source has inside the tar stream and
    ``destination`` is where its contents are to be written.
    """
    prefix = strip_path_shortcuts(posixpath.normpath(get_prefix(src_path)))
    base = posixpath.basename(prefix.rstrip("/")) or "."
    destination = posixpath.normpath(posixpath.join(dst_path, base))
    return destination, prefix


class _Rewound:
    """A reader that yields already-consumed bytes before the rest of a stream."""

    def __init__(self, head: bytes, rest: BinaryIO) -> None:
        self._head = head
        self._rest = rest

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0:
            data = self._head + self._rest.read()
            self._head = b""
            return data
        if not self._head:
            return self._rest.read(size)
        data, self._head = self._head[:size], self._head[size:]
        if len(data) < size:
            data += self._rest.read(size - len(data))
        return data


def untar_all(stream: BinaryIO, dest_dir: str, prefix: str) -> list[str]:
    """Extract the tar ``stream`` below ``dest_dir``, removing ``prefix`` from names.

    Returns the paths that were written. Raises TarContentsCorrupted when a
    member name does not start with ``prefix``. An empty stream writes nothing.
    """
    head = stream.read(tarfile.BLOCKSIZE)
    if not head:
        return []

    written: list[str] = []
    with tarfile.open(fileobj=_Rewound(head, stream), mode="r|") as archive:
        for member in archive:
            name = member.name
            if not name.startswith(prefix):
                raise TarContentsCorrupted(name, prefix)

            rest = name[len(prefix):].lstrip("/")
            destination = os.path.normpath(os.path.join(dest_dir, rest))
            os.makedirs(os.path.dirname(destination), 0o755, exist_ok=True)

            if member.isdir():
                os.makedirs(destination, 0o755, exist_ok=True)
                continue

            if member.issym():
                os.symlink(member.linkname, destination)
            else:
                source = archive.extractfile(member) if member.isfile() else None
                with open(destination, "wb") as target:
                    if source is not None:
                        shutil.copyfileobj(source, target)
            written.append(destination)
    return written