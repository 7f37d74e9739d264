"""File-system helpers: directories, cleanup and zip archives."""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
import zipfile

log = logging.getLogger(__name__)


def ensure_dir(path: str | os.PathLike) -> None:
    """Create ``path`` with mode 0700 unless a directory is already there.

    Raises NotADirectoryError if something else exists at ``path``.
    """
    try:
        os.mkdir(path, 0o700)
    except FileExistsError:
        if not os.path.isdir(path):
            raise NotADirectoryError(f"path exists but is not a directory: {path}") from None


def remove_files_by_extension(dir_path: str | os.PathLike, ext: str) -> list[str]:
    """Remove every entry of ``dir_path`` named ``*.<ext>``; return their paths."""
    pattern = f"*.{ext}"
    try:
        with os.scandir(dir_path) as entries:
            matches = sorted(entry.path for entry in entries if fnmatch.fnmatchcase(entry.name, pattern))
    except FileNotFoundError:
        return []
    for path in matches:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)
    return matches


def add_file_to_zip(zip_file: zipfile.ZipFile, filename: str | os.PathLike) -> None:
    """Add the file at ``filename`` to the archive under its base name, deflated."""
    zip_file.write(filename, arcname=os.path.basename(filename), compress_type=zipfile.ZIP_DEFLATED)


def add_str_to_zip(zip_file: zipfile.ZipFile, text: str, name: str) -> None:
    """Add ``text`` to the archive as the member ``name``."""
    zip_file.writestr(name, text.encode("utf-8"), compress_type=zipfile.ZIP_DEFLATED)


def unzip(zip_file: zipfile.ZipFile, dest: str | os.PathLike) -> list[str]:
    """Extract every member into ``dest``; return the paths of written files.

    Raises ValueError for a member that would land outside ``dest``.
    """
    dest = os.path.abspath(dest)
    os.makedirs(dest, exist_ok=True)
    root = os.path.normpath(dest) + os.sep
    written = []
    for info in zip_file.infolist():
        path = os.path.normpath(os.path.join(dest, info.filename.lstrip("/\\")))
        if not path.startswith(root):
            raise ValueError(f"illegal file path: {path}")
        if info.is_dir():
            os.makedirs(path, exist_ok=True)
            continue
        os.makedirs(os.path.dirname(path), exist_ok=True)
        log.info("Writing HAR file... %s", path)
        with zip_file.open(info) as source, open(path, "wb") as target:
            shutil.copyfileobj(source, target)
        log.info("HAR file at: %s", path)
        written.append(path)
    return written