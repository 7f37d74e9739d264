"""Scripts kept as JavaScript files, titled by their first comment."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigMapScript:
    """A script as it is stored in the cluster configuration."""

    title: str
    code: str
    active: bool = False


@dataclass(frozen=True)
class Script:
    """A script read from a file."""

    path: str
    title: str
    code: str
    active: bool = False

    def config_map(self) -> ConfigMapScript:
        """Return the script without its path, for the cluster configuration."""
        return ConfigMapScript(title=self.title, code=self.code, active=self.active)


def _skip_string(source: str, start: int, filename: str) -> int:
    quote = source[start]
    pos = start + 1
    while pos < len(source):
        char = source[pos]
        if char == "\\":
            pos += 2
            continue
        if char == quote:
            return pos + 1
        if char == "\n" and quote != "`":
            break
        pos += 1
    raise ValueError(f"{filename}: unterminated string literal")


def _first_comment(source: str, filename: str) -> str:
    """Return the text of the first comment, or "" if the file has no code."""
    first: str | None = None
    has_code = False
    pos = 0
    length = len(source)
    while pos < length:
        if source.startswith("//", pos):
            end = source.find("\n", pos + 2)
            end = length if end == -1 else end
            text = source[pos + 2:end]
            pos = end
        elif source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            if end == -1:
                raise ValueError(f"{filename}: unterminated comment")
            text = source[pos + 2:end]
            pos = end + 2
        elif source[pos] in "'\"`":
            pos = _skip_string(source, pos, filename)
            has_code = True
            continue
        else:
            if not source[pos].isspace():
                has_code = True
            pos += 1
            continue
        if first is None:
            first = text.strip()
    if not has_code or first is None:
        return ""
    return first


def read_script_file(path: str | os.PathLike) -> Script:
    """Read a script; its title is the text of its first comment.

    Raises OSError if the file cannot be read and ValueError if its
    comments or string literals are not terminated.
    """
    filename = os.path.basename(path)
    with open(path, encoding="utf-8") as handle:
        content = handle.read()
    title = _first_comment(content, filename)
    return Script(path=os.fspath(path), title=title, code=content, active=False)