"""Text helpers: terminal colours, unicode unescaping and YAML output."""

from __future__ import annotations

import logging
import re
import string
from enum import Enum
from typing import Any

import yaml

log = logging.getLogger(__name__)

_ESCAPE = re.compile(r"(\\+)u")
_HEX = frozenset(string.hexdigits)


class Color(Enum):
    """Bold ANSI colour templates; ``%s`` marks where the text goes."""

    BLACK = "\033[1;30m%s\033[0m"
    RED = "\033[1;31m%s\033[0m"
    GREEN = "\033[1;32m%s\033[0m"
    YELLOW = "\033[1;33m%s\033[0m"
    BLUE = "\033[1;34m%s\033[0m"
    MAGENTA = "\033[1;35m%s\033[0m"
    CYAN = "\033[1;36m%s\033[0m"
    WHITE = "\033[1;37m%s\033[0m"


def colorize(text: str, color: Color) -> str:
    """Wrap ``text`` in the escape codes of ``color``."""
    return color.value % (text,)


def unescape_unicode_characters(raw: str) -> str:
    r"""Turn literal ``\uXXXX`` sequences in ``raw`` into the characters.

    A backslash run before ``u`` loses one backslash to the escape. If any
    sequence is malformed the error is logged and ``raw`` is returned as is.
    """
    parts: list[str] = []
    pos = 0
    while (match := _ESCAPE.search(raw, pos)) is not None:
        digits = raw[match.end():match.end() + 4]
        if len(digits) != 4 or not _HEX.issuperset(digits):
            log.error("invalid unicode escape in %r", raw)
            return raw
        code = int(digits, 16)
        if 0xD800 <= code <= 0xDFFF:
            log.error("invalid unicode code point in %r", raw)
            return raw
        parts.append(raw[pos:match.start()])
        parts.append("\\" * (len(match.group(1)) - 1))
        parts.append(chr(code))
        pos = match.end() + 4
    parts.append(raw[pos:])
    return "".join(parts)


def pretty_yaml(data: Any) -> str:
    """Render ``data`` as block-style YAML indented by two spaces."""
    return yaml.safe_dump(
        data,
        indent=2,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )