"""Helpers for lists of strings."""

from __future__ import annotations

from collections.abc import Iterable


def contains(items: Iterable[str], value: str) -> bool:
    """Return True if ``value`` is one of ``items``."""
    return value in items


def unique(items: Iterable[str]) -> list[str]:
    """Return the items without repeats, keeping first-seen order."""
    return list(dict.fromkeys(items))


def equal_string_slices(first: list[str], second: list[str]) -> bool:
    """Return True if both lists have the same length and every item of
    ``first`` occurs in ``second``."""
    if len(first) != len(second):
        return False
    return all(item in second for item in first)


def diff(a: Iterable[str], b: Iterable[str]) -> list[str]:
    """Return the elements of ``a`` that are not in ``b``, in order."""
    excluded = set(b)
    return [item for item in a if item not in excluded]