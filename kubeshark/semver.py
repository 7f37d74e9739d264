"""Loose semantic version strings compared by their first three numbers."""

from __future__ import annotations

import re

_NUMBER = re.compile(r"\d+")


class SemVersion(str):
    """A version string such as ``v1.27.3-gke.100``.

    The first three runs of digits are taken as major, minor and patch.
    Parts are compared as strings, exactly as they appear.
    """

    def _numbers(self) -> list[str]:
        return _NUMBER.findall(self)[:3]

    def is_valid(self) -> bool:
        """Return True if the string holds at least three numbers."""
        return len(self._numbers()) == 3

    def breakdown(self) -> tuple[str, str, str]:
        """Return the (major, minor, patch) parts.

        Raises ValueError if the string does not hold three numbers.
        """
        numbers = self._numbers()
        if len(numbers) != 3:
            raise ValueError(f"not a semantic version: {str(self)!r}")
        major, minor, patch = numbers
        return major, minor, patch

    def major(self) -> str:
        return self.breakdown()[0]

    def minor(self) -> str:
        return self.breakdown()[1]

    def patch(self) -> str:
        return self.breakdown()[2]

    def greater_than(self, other: str) -> bool:
        """Return True if this version is strictly greater than ``other``."""
        return self.breakdown() > SemVersion(other).breakdown()