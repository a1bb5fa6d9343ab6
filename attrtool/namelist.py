"""Sorted list of attribute names used to filter exports."""

from __future__ import annotations

import os
from bisect import bisect_left
from collections.abc import Iterable, Iterator
from pathlib import Path


class NameList:
    """A sorted collection of attribute names."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names = sorted(names)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str] | None) -> NameList:
        """Read one name per line; no path gives an empty list."""
        if path is None:
            return cls()
        lines = Path(path).read_bytes().split(b"\n")
        return cls(
            line.decode("utf-8", "surrogateescape") for line in lines if line
        )

    def exists(self, name: str) -> bool:
        """Return True if ``name`` is listed, or if the list is empty."""
        if not self._names:
            return True
        pos = bisect_left(self._names, name)
        return pos < len(self._names) and self._names[pos] == name

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)