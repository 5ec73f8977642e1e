# SPDX-License-Identifier: MIT
"""Ordered, duplicate-free search path lists.

A PathList is what ends up in PATH, PKG_CONFIG_PATH, CMAKE_PREFIX_PATH and
friends. Entries keep the order they were first added in; adding a path
that is already present does nothing. `existing()` narrows the list to
directories that are actually on disk, which is the form every emitted
variable takes.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path


def _flatten(paths: Iterable[object]) -> Iterator[str]:
    """Yield path strings from a mix of strings, Paths and nested iterables.

    None entries are skipped. Plain strings containing os.pathsep are split
    so an existing search path string can be passed straight in; Path
    objects are always a single entry.
    """
    for item in paths:
        if item is None:
            continue
        if isinstance(item, str):
            for part in item.split(os.pathsep):
                if part:
                    yield part
        elif isinstance(item, os.PathLike):
            path = os.fspath(item)
            if path:
                yield path
        elif isinstance(item, Iterable):
            yield from _flatten(item)
        else:
            raise TypeError(f"Cannot use {type(item).__name__} as a path")


def existing_paths(candidates: Iterable[object]) -> list[str]:
    """Filter candidate paths down to existing directories.

    Args:
        candidates: Paths in priority order. May be nested.

    Returns:
        The directories that exist, first occurrence wins, order preserved.

    Examples:
        >>> existing_paths(["/", "/nonexistent", "/"])
        ['/']
    """
    result: list[str] = []
    seen: set[str] = set()
    for path in _flatten(candidates):
        if path in seen:
            continue
        seen.add(path)
        if Path(path).is_dir():
            result.append(path)
    return result


class PathList:
    """An ordered list of unique paths.

    Example:
        path = PathList("/opt/shims")
        path.append(["/opt/a/bin", "/opt/b/bin"], "/usr/bin")
        env["PATH"] = str(path.existing() or "")
    """

    __slots__ = ("_paths",)

    def __init__(self, *paths: object) -> None:
        self._paths: list[str] = []
        self.append(*paths)

    def append(self, *paths: object) -> PathList:
        """Add paths at the end, skipping any already present."""
        for path in _flatten(paths):
            if path not in self._paths:
                self._paths.append(path)
        return self

    def prepend(self, *paths: object) -> PathList:
        """Add paths at the front, moving none that are already present."""
        new = [p for p in dict.fromkeys(_flatten(paths)) if p not in self._paths]
        self._paths[:0] = new
        return self

    def existing(self) -> PathList | None:
        """Return the directories that exist, or None if none do."""
        found = existing_paths(self._paths)
        if not found:
            return None
        return PathList(found)

    def to_list(self) -> list[str]:
        return list(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, os.PathLike)):
            return os.fspath(path) in self._paths
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathList):
            return self._paths == other._paths
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __str__(self) -> str:
        return os.pathsep.join(self._paths)

    def __repr__(self) -> str:
        return f"PathList({str(self)!r})"
