# SPDX-License-Identifier: MIT
"""The build environment record.

A BuildEnvironment is the mapping of variable names to values that is
handed to the compiler wrapper and to every build subprocess. It is an
explicit object, never os.environ: callers pass it to subprocess.run(env=...).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any

# Variables inherited from an ambient shell that would leak the system
# toolchain into the build. as_nl is exported by configure scripts generated
# by autoconf 2.61 or later and is used as a "running under configure" test.
CONTAMINATING_VARS: tuple[str, ...] = (
    "CC",
    "CXX",
    "OBJC",
    "OBJCXX",
    "CPP",
    "MAKE",
    "LD",
    "LDSHARED",
    "CFLAGS",
    "CXXFLAGS",
    "OBJCFLAGS",
    "OBJCXXFLAGS",
    "LDFLAGS",
    "CPPFLAGS",
    "MACOSX_DEPLOYMENT_TARGET",
    "SDKROOT",
    "DEVELOPER_DIR",
    "CMAKE_PREFIX_PATH",
    "CMAKE_INCLUDE_PATH",
    "CMAKE_FRAMEWORK_PATH",
    "GOBIN",
    "GOPATH",
    "GOROOT",
    "PERL_MB_OPT",
    "PERL_MM_OPT",
    "LIBRARY_PATH",
    "LD_LIBRARY_PATH",
    "LD_PRELOAD",
    "LD_RUN_PATH",
    "as_nl",
)

_MAKE_JOBS_RE = re.compile(r"-\w*j(\d+)")


class BuildEnvironment(MutableMapping[str, str]):
    """Mutable mapping of environment variable names to string values.

    Assigning None removes the variable, so optional values can be written
    unconditionally:

        env["M4"] = locate("m4")  # unset if m4 was not found

    Example:
        env = BuildEnvironment.from_environ(os.environ)
        env.reset()
        env["HOMEBREW_ENV"] = "super"
        subprocess.run(["make"], env=env.to_dict())
    """

    __slots__ = ("_vars",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self[key] = value

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> BuildEnvironment:
        """Copy an existing environment (typically os.environ)."""
        return cls(dict(environ))

    def __getitem__(self, key: str) -> str:
        return self._vars[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if value is None:
            self._vars.pop(key, None)
        else:
            self._vars[key] = str(value)

    def __delitem__(self, key: str) -> None:
        del self._vars[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def copy(self) -> BuildEnvironment:
        return BuildEnvironment(self._vars)

    def to_dict(self) -> dict[str, str]:
        """Return a plain dict suitable for subprocess env=."""
        return dict(self._vars)

    def append(self, key: str, value: str, separator: str = " ") -> None:
        """Append to a variable, joining with separator if it has a value."""
        old = self._vars.get(key, "")
        self[key] = f"{old}{separator}{value}" if old else value

    def reset(self) -> None:
        """Remove variables inherited from an ambient environment.

        Compiler selection, flags and search paths must come from the
        composer alone, and nothing downstream may think it is running
        inside a configure script.
        """
        for key in CONTAMINATING_VARS:
            self._vars.pop(key, None)

    @contextmanager
    def deparallelized(self) -> Iterator[str | None]:
        """Remove MAKEFLAGS for the duration of the block.

        The previous value (None if unset) is yielded and restored on exit,
        whether the block returns normally or raises.
        """
        old = self._vars.pop("MAKEFLAGS", None)
        try:
            yield old
        finally:
            self["MAKEFLAGS"] = old

    def deparallelize(self, action: Callable[[], Any] | None = None) -> str | None:
        """Remove MAKEFLAGS, causing make to use a single job.

        This is useful for makefiles with race conditions. When an action is
        given, MAKEFLAGS is removed only while it runs and is restored after
        it completes or fails.

        Args:
            action: Optional callable to run without parallelism.

        Returns:
            The previous MAKEFLAGS value, or None if it was not set.
        """
        if action is None:
            return self._vars.pop("MAKEFLAGS", None)
        with self.deparallelized() as old:
            action()
        return old

    def make_jobs(self) -> int:
        """The job count from MAKEFLAGS, at least 1."""
        match = _MAKE_JOBS_RE.search(self._vars.get("MAKEFLAGS", ""))
        jobs = int(match.group(1)) if match else 0
        return max(jobs, 1)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BuildEnvironment):
            return self._vars == other._vars
        if isinstance(other, Mapping):
            return self._vars == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"BuildEnvironment(vars=[{', '.join(self._vars)}])"
