# SPDX-License-Identifier: MIT
"""Resolved dependencies and their classification.

A Dependency is handed in fully formed by whatever resolved the formula's
dependency graph. Its directories all live under the opt-path for that
formula (`<prefix>/opt/<name>`), a stable symlink to the installed keg.

A DependencySet groups the same dependencies three ways:
- deps: everything needed to build.
- keg_only: deps that are not linked into the shared prefix, so their
  include/lib/share directories must be added to search paths explicitly.
- run_time: deps needed only when the built software runs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Dependency:
    """One resolved dependency and the directories it exposes.

    Attributes:
        name: Formula name (e.g., 'openssl@3').
        opt_prefix: The formula's opt-path.
        opt_bin: Executables.
        opt_lib: Libraries (also holds lib/pkgconfig).
        opt_include: Headers.
        opt_share: Shared data (share/pkgconfig, share/aclocal).
        opt_frameworks: macOS frameworks.
    """

    name: str
    opt_prefix: Path
    opt_bin: Path
    opt_lib: Path
    opt_include: Path
    opt_share: Path
    opt_frameworks: Path

    @classmethod
    def from_opt_root(cls, name: str, opt_root: Path | str) -> Dependency:
        """Derive every directory from `<opt_root>/<name>`.

        Args:
            name: Formula name.
            opt_root: The manager's opt directory (e.g., /usr/local/opt).
        """
        prefix = Path(opt_root) / name
        return cls(
            name=name,
            opt_prefix=prefix,
            opt_bin=prefix / "bin",
            opt_lib=prefix / "lib",
            opt_include=prefix / "include",
            opt_share=prefix / "share",
            opt_frameworks=prefix / "Frameworks",
        )

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DependencySet:
    """Three read-only views over one list of dependencies.

    Classification is the caller's job; nothing here decides whether a
    formula is keg-only.
    """

    deps: tuple[Dependency, ...] = ()
    keg_only: tuple[Dependency, ...] = ()
    run_time: tuple[Dependency, ...] = ()

    @classmethod
    def build(
        cls,
        deps: Iterable[Dependency],
        *,
        keg_only_names: Iterable[str] = (),
        run_time_names: Iterable[str] = (),
    ) -> DependencySet:
        """Classify dependencies by name.

        Args:
            deps: All dependencies, in the order they should be searched.
            keg_only_names: Names of the keg-only subset.
            run_time_names: Names of the run-time subset.

        Raises:
            ValueError: If a classified name is not among deps.
        """
        deps = tuple(deps)
        by_name = {dep.name: dep for dep in deps}

        def select(names: Iterable[str], kind: str) -> tuple[Dependency, ...]:
            wanted = set(names)
            unknown = sorted(wanted - by_name.keys())
            if unknown:
                raise ValueError(
                    f"{kind} dependencies not in dependency list: {', '.join(unknown)}"
                )
            return tuple(dep for dep in deps if dep.name in wanted)

        return cls(
            deps=deps,
            keg_only=select(keg_only_names, "Keg-only"),
            run_time=select(run_time_names, "Run-time"),
        )

    def names(self) -> list[str]:
        """Names of all dependencies, in order."""
        return [dep.name for dep in self.deps]

    def has(self, name: str) -> bool:
        return any(dep.name == name for dep in self.deps)

    def __len__(self) -> int:
        return len(self.deps)
