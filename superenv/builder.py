# SPDX-License-Identifier: MIT
"""Search path construction, one PathList per toolchain category.

Each category is assembled from its sources in a fixed priority order and
then narrowed to existing directories. The order is what keeps builds
isolated: the shim directory always wins PATH lookups, keg-only
dependencies come before the shared prefix, and system directories come
last.

ExtraPaths is the extension point. Each field is empty by default and is
slotted into its category at a fixed position; a platform layer that needs
extra SDK directories passes them here rather than patching the builder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from superenv.config import HomebrewConfig
from superenv.core.dependency import Dependency, DependencySet
from superenv.core.pathlist import PathList
from superenv.toolchains.compiler import gcc_version_formula

logger = logging.getLogger(__name__)

SYSTEM_PATHS: tuple[str, ...] = ("/usr/bin", "/bin", "/usr/sbin", "/sbin")

FormulaLookup = Callable[[str], Dependency | None]


class PathCategory(Enum):
    """Search path categories, valued by the variable each one fills."""

    PATH = "PATH"
    PKG_CONFIG_PATH = "PKG_CONFIG_PATH"
    PKG_CONFIG_LIBDIR = "PKG_CONFIG_LIBDIR"
    ACLOCAL_PATH = "ACLOCAL_PATH"
    ISYSTEM = "HOMEBREW_ISYSTEM_PATHS"
    INCLUDE = "HOMEBREW_INCLUDE_PATHS"
    LIBRARY = "HOMEBREW_LIBRARY_PATHS"
    CMAKE_PREFIX_PATH = "CMAKE_PREFIX_PATH"
    CMAKE_INCLUDE_PATH = "CMAKE_INCLUDE_PATH"
    CMAKE_LIBRARY_PATH = "CMAKE_LIBRARY_PATH"
    CMAKE_FRAMEWORK_PATH = "CMAKE_FRAMEWORK_PATH"


@dataclass(frozen=True)
class ExtraPaths:
    """Additional directories per category, empty unless a platform adds them."""

    path: tuple[Path, ...] = ()
    pkg_config: tuple[Path, ...] = ()
    aclocal: tuple[Path, ...] = ()
    isystem: tuple[Path, ...] = ()
    library: tuple[Path, ...] = ()
    cmake_include: tuple[Path, ...] = ()
    cmake_library: tuple[Path, ...] = ()
    cmake_frameworks: tuple[Path, ...] = ()


class PathListBuilder:
    """Builds the search path for each PathCategory.

    Example:
        builder = PathListBuilder(deps, config, homebrew_cc="gcc-13")
        path = builder.build(PathCategory.PATH)
        if path is not None:
            env["PATH"] = str(path)

    Args:
        deps: The classified dependencies.
        config: Installation locations.
        extra: Extension-point directories.
        homebrew_cc: The selected C compiler, used to add a versioned GCC
            formula's bin directory to PATH.
        formula_lookup: Optional lookup for installed formulae; returns None
            when a formula is absent. Defaults to config.find_formula.
    """

    def __init__(
        self,
        deps: DependencySet,
        config: HomebrewConfig,
        *,
        extra: ExtraPaths | None = None,
        homebrew_cc: str | None = None,
        formula_lookup: FormulaLookup | None = None,
    ) -> None:
        self.deps = deps
        self.config = config
        self.extra = extra or ExtraPaths()
        self.homebrew_cc = homebrew_cc
        self._lookup = formula_lookup or config.find_formula

    def build(self, category: PathCategory) -> PathList | None:
        """Build one category's search path.

        Returns:
            The existing directories in priority order, or None if there
            are none.
        """
        determine = {
            PathCategory.PATH: self.determine_path,
            PathCategory.PKG_CONFIG_PATH: self.determine_pkg_config_path,
            PathCategory.PKG_CONFIG_LIBDIR: self.determine_pkg_config_libdir,
            PathCategory.ACLOCAL_PATH: self.determine_aclocal_path,
            PathCategory.ISYSTEM: self.determine_isystem_paths,
            PathCategory.INCLUDE: self.determine_include_paths,
            PathCategory.LIBRARY: self.determine_library_paths,
            PathCategory.CMAKE_PREFIX_PATH: self.determine_cmake_prefix_path,
            PathCategory.CMAKE_INCLUDE_PATH: self.determine_cmake_include_path,
            PathCategory.CMAKE_LIBRARY_PATH: self.determine_cmake_library_path,
            PathCategory.CMAKE_FRAMEWORK_PATH: self.determine_cmake_frameworks_path,
        }[category]
        result = determine()
        logger.debug("%s = %s", category.value, result or "(unset)")
        return result

    def determine_path(self) -> PathList | None:
        path = PathList(self.config.shims_dir)

        # Formula dependencies can override standard tools.
        path.append(dep.opt_bin for dep in self.deps.deps)
        path.append(self.extra.path)
        path.append(SYSTEM_PATHS)

        gcc_bin = self._gcc_formula_bin()
        if gcc_bin is not None:
            path.append(gcc_bin)

        return path.existing()

    def _gcc_formula_bin(self) -> Path | None:
        formula = gcc_version_formula(self.homebrew_cc)
        if formula is None:
            return None
        # Not finding the formula is fine: nothing gets added.
        dep = self._lookup(formula)
        if dep is None:
            return None
        return dep.opt_bin

    def determine_pkg_config_path(self) -> PathList | None:
        return PathList(
            [dep.opt_lib / "pkgconfig" for dep in self.deps.deps],
            [dep.opt_share / "pkgconfig" for dep in self.deps.deps],
        ).existing()

    def determine_pkg_config_libdir(self) -> PathList | None:
        return PathList(self.extra.pkg_config).existing()

    def determine_aclocal_path(self) -> PathList | None:
        return PathList(
            [dep.opt_share / "aclocal" for dep in self.deps.keg_only],
            self.config.prefix / "share" / "aclocal",
            self.extra.aclocal,
        ).existing()

    def determine_isystem_paths(self) -> PathList | None:
        return PathList(
            self.config.prefix / "include",
            self.extra.isystem,
        ).existing()

    def determine_include_paths(self) -> PathList | None:
        return PathList(dep.opt_include for dep in self.deps.keg_only).existing()

    def determine_library_paths(self) -> PathList | None:
        return PathList(
            [dep.opt_lib for dep in self.deps.keg_only],
            self.config.prefix / "lib",
            self.extra.library,
        ).existing()

    def determine_cmake_prefix_path(self) -> PathList | None:
        return PathList(
            [dep.opt_prefix for dep in self.deps.keg_only],
            self.config.prefix,
        ).existing()

    def determine_cmake_include_path(self) -> PathList | None:
        return PathList(self.extra.cmake_include).existing()

    def determine_cmake_library_path(self) -> PathList | None:
        return PathList(self.extra.cmake_library).existing()

    def determine_cmake_frameworks_path(self) -> PathList | None:
        return PathList(
            [dep.opt_frameworks for dep in self.deps.deps],
            self.extra.cmake_frameworks,
        ).existing()
