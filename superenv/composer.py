# SPDX-License-Identifier: MIT
"""Build environment composition.

The EnvironmentComposer turns a classified dependency set, a compiler
request and the installation config into the complete set of variables
the compiler wrapper reads. Composition happens once, before any build
subprocess starts:

1. Only specify the environment we need (no LDFLAGS for cmake).
2. Force all include and library paths into the wrapper's configuration.
3. Tell the wrapper which flags to keep, add or strip through
   HOMEBREW_CCCFG rather than through CFLAGS.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from superenv import hardware
from superenv.builder import ExtraPaths, FormulaLookup, PathCategory, PathListBuilder
from superenv.config import HomebrewConfig
from superenv.core import cccfg
from superenv.core.cccfg import Cccfg
from superenv.core.dependency import DependencySet
from superenv.core.environment import BuildEnvironment
from superenv.core.errors import CompilerError
from superenv.toolchains.compiler import gcc_version, select_cc, select_cxx

logger = logging.getLogger(__name__)

DEFAULT_OPTIMIZATION_LEVEL = "Os"


class OptimizationLevel(Enum):
    """Values accepted for HOMEBREW_OPTIMIZATION_LEVEL."""

    O3 = "O3"
    O2 = "O2"
    O1 = "O1"
    O0 = "O0"
    Os = "Os"


def _deprecated(name: str) -> None:
    logger.warning("Calling %s is deprecated!", name)


class EnvironmentComposer:
    """Composes a BuildEnvironment for one build.

    Example:
        composer = EnvironmentComposer(deps, config, compiler="clang")
        composer.cxx11()
        env = composer.compose()
        subprocess.run(["make"], env=env.to_dict())

    Args:
        deps: Classified dependencies.
        config: Installation locations and defaults.
        compiler: Requested compiler; falls back to HOMEBREW_CC in the
            environment being composed, then the platform default.
        formula_prefix: Install prefix of the formula being built, if known.
        extra: Extension-point directories for the search paths.
        build_bottle: Optimize for the bottle architecture instead of the
            host.
        bottle_arch: Explicit bottle architecture.
        formula_lookup: Optional installed-formula lookup used for the
            versioned GCC formula.
        locate: Finds a tool on the host (used for M4).
    """

    def __init__(
        self,
        deps: DependencySet,
        config: HomebrewConfig,
        *,
        compiler: str | None = None,
        formula_prefix: str | None = None,
        extra: ExtraPaths | None = None,
        build_bottle: bool = False,
        bottle_arch: str | None = None,
        formula_lookup: FormulaLookup | None = None,
        locate: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self.deps = deps
        self.config = config
        self.requested_compiler = compiler
        self.formula_prefix = formula_prefix
        self.extra = extra or ExtraPaths()
        self.build_bottle = build_bottle
        self.bottle_arch = bottle_arch
        self._formula_lookup = formula_lookup
        self._locate = locate
        self.cccfg = Cccfg(cccfg.DEFAULT_FLAGS)
        self.archflags = ""
        self.optimization_level = DEFAULT_OPTIMIZATION_LEVEL
        self.env = BuildEnvironment()
        self.compiler: str | None = None

    # Composition

    def compose(self, env: BuildEnvironment | None = None) -> BuildEnvironment:
        """Populate and return the build environment.

        Args:
            env: Environment to populate. Defaults to a new empty one; pass
                BuildEnvironment.from_environ(os.environ) to start from the
                inherited environment (contamination markers are removed).

        Raises:
            UnsupportedArchitectureError: If no optimization flags exist for
                the effective architecture.
        """
        self.env = env if env is not None else BuildEnvironment()
        env = self.env
        env.reset()
        self.set_compiler(select_cc(self.requested_compiler, env))

        env["HOMEBREW_ENV"] = "super"
        if "MAKEFLAGS" not in env:
            env["MAKEFLAGS"] = f"-j{self.config.make_jobs}"

        paths = PathListBuilder(
            self.deps,
            self.config,
            extra=self.extra,
            homebrew_cc=self.compiler,
            formula_lookup=self._formula_lookup,
        )
        self._set_path(paths, PathCategory.PATH)
        self._set_path(paths, PathCategory.PKG_CONFIG_PATH)
        self._set_path(paths, PathCategory.PKG_CONFIG_LIBDIR)

        env["HOMEBREW_CCCFG"] = str(self.cccfg)
        env["HOMEBREW_OPTIMIZATION_LEVEL"] = self.optimization_level
        env["HOMEBREW_BREW_FILE"] = str(self.config.brew_file)
        env["HOMEBREW_PREFIX"] = str(self.config.prefix)
        env["HOMEBREW_CELLAR"] = str(self.config.cellar)
        env["HOMEBREW_OPT"] = str(self.config.opt)
        env["HOMEBREW_TEMP"] = str(self.config.temp)
        env["HOMEBREW_OPTFLAGS"] = self.determine_optflags()
        env["HOMEBREW_ARCHFLAGS"] = self.archflags
        self._set_path(paths, PathCategory.CMAKE_PREFIX_PATH)
        self._set_path(paths, PathCategory.CMAKE_FRAMEWORK_PATH)
        self._set_path(paths, PathCategory.CMAKE_INCLUDE_PATH)
        self._set_path(paths, PathCategory.CMAKE_LIBRARY_PATH)
        self._set_path(paths, PathCategory.ACLOCAL_PATH)
        if self.deps.has("autoconf"):
            env["M4"] = self._locate("m4")
        self._set_path(paths, PathCategory.ISYSTEM)
        self._set_path(paths, PathCategory.INCLUDE)
        self._set_path(paths, PathCategory.LIBRARY)
        env["HOMEBREW_DEPENDENCIES"] = ",".join(self.deps.names())
        if self.formula_prefix is not None:
            env["HOMEBREW_FORMULA_PREFIX"] = str(self.formula_prefix)

        logger.info(
            "Composed build environment for %s with %d dependencies",
            self.compiler,
            len(self.deps),
        )
        return env

    setup_build_environment = compose

    def _set_path(self, paths: PathListBuilder, category: PathCategory) -> None:
        result = paths.build(category)
        self.env[category.value] = str(result) if result is not None else None

    def determine_optflags(self) -> str:
        arch = hardware.effective_arch(self.build_bottle, self.bottle_arch)
        return hardware.optimization_flags(arch)

    # Compiler selection

    def set_compiler(self, cc: str) -> None:
        """Record the C compiler and derive the C++ compiler from it."""
        self.compiler = cc
        self.env["HOMEBREW_CC"] = cc
        self.env["HOMEBREW_CXX"] = select_cxx(cc)
        logger.debug("Using compilers %s / %s", cc, self.env["HOMEBREW_CXX"])

    @property
    def active_compiler(self) -> str | None:
        """The selected compiler, or the requested one before compose."""
        return self.compiler or self.requested_compiler

    # HOMEBREW_CCCFG triggers

    def _append_to_cccfg(self, flag: str) -> None:
        self.cccfg.append(flag)
        if "HOMEBREW_CCCFG" in self.env:
            self.env["HOMEBREW_CCCFG"] = str(self.cccfg)

    def refurbish_args(self) -> None:
        self._append_to_cccfg(cccfg.REFURBISH_ARGS)

    def permit_arch_flags(self) -> None:
        self._append_to_cccfg(cccfg.PERMIT_ARCH_FLAGS)

    def no_weak_imports(self) -> None:
        self._append_to_cccfg(cccfg.NO_WEAK_IMPORTS)

    def cxx11(self) -> None:
        """Enable C++11 mode, using libc++ under clang."""
        self._append_to_cccfg(cccfg.CXX11)
        if self.active_compiler == "clang":
            self._append_to_cccfg(cccfg.LIBCXX)

    def libcxx(self) -> None:
        if self.active_compiler == "clang":
            self._append_to_cccfg(cccfg.LIBCXX)

    def libstdcxx(self) -> None:
        _deprecated("libstdcxx")
        if self.active_compiler == "clang":
            self._append_to_cccfg(cccfg.LIBSTDCXX)

    # Deprecated overrides. Calls made before compose are kept and written
    # by compose.

    def _set_archflags(self, flags: str) -> None:
        self.archflags = flags
        if "HOMEBREW_ARCHFLAGS" in self.env:
            self.env["HOMEBREW_ARCHFLAGS"] = flags

    def _append_archflag(self, flag: str) -> None:
        self._set_archflags(f"{self.archflags} {flag}" if self.archflags else flag)

    def universal_binary(self) -> None:
        """Build for every architecture in hardware.UNIVERSAL_ARCHS.

        Raises:
            CompilerError: If the compiler is a GNU GCC.
        """
        _deprecated("universal_binary")
        if gcc_version(self.active_compiler) is not None:
            raise CompilerError("Non-Apple GCC can't build universal binaries")
        self._set_archflags(hardware.as_arch_flags(hardware.UNIVERSAL_ARCHS))

    def m32(self) -> None:
        _deprecated("m32")
        self._append_archflag("-m32")

    def m64(self) -> None:
        _deprecated("m64")
        self._append_archflag("-m64")

    def set_optimization_level(self, level: OptimizationLevel | str) -> None:
        level = OptimizationLevel(level)
        _deprecated(level.value)
        self.optimization_level = level.value
        if "HOMEBREW_OPTIMIZATION_LEVEL" in self.env:
            self.env["HOMEBREW_OPTIMIZATION_LEVEL"] = level.value

    def set_x11_env_if_installed(self) -> None:
        _deprecated("set_x11_env_if_installed")

    # Parallelism

    def deparallelize(self, action: Callable[[], Any] | None = None) -> str | None:
        """Remove MAKEFLAGS; see BuildEnvironment.deparallelize."""
        return self.env.deparallelize(action)

    def make_jobs(self) -> int:
        return self.env.make_jobs()


def create_composer(
    deps: Iterable[str] = (),
    *,
    keg_only: Iterable[str] = (),
    run_time: Iterable[str] = (),
    environ: Mapping[str, str] | None = None,
    config: HomebrewConfig | None = None,
    **kwargs: Any,
) -> EnvironmentComposer:
    """Build an EnvironmentComposer from formula names.

    Dependencies are resolved to their opt-paths under the configured
    prefix. Keyword arguments are passed through to EnvironmentComposer.

    Example:
        composer = create_composer(
            ["pkgconf", "openssl@3"],
            keg_only=["openssl@3"],
            environ=os.environ,
            compiler="gcc-13",
        )
        env = composer.compose()
    """
    if config is None:
        config = HomebrewConfig.from_environ(environ or {})
    dependency_set = DependencySet.build(
        [config.dependency(name) for name in deps],
        keg_only_names=keg_only,
        run_time_names=run_time,
    )
    return EnvironmentComposer(dependency_set, config, **kwargs)
