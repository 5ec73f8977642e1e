# SPDX-License-Identifier: MIT
"""Package manager installation constants.

HomebrewConfig holds the locations the composed environment points at
(prefix, cellar, temp directory, brew executable, shim directory) and the
default parallel job count. Values come from an explicit environ mapping,
falling back to platform defaults.
"""

from __future__ import annotations

import logging
import platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from superenv.core.dependency import Dependency
from superenv.hardware import cpu_cores

logger = logging.getLogger(__name__)


def default_prefix() -> Path:
    """The conventional install prefix for this host."""
    if sys.platform == "darwin":
        if platform.machine() == "arm64":
            return Path("/opt/homebrew")
        return Path("/usr/local")
    return Path("/home/linuxbrew/.linuxbrew")


def _parse_make_jobs(value: str | None) -> int:
    if not value:
        return cpu_cores()
    try:
        jobs = int(value)
    except ValueError:
        jobs = 0
    if jobs < 1:
        logger.warning(
            "Ignoring invalid HOMEBREW_MAKE_JOBS=%r, using %d", value, cpu_cores()
        )
        return cpu_cores()
    return jobs


@dataclass(frozen=True)
class HomebrewConfig:
    """Installation locations and build defaults.

    Attributes:
        prefix: Shared install prefix (linked kegs live under it).
        cellar: Where kegs are installed.
        temp: Temporary directory for builds.
        brew_file: Path to the brew executable.
        shims_dir: Directory of compiler wrapper shims, first on PATH.
        make_jobs: Default parallel job count.
    """

    prefix: Path
    cellar: Path
    temp: Path
    brew_file: Path
    shims_dir: Path
    make_jobs: int

    @classmethod
    def create(
        cls,
        prefix: Path | str,
        *,
        cellar: Path | str | None = None,
        temp: Path | str | None = None,
        brew_file: Path | str | None = None,
        shims_dir: Path | str | None = None,
        make_jobs: int | None = None,
    ) -> HomebrewConfig:
        """Build a config, deriving unspecified locations from prefix."""
        prefix = Path(prefix)
        library = prefix / "Library"
        return cls(
            prefix=prefix,
            cellar=Path(cellar) if cellar else prefix / "Cellar",
            temp=Path(temp) if temp else _default_temp(),
            brew_file=Path(brew_file) if brew_file else prefix / "bin" / "brew",
            shims_dir=Path(shims_dir) if shims_dir else _default_shims_dir(library),
            make_jobs=make_jobs if make_jobs is not None else cpu_cores(),
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> HomebrewConfig:
        """Read configuration from an environment mapping.

        Recognized variables: HOMEBREW_PREFIX, HOMEBREW_CELLAR, HOMEBREW_TEMP,
        HOMEBREW_BREW_FILE, HOMEBREW_LIBRARY, HOMEBREW_SHIMS_PATH,
        HOMEBREW_MAKE_JOBS.
        """
        prefix = Path(environ.get("HOMEBREW_PREFIX") or default_prefix())
        shims_dir = environ.get("HOMEBREW_SHIMS_PATH")
        if not shims_dir and environ.get("HOMEBREW_LIBRARY"):
            shims_dir = str(_default_shims_dir(Path(environ["HOMEBREW_LIBRARY"])))
        config = cls.create(
            prefix,
            cellar=environ.get("HOMEBREW_CELLAR"),
            temp=environ.get("HOMEBREW_TEMP"),
            brew_file=environ.get("HOMEBREW_BREW_FILE"),
            shims_dir=shims_dir,
            make_jobs=_parse_make_jobs(environ.get("HOMEBREW_MAKE_JOBS")),
        )
        logger.debug("Using prefix %s, shims %s", config.prefix, config.shims_dir)
        return config

    @property
    def opt(self) -> Path:
        """Directory of opt-path symlinks, one per installed formula."""
        return self.prefix / "opt"

    def dependency(self, name: str) -> Dependency:
        """A Dependency for a formula under this config's opt directory."""
        return Dependency.from_opt_root(name, self.opt)

    def find_formula(self, name: str) -> Dependency | None:
        """Look up an installed formula.

        Returns:
            The Dependency if its opt-path exists, otherwise None.
        """
        dep = self.dependency(name)
        if not dep.opt_prefix.is_dir():
            logger.debug("Formula %s is not installed", name)
            return None
        return dep


def _default_temp() -> Path:
    if sys.platform == "darwin":
        return Path("/private/tmp")
    return Path("/tmp")


def _default_shims_dir(library: Path) -> Path:
    os_name = "mac" if sys.platform == "darwin" else "linux"
    return library / "Homebrew" / "shims" / os_name / "super"
