# SPDX-License-Identifier: MIT
"""Shared fixtures: a fake installation prefix under tmp_path."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from superenv.config import HomebrewConfig
from superenv.core.dependency import Dependency


@pytest.fixture
def config(tmp_path: Path) -> HomebrewConfig:
    """A config rooted in tmp_path with the shim and prefix dirs created."""
    prefix = tmp_path / "prefix"
    shims = tmp_path / "shims" / "super"
    for path in (prefix / "opt", prefix / "include", prefix / "lib", shims):
        path.mkdir(parents=True)
    return HomebrewConfig.create(
        prefix,
        temp=tmp_path / "tmp",
        shims_dir=shims,
        make_jobs=4,
    )


@pytest.fixture
def install(config: HomebrewConfig) -> Callable[..., Dependency]:
    """Create an installed formula's directories and return its Dependency.

    install("foo", "bin", "lib/pkgconfig") creates opt/foo/bin and
    opt/foo/lib/pkgconfig.
    """

    def _install(name: str, *subdirs: str) -> Dependency:
        dep = config.dependency(name)
        dep.opt_prefix.mkdir(parents=True, exist_ok=True)
        for subdir in subdirs:
            (dep.opt_prefix / subdir).mkdir(parents=True, exist_ok=True)
        return dep

    return _install
