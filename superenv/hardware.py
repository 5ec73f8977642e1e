# SPDX-License-Identifier: MIT
"""Host CPU facts: optimization flags, bottle architectures, core count."""

from __future__ import annotations

import os
import platform
import sys

from superenv.core.errors import UnsupportedArchitectureError

OPTIMIZATION_FLAGS: dict[str, str] = {
    "native": "-march=native",
    "ivybridge": "-march=ivybridge",
    "sandybridge": "-march=sandybridge",
    "nehalem": "-march=nehalem",
    "core2": "-march=core2",
    "core": "-march=prescott",
    "arm_vortex_tempest": "",
    "armv6": "-march=armv6",
    "armv8": "-march=armv8-a",
    "ppc64": "-mcpu=powerpc64",
    "ppc64le": "-mcpu=powerpc64le",
}

UNIVERSAL_ARCHS: tuple[str, ...] = ("x86_64", "i386")


def optimization_flags(arch: str) -> str:
    """Look up the optimization flags for an architecture.

    Raises:
        UnsupportedArchitectureError: If arch is not in OPTIMIZATION_FLAGS.
    """
    try:
        return OPTIMIZATION_FLAGS[arch]
    except KeyError:
        raise UnsupportedArchitectureError(arch) from None


def oldest_cpu(machine: str | None = None) -> str:
    """The oldest CPU bottles for this host's architecture must run on."""
    machine = (machine or platform.machine()).lower()
    if machine in ("x86_64", "amd64"):
        return "core2"
    if machine in ("i386", "i686", "x86"):
        return "core"
    if machine in ("arm64", "aarch64"):
        if sys.platform == "darwin":
            return "arm_vortex_tempest"
        return "armv8"
    if machine.startswith("arm"):
        return "armv6"
    if machine == "ppc64le":
        return "ppc64le"
    if machine.startswith("ppc"):
        return "ppc64"
    return machine


def effective_arch(build_bottle: bool = False, bottle_arch: str | None = None) -> str:
    """The architecture to optimize for.

    Bottles (binary packages) target the requested bottle_arch, or the oldest
    supported CPU when none was given. Local builds use 'native'.
    """
    if build_bottle:
        return bottle_arch or oldest_cpu()
    return "native"


def as_arch_flags(archs: tuple[str, ...] | list[str]) -> str:
    """Render architectures as compiler flags ('-arch x86_64 -arch i386')."""
    return " ".join(f"-arch {arch}" for arch in archs)


def cpu_cores() -> int:
    """Number of logical cores on the host, at least 1."""
    return os.cpu_count() or 1
