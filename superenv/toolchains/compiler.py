# SPDX-License-Identifier: MIT
"""Compiler selection.

Maps a requested compiler (e.g., 'clang', 'gcc-13', 'llvm_clang') to the
C and C++ executable names the compiler wrapper should dispatch to.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from enum import Enum

GNU_GCC_VERSIONS: tuple[str, ...] = (
    "4.9",
    "5",
    "6",
    "7",
    "8",
    "9",
    "10",
    "11",
    "12",
    "13",
    "14",
    "15",
    "16",
    "17",
    "18",
    "19",
)

GNU_GCC_REGEXP = re.compile(
    r"^gcc-(" + "|".join(re.escape(v) for v in GNU_GCC_VERSIONS) + r")$"
)

_CLANG_REGEXP = re.compile(r"^(llvm_)?clang(-\d+(\.\d+)*)?$")


class CompilerChoice(Enum):
    """Compiler family."""

    CLANG = "clang"
    GCC = "gcc"
    OTHER = "other"


def compiler_choice(name: str | None) -> CompilerChoice:
    """Classify a compiler name into its family.

    Examples:
        >>> compiler_choice("gcc-9")
        <CompilerChoice.GCC: 'gcc'>
        >>> compiler_choice("llvm_clang")
        <CompilerChoice.CLANG: 'clang'>
        >>> compiler_choice("icc")
        <CompilerChoice.OTHER: 'other'>
    """
    if not name:
        return CompilerChoice.OTHER
    if _CLANG_REGEXP.match(name):
        return CompilerChoice.CLANG
    if name == "gcc" or GNU_GCC_REGEXP.match(name):
        return CompilerChoice.GCC
    return CompilerChoice.OTHER


def gcc_version(cc: str | None) -> str | None:
    """The version suffix of a versioned GNU GCC name, else None."""
    if not cc:
        return None
    match = GNU_GCC_REGEXP.match(cc)
    return match.group(1) if match else None


def gcc_version_formula(cc: str | None) -> str | None:
    """The formula providing a versioned GNU GCC (gcc-9 -> gcc@9)."""
    version = gcc_version(cc)
    if version is None:
        return None
    return f"gcc@{version}"


def select_cxx(cc: str) -> str:
    """Derive the C++ compiler name from the C compiler name.

    The GCC and clang tokens are replaced in place, so any version suffix
    survives. Unrecognized names are returned unchanged.

    Examples:
        >>> select_cxx("gcc-9")
        'g++-9'
        >>> select_cxx("clang")
        'clang++'
    """
    return cc.replace("gcc", "g++").replace("clang", "clang++")


def default_compiler() -> str:
    """The compiler used when nothing else was requested."""
    if sys.platform == "darwin":
        return "clang"
    return "gcc"


def select_cc(
    requested: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the C compiler name.

    Precedence (highest to lowest):
        1. The explicitly requested compiler.
        2. HOMEBREW_CC in the inherited environment.
        3. default_compiler().
    """
    if requested:
        return requested
    if environ and environ.get("HOMEBREW_CC"):
        return environ["HOMEBREW_CC"]
    return default_compiler()
