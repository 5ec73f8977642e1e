# SPDX-License-Identifier: MIT
"""Compiler selection helpers."""

from superenv.toolchains.compiler import (
    GNU_GCC_REGEXP,
    CompilerChoice,
    compiler_choice,
    default_compiler,
    gcc_version,
    gcc_version_formula,
    select_cc,
    select_cxx,
)

__all__ = [
    "GNU_GCC_REGEXP",
    "CompilerChoice",
    "compiler_choice",
    "default_compiler",
    "gcc_version",
    "gcc_version_formula",
    "select_cc",
    "select_cxx",
]
