# SPDX-License-Identifier: MIT
"""
Superenv: isolated, deterministic compiler environments for source builds.

Superenv composes the environment variables a compiler wrapper reads when
a package manager builds third-party software from source: search paths
limited to declared dependencies, compiler selection, and a compact flag
string telling the wrapper which flags to strip or inject.
"""

from __future__ import annotations

from superenv.builder import ExtraPaths, PathCategory, PathListBuilder
from superenv.composer import EnvironmentComposer, OptimizationLevel, create_composer
from superenv.config import HomebrewConfig
from superenv.core.cccfg import Cccfg
from superenv.core.dependency import Dependency, DependencySet
from superenv.core.environment import BuildEnvironment
from superenv.core.errors import (
    CompilerError,
    SuperenvError,
    UnsupportedArchitectureError,
)
from superenv.core.pathlist import PathList, existing_paths

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core types
    "BuildEnvironment",
    "Cccfg",
    "Dependency",
    "DependencySet",
    "PathList",
    "existing_paths",
    # Composition
    "EnvironmentComposer",
    "ExtraPaths",
    "HomebrewConfig",
    "OptimizationLevel",
    "PathCategory",
    "PathListBuilder",
    "create_composer",
    # Errors
    "CompilerError",
    "SuperenvError",
    "UnsupportedArchitectureError",
]
