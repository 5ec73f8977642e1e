# SPDX-License-Identifier: MIT
"""Custom exceptions for superenv.

All superenv exceptions inherit from SuperenvError. Expected absences
(an optional formula that is not installed, an empty search path) are
never exceptions; lookups for those return None.
"""

from __future__ import annotations


class SuperenvError(Exception):
    """Base class for all superenv exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnsupportedArchitectureError(SuperenvError, LookupError):
    """No optimization flags are known for the requested architecture.

    This is a configuration error and aborts composition.

    Attributes:
        arch: The architecture key that was looked up.
    """

    def __init__(self, arch: str) -> None:
        self.arch = arch
        super().__init__(f"unsupported architecture: {arch}")


class CompilerError(SuperenvError):
    """The selected compiler cannot honour a request."""
