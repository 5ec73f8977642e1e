# SPDX-License-Identifier: MIT
"""Tests for superenv.core.errors."""

from superenv.core.errors import (
    CompilerError,
    SuperenvError,
    UnsupportedArchitectureError,
)


class TestErrors:
    def test_unsupported_architecture_is_lookup_error(self):
        err = UnsupportedArchitectureError("pentium")
        assert isinstance(err, LookupError)
        assert isinstance(err, SuperenvError)
        assert err.arch == "pentium"
        assert "pentium" in str(err)

    def test_compiler_error_message(self):
        err = CompilerError("no universal binaries")
        assert err.message == "no universal binaries"
        assert str(err) == "no universal binaries"
