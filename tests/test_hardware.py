# SPDX-License-Identifier: MIT
"""Tests for superenv.hardware."""

from unittest.mock import patch

import pytest

from superenv import hardware
from superenv.core.errors import UnsupportedArchitectureError


class TestOptimizationFlags:
    def test_native(self):
        assert hardware.optimization_flags("native") == "-march=native"

    def test_core2(self):
        assert hardware.optimization_flags("core2") == "-march=core2"

    def test_empty_flags_are_valid(self):
        assert hardware.optimization_flags("arm_vortex_tempest") == ""

    def test_unknown_arch_fails(self):
        with pytest.raises(UnsupportedArchitectureError):
            hardware.optimization_flags("pentium4")

    def test_unknown_arch_is_lookup_error(self):
        with pytest.raises(LookupError):
            hardware.optimization_flags("")


class TestEffectiveArch:
    def test_local_build_is_native(self):
        assert hardware.effective_arch() == "native"
        assert hardware.effective_arch(False, "core2") == "native"

    def test_bottle_with_arch(self):
        assert hardware.effective_arch(True, "nehalem") == "nehalem"

    def test_bottle_without_arch_uses_oldest_cpu(self):
        with patch("superenv.hardware.oldest_cpu", return_value="core2"):
            assert hardware.effective_arch(True) == "core2"


class TestOldestCpu:
    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", "core2"),
            ("AMD64", "core2"),
            ("i386", "core"),
            ("i686", "core"),
            ("armv7l", "armv6"),
            ("ppc64le", "ppc64le"),
        ],
    )
    def test_machines(self, machine, expected):
        assert hardware.oldest_cpu(machine) == expected

    def test_arm64_linux(self):
        with patch("superenv.hardware.sys.platform", "linux"):
            assert hardware.oldest_cpu("aarch64") == "armv8"

    def test_arm64_macos(self):
        with patch("superenv.hardware.sys.platform", "darwin"):
            assert hardware.oldest_cpu("arm64") == "arm_vortex_tempest"

    def test_every_known_cpu_has_flags(self):
        for machine in ("x86_64", "i686", "armv7l", "ppc64", "ppc64le"):
            assert hardware.oldest_cpu(machine) in hardware.OPTIMIZATION_FLAGS


class TestMisc:
    def test_as_arch_flags(self):
        assert hardware.as_arch_flags(hardware.UNIVERSAL_ARCHS) == "-arch x86_64 -arch i386"

    def test_cpu_cores(self):
        with patch("superenv.hardware.os.cpu_count", return_value=None):
            assert hardware.cpu_cores() == 1
        with patch("superenv.hardware.os.cpu_count", return_value=12):
            assert hardware.cpu_cores() == 12
