# SPDX-License-Identifier: MIT
"""Tests for superenv.core.dependency."""

from pathlib import Path

import pytest

from superenv.core.dependency import Dependency, DependencySet


class TestDependency:
    def test_from_opt_root(self):
        dep = Dependency.from_opt_root("openssl@3", "/usr/local/opt")
        assert dep.name == "openssl@3"
        assert dep.opt_prefix == Path("/usr/local/opt/openssl@3")
        assert dep.opt_bin == Path("/usr/local/opt/openssl@3/bin")
        assert dep.opt_lib == Path("/usr/local/opt/openssl@3/lib")
        assert dep.opt_include == Path("/usr/local/opt/openssl@3/include")
        assert dep.opt_share == Path("/usr/local/opt/openssl@3/share")
        assert dep.opt_frameworks == Path("/usr/local/opt/openssl@3/Frameworks")

    def test_is_immutable(self):
        dep = Dependency.from_opt_root("zlib", "/opt")
        with pytest.raises(AttributeError):
            dep.name = "other"  # type: ignore[misc]

    def test_str(self):
        assert str(Dependency.from_opt_root("zlib", "/opt")) == "zlib"


class TestDependencySet:
    def make(self, *names: str) -> list[Dependency]:
        return [Dependency.from_opt_root(name, "/opt") for name in names]

    def test_build_classifies_by_name(self):
        deps = self.make("a", "b", "c")
        result = DependencySet.build(deps, keg_only_names=["c", "a"], run_time_names=["b"])
        assert result.names() == ["a", "b", "c"]
        # Classified views keep dependency order, not name order
        assert [d.name for d in result.keg_only] == ["a", "c"]
        assert [d.name for d in result.run_time] == ["b"]

    def test_build_rejects_unknown_names(self):
        with pytest.raises(ValueError, match="missing"):
            DependencySet.build(self.make("a"), keg_only_names=["missing"])

    def test_has(self):
        result = DependencySet.build(self.make("autoconf", "zlib"))
        assert result.has("autoconf")
        assert not result.has("automake")

    def test_empty(self):
        empty = DependencySet()
        assert len(empty) == 0
        assert empty.names() == []
        assert empty.keg_only == ()
