# SPDX-License-Identifier: MIT
"""Tests for superenv.core.environment."""

import pytest

from superenv.core.environment import CONTAMINATING_VARS, BuildEnvironment


class TestBuildEnvironmentBasic:
    def test_starts_empty(self):
        assert len(BuildEnvironment()) == 0

    def test_set_and_get(self):
        env = BuildEnvironment()
        env["FOO"] = "bar"
        assert env["FOO"] == "bar"

    def test_values_become_strings(self):
        env = BuildEnvironment()
        env["JOBS"] = 4
        assert env["JOBS"] == "4"

    def test_assigning_none_deletes(self):
        env = BuildEnvironment({"FOO": "bar"})
        env["FOO"] = None
        assert "FOO" not in env
        # Deleting something that is not there is fine too
        env["MISSING"] = None

    def test_from_environ_copies(self):
        source = {"PATH": "/bin"}
        env = BuildEnvironment.from_environ(source)
        env["PATH"] = "/usr/bin"
        assert source["PATH"] == "/bin"

    def test_copy_is_independent(self):
        env = BuildEnvironment({"A": "1"})
        clone = env.copy()
        clone["A"] = "2"
        assert env["A"] == "1"

    def test_to_dict(self):
        env = BuildEnvironment({"A": "1"})
        assert env.to_dict() == {"A": "1"}

    def test_equality(self):
        assert BuildEnvironment({"A": "1"}) == BuildEnvironment({"A": "1"})
        assert BuildEnvironment({"A": "1"}) == {"A": "1"}


class TestAppend:
    def test_append_to_unset(self):
        env = BuildEnvironment()
        env.append("HOMEBREW_ARCHFLAGS", "-m32")
        assert env["HOMEBREW_ARCHFLAGS"] == "-m32"

    def test_append_to_empty(self):
        env = BuildEnvironment({"HOMEBREW_ARCHFLAGS": ""})
        env.append("HOMEBREW_ARCHFLAGS", "-m32")
        assert env["HOMEBREW_ARCHFLAGS"] == "-m32"

    def test_append_with_separator(self):
        env = BuildEnvironment({"X": "a"})
        env.append("X", "b", separator=",")
        assert env["X"] == "a,b"


class TestReset:
    def test_removes_autoconf_marker(self):
        env = BuildEnvironment({"as_nl": "\n", "HOME": "/root"})
        env.reset()
        assert "as_nl" not in env
        assert env["HOME"] == "/root"

    def test_removes_compiler_variables(self):
        env = BuildEnvironment({name: "x" for name in CONTAMINATING_VARS})
        env.reset()
        assert len(env) == 0


class TestDeparallelize:
    def test_without_action_removes_and_returns(self):
        env = BuildEnvironment({"MAKEFLAGS": "-j8"})
        assert env.deparallelize() == "-j8"
        assert "MAKEFLAGS" not in env

    def test_without_previous_value(self):
        env = BuildEnvironment()
        assert env.deparallelize() is None

    def test_action_runs_without_makeflags(self):
        env = BuildEnvironment({"MAKEFLAGS": "-j8"})
        seen = []
        old = env.deparallelize(lambda: seen.append(env.get("MAKEFLAGS")))
        assert seen == [None]
        assert old == "-j8"
        assert env["MAKEFLAGS"] == "-j8"

    def test_restores_when_action_fails(self):
        env = BuildEnvironment({"MAKEFLAGS": "-j8"})

        def fail():
            raise RuntimeError("race condition")

        with pytest.raises(RuntimeError, match="race condition"):
            env.deparallelize(fail)
        assert env["MAKEFLAGS"] == "-j8"

    def test_action_without_previous_value_stays_unset(self):
        env = BuildEnvironment()
        env.deparallelize(lambda: None)
        assert "MAKEFLAGS" not in env

    def test_context_manager(self):
        env = BuildEnvironment({"MAKEFLAGS": "-j2"})
        with env.deparallelized() as old:
            assert old == "-j2"
            assert "MAKEFLAGS" not in env
        assert env["MAKEFLAGS"] == "-j2"


class TestMakeJobs:
    def test_parses_jobs(self):
        assert BuildEnvironment({"MAKEFLAGS": "-j8"}).make_jobs() == 8

    def test_parses_combined_flags(self):
        assert BuildEnvironment({"MAKEFLAGS": "-kj3"}).make_jobs() == 3

    def test_defaults_to_one(self):
        assert BuildEnvironment().make_jobs() == 1
        assert BuildEnvironment({"MAKEFLAGS": "-j0"}).make_jobs() == 1
