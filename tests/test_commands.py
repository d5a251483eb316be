"""Tests for simdev.commands: the command table and its expansion."""

import pytest

from simdev.commands import COMMAND_TABLE, resolve_command, template_for
from simdev.config import Settings
from simdev.entities import Invocation
from simdev.errors import MissingArgument


def _command(invocation: Invocation, settings: Settings = Settings()):
    return resolve_command(invocation, settings).unwrap().command


class TestCommandTable:
    def test_is_read_only(self):
        with pytest.raises(TypeError):
            COMMAND_TABLE["build"] = COMMAND_TABLE["test"]  # type: ignore

    def test_help_has_no_command(self):
        assert "help" not in COMMAND_TABLE
        assert isinstance(
            resolve_command(Invocation("help"), Settings()).failure(), ValueError
        )

    def test_profile_template_comes_from_settings(self):
        assert "profile" not in COMMAND_TABLE
        template = template_for("profile", Settings(profiler=("valgrind",)))
        assert template.base_executable == "valgrind"
        assert template.fixed_args == ()
        assert template.requires_binary_path


class TestResolveCommand:
    def test_build(self):
        assert _command(Invocation("build")) == ("cargo", "build")

    def test_build_release(self):
        assert _command(Invocation("build", mode="rel")) == (
            "cargo",
            "build",
            "--release",
        )

    def test_test_all(self):
        assert _command(Invocation("test")) == ("cargo", "test", "--", "--nocapture")

    def test_test_filter_only_adds_name(self):
        everything = _command(Invocation("test"))
        filtered = _command(Invocation("test", positionals=("circuit1",)))
        assert filtered == ("cargo", "test", "circuit1", "--", "--nocapture")
        assert [a for a in filtered if a != "circuit1"] == list(everything)

    def test_default_runs_all_tests(self):
        assert _command(Invocation("default", mode="debug")) == _command(
            Invocation("test")
        )

    def test_debug(self):
        assert _command(Invocation("debug", positionals=("bin/sim",))) == (
            "gdb",
            "bin/sim",
        )

    def test_debug_without_path_fails(self):
        error = resolve_command(Invocation("debug"), Settings()).failure()
        assert isinstance(error, MissingArgument)

    def test_profile_uses_settings(self):
        settings = Settings(
            profiler=("valgrind", "--tool=callgrind"), profile_target="bin/timeit"
        )
        assert _command(Invocation("profile"), settings) == (
            "valgrind",
            "--tool=callgrind",
            "bin/timeit",
        )

    def test_profile_default(self):
        command = _command(Invocation("profile"))
        assert command[:3] == ("perf", "record", "-g")
        assert command[3].endswith("unitary-simulator-timeit")

    def test_profile_without_target_fails(self):
        error = resolve_command(
            Invocation("profile"), Settings(profile_target="")
        ).failure()
        assert isinstance(error, MissingArgument)

    def test_bench(self):
        assert _command(Invocation("bench")) == ("cargo", "bench")
        assert _command(Invocation("bench", positionals=("bench_circuit1",))) == (
            "cargo",
            "bench",
            "bench_circuit1",
        )

    def test_example_forwards_args(self):
        command = _command(Invocation("example", positionals=("foo", "a", "b", "c")))
        assert command == ("cargo", "run", "--example", "foo", "--", "a", "b", "c")

    def test_example_without_args(self):
        assert _command(Invocation("example", positionals=("foo",))) == (
            "cargo",
            "run",
            "--example",
            "foo",
        )

    def test_example_without_name_fails(self):
        error = resolve_command(Invocation("example"), Settings()).failure()
        assert isinstance(error, MissingArgument)
