from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Protocol
import argparse
import sys

from returns.result import Failure, ResultE, Success

from simdev.config import LOG_MODES
from simdev.entities import Invocation
from simdev.errors import MissingArgument
from simdev.types import LogMode, Mode

BUILD_MODES: tuple[Mode, ...] = ("rel", "dev")

# mode used when no subcommand is recognized
DEFAULT_PATH_MODE: LogMode = "debug"

MAX_EXAMPLE_ARGS = 5

# global option -> takes a value
GLOBAL_OPTIONS = {
    "-c": True,
    "--config": True,
    "--profile-target": True,
    "--default-mode": True,
    "--version": False,
}

USAGE = """\
Usage: simdev [options] [command]

Commands:
  build [rel|dev]            Runs cargo just to build
  test [name] [debug|info]   Runs cargo test, RUST_LOG set by the mode
  debug /path/to/bin         Runs the debugger (gdb)
  profile                    Runs the profile target under the profiler
  bench [name]               Runs all benchmarks or the named one
  example <name> [args...]   Builds and runs an example (up to 5 args)
  help                       Shows this message

Without a known command all tests run with RUST_LOG=<namespace>=debug.

Options:
  -c, --config FILE          Read settings from the [simdev] table of FILE
  --profile-target PATH      Binary run by 'profile'
  --default-mode MODE        Log mode for 'test' when none is given
  --version                  Show the version
"""


class ArgsConfig(Protocol):
    config: Path | None
    profile_target: str | None
    default_mode: LogMode | None


def _version() -> str:
    try:
        return version("simdev")
    except PackageNotFoundError:
        return "unknown"


def _split_global_options(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    # every leading "-" token belongs to argparse, up to the subcommand
    index = 0
    while index < len(argv):
        token = argv[index]
        if not token.startswith("-") or token == "--help":
            break
        option = token.partition("=")[0] if token.startswith("--") else token[:2]
        index += 2 if GLOBAL_OPTIONS.get(option, False) and option == token else 1
    return list(argv[:index]), list(argv[index:])


def args_parse(argv: Sequence[str]) -> tuple[ArgsConfig, list[str]]:
    parser = argparse.ArgumentParser(
        prog="simdev",
        description="Developer workflow commands for the unitary simulator",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-c", "--config", type=Path, default=None)
    parser.add_argument("--profile-target", default=None)
    parser.add_argument("--default-mode", choices=LOG_MODES, default=None)
    parser.add_argument("--version", action="version", version=_version())

    options, tokens = _split_global_options(argv)
    return parser.parse_args(options), tokens  # type: ignore


def print_usage() -> None:
    print(USAGE, end="")


def _name(rest: Sequence[str]) -> tuple[str, ...]:
    return tuple(rest[:1]) if rest and rest[0] else ()


def _pick(token: Sequence[str], choices: tuple[Mode, ...]) -> Mode | None:
    return token[0] if token and token[0] in choices else None  # type: ignore


def resolve(
    tokens: Sequence[str], default_mode: LogMode | None = None
) -> ResultE[Invocation]:
    match list(tokens):
        case ["help" | "--help", *_]:
            return Success(Invocation("help"))

        case ["build", *rest]:
            return Success(Invocation("build", mode=_pick(rest[:1], BUILD_MODES)))

        case ["test", *rest]:
            return Success(
                Invocation(
                    "test",
                    positionals=_name(rest),
                    mode=_pick(rest[1:2], LOG_MODES) or default_mode,
                )
            )

        case ["debug", *rest]:
            if not _name(rest):
                return Failure(MissingArgument("debug", "path to binary"))
            return Success(Invocation("debug", positionals=_name(rest)))

        case ["profile", *_]:
            return Success(Invocation("profile"))

        case ["bench", *rest]:
            return Success(Invocation("bench", positionals=_name(rest)))

        case ["example", *rest]:
            if not _name(rest):
                return Failure(MissingArgument("example", "example name"))
            forwarded = tuple(rest[1:])
            if len(forwarded) > MAX_EXAMPLE_ARGS:
                print(
                    f"[simdev] Warning: dropping example arguments "
                    f"{list(forwarded[MAX_EXAMPLE_ARGS:])}",
                    file=sys.stderr,
                )
            return Success(
                Invocation(
                    "example",
                    positionals=(rest[0], *forwarded[:MAX_EXAMPLE_ARGS]),
                )
            )

        case _:
            return Success(
                Invocation("default", mode=default_mode or DEFAULT_PATH_MODE)
            )
