from collections.abc import Mapping
from typing import Any
import os
import sys

from returns.io import IOResultE
from returns.result import Failure, Success
from returns.unsafe import unsafe_perform_io

from simdev.args import ArgsConfig, args_parse, print_usage, resolve
from simdev.commands import resolve_command
from simdev.config import Settings, load_settings
from simdev.dispatch import dispatch
from simdev.entities import Invocation
from simdev.environment import compose_environment
from simdev.errors import ChildFailure, SimdevError


def _flag_overrides(args: ArgsConfig) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.profile_target is not None:
        overrides["profile_target"] = args.profile_target
    if args.default_mode is not None:
        overrides["default_mode"] = args.default_mode
    return overrides


def run_invocation(
    invocation: Invocation, settings: Settings, environ: Mapping[str, str]
) -> IOResultE[int]:
    match invocation.subcommand:
        case "help":
            print_usage()
            return IOResultE.from_value(1)

        case _:
            return IOResultE.from_result(
                resolve_command(invocation, settings)
            ).bind(
                lambda resolved: dispatch(
                    resolved,
                    compose_environment(invocation, settings, environ),
                    environ,
                )
            )


def simdev(
    args: ArgsConfig, tokens: list[str], environ: Mapping[str, str]
) -> IOResultE[int]:
    return load_settings(args.config, environ, _flag_overrides(args)).bind(
        lambda settings: IOResultE.from_result(
            resolve(tokens, settings.default_mode)
        ).bind(lambda invocation: run_invocation(invocation, settings, environ))
    )


def exit_code(result: IOResultE[int]) -> int:
    match unsafe_perform_io(result):
        case Success(code):
            return code
        case Failure(ChildFailure() as e):
            print(
                f"[simdev] Error: '{' '.join(e.command)}' ({e.reason})",
                file=sys.stderr,
            )
            return e.exit_code
        case Failure(SimdevError() as e):
            print(f"[simdev] Error: {e}", file=sys.stderr)
            return e.exit_code
        case Failure(e):
            print(f"[simdev] Error: {e!r}", file=sys.stderr)
            return 1
    return 1


def main():
    args, tokens = args_parse(sys.argv[1:])
    try:
        code = exit_code(simdev(args, tokens, os.environ))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
