from collections.abc import Mapping
import os
import subprocess

from returns.io import IOResultE, impure_safe

from simdev.entities import ResolvedCommand
from simdev.environment import merge_environment
from simdev.errors import ChildFailure
from simdev.types import Cmd, EnvironmentSet


def echo_command(resolved: ResolvedCommand, env: Mapping[str, str]) -> None:
    print("Command executed: ")
    print(
        " ".join(resolved.command),
        f"RUST_LOG={env.get('RUST_LOG', '')}",
        f"RUST_BACKTRACE={env.get('RUST_BACKTRACE', '')}",
    )


def shell_exit_code(returncode: int) -> int:
    # killed by signal N -> 128 + N
    return returncode if returncode >= 0 else 128 - returncode


@impure_safe
def run_foreground(command: Cmd, env: Mapping[str, str]) -> int:
    process = subprocess.Popen(command, env=env)
    while True:
        try:
            return shell_exit_code(process.wait())
        except KeyboardInterrupt:
            # the terminal delivers the interrupt to the child as well
            continue


def dispatch(
    resolved: ResolvedCommand,
    overlay: EnvironmentSet,
    inherited: Mapping[str, str] | None = None,
) -> IOResultE[int]:
    """Runs the command in the foreground and returns its exit code."""
    env = merge_environment(os.environ if inherited is None else inherited, overlay)
    result = run_foreground(resolved.command, env).alt(
        lambda e: ChildFailure(resolved.command, str(e))
    )
    echo_command(resolved, env)
    return result
