from collections.abc import Iterable, Mapping
import os

from simdev.config import LOG_MODES, Settings
from simdev.entities import Invocation
from simdev.types import EnvironmentSet, Subcommand

# subcommands whose child loads the simulator and needs the shared libraries
LIBRARY_PATH_SUBCOMMANDS: frozenset[Subcommand] = frozenset(
    ("test", "default", "debug", "profile", "bench", "example")
)
LOG_LEVEL_SUBCOMMANDS: frozenset[Subcommand] = frozenset(("test", "default"))


def _join_paths(entries: Iterable[str], inherited: str | None = None) -> str:
    return os.pathsep.join(
        (*((inherited,) if inherited else ()), *map(os.path.expanduser, entries))
    )


def compose_environment(
    invocation: Invocation,
    settings: Settings,
    inherited: Mapping[str, str] | None = None,
) -> EnvironmentSet:
    """Variables added on top of `inherited`; search paths are appended."""
    inherited = {} if inherited is None else inherited
    env: EnvironmentSet = {}

    if settings.python_home:
        env["PYTHONHOME"] = _join_paths(settings.python_home)
    env["PYTHONPATH"] = _join_paths(settings.python_path, inherited.get("PYTHONPATH"))

    env["RUST_BACKTRACE"] = "1"

    if invocation.subcommand in LIBRARY_PATH_SUBCOMMANDS:
        env["LD_LIBRARY_PATH"] = _join_paths(
            settings.library_path, inherited.get("LD_LIBRARY_PATH")
        )

    if invocation.subcommand in LOG_LEVEL_SUBCOMMANDS and invocation.mode in LOG_MODES:
        env["RUST_LOG"] = f"{settings.log_namespace}={invocation.mode}"

    return env


def merge_environment(
    inherited: Mapping[str, str], overlay: Mapping[str, str]
) -> EnvironmentSet:
    return {**inherited, **overlay}
