from dataclasses import dataclass

from simdev.types import Cmd, Mode, Subcommand

Args = tuple[str, ...]


@dataclass(frozen=True)
class Invocation:
    subcommand: Subcommand
    positionals: Args = ()
    mode: Mode | None = None


@dataclass(frozen=True)
class CommandTemplate:
    base_executable: str
    fixed_args: Args = ()
    accepts_extra_args: bool = False
    requires_binary_path: bool = False
    # cargo passes everything after "--" through to the test or example binary
    extra_args_separator: bool = False
    trailing_args: Args = ()


@dataclass(frozen=True)
class ResolvedCommand:
    subcommand: Subcommand
    command: Cmd
