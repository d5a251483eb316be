from collections.abc import Mapping
from types import MappingProxyType
import os

from returns.result import safe

from simdev.config import Settings
from simdev.entities import Args, CommandTemplate, Invocation, ResolvedCommand
from simdev.errors import MissingArgument
from simdev.types import Cmd, Subcommand

_TEST = CommandTemplate(
    "cargo",
    ("test",),
    extra_args_separator=True,
    trailing_args=("--nocapture",),
)

COMMAND_TABLE: Mapping[Subcommand, CommandTemplate] = MappingProxyType(
    {
        "build": CommandTemplate("cargo", ("build",)),
        "test": _TEST,
        "default": _TEST,
        "debug": CommandTemplate("gdb", requires_binary_path=True),
        "bench": CommandTemplate("cargo", ("bench",)),
        "example": CommandTemplate(
            "cargo",
            ("run", "--example"),
            accepts_extra_args=True,
            extra_args_separator=True,
        ),
    }
)


def template_for(subcommand: Subcommand, settings: Settings) -> CommandTemplate:
    # profile is built from Settings.profiler, not the table
    if subcommand == "profile":
        executable, *args = settings.profiler
        return CommandTemplate(executable, tuple(args), requires_binary_path=True)
    if subcommand not in COMMAND_TABLE:
        raise ValueError(f"'{subcommand}' has no toolchain command")
    return COMMAND_TABLE[subcommand]


def expand(template: CommandTemplate, head: Args, tail: Args = ()) -> Cmd:
    after_separator = (*template.trailing_args, *tail)
    return (
        template.base_executable,
        *template.fixed_args,
        *head,
        *(("--",) if template.extra_args_separator and after_separator else ()),
        *after_separator,
    )


def _split_positionals(
    invocation: Invocation, template: CommandTemplate, settings: Settings
) -> tuple[Args, Args]:
    positionals = invocation.positionals
    match invocation.subcommand:
        case "build":
            return ("--release",) if invocation.mode == "rel" else (), ()
        case "profile":
            target = settings.profile_target
            return ((os.path.expanduser(target),) if target else ()), ()
        case "example" if not positionals:
            raise MissingArgument("example", "example name")
        case _:
            tail = positionals[1:] if template.accepts_extra_args else ()
            return positionals[:1], tail


@safe
def resolve_command(invocation: Invocation, settings: Settings) -> ResolvedCommand:
    template = template_for(invocation.subcommand, settings)
    head, tail = _split_positionals(invocation, template, settings)
    if template.requires_binary_path and not (head and head[0]):
        raise MissingArgument(
            invocation.subcommand,
            "profile target" if invocation.subcommand == "profile" else "path to binary",
        )
    return ResolvedCommand(invocation.subcommand, expand(template, head, tail))
