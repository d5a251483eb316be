class SimdevError(Exception):
    exit_code = 1


class MissingArgument(SimdevError):
    def __init__(self, subcommand: str, argument: str):
        super().__init__(f"No {argument} supplied to '{subcommand}'")
        self.subcommand = subcommand
        self.argument = argument


class ChildFailure(SimdevError):
    """The child process could not be started at all."""

    exit_code = 127

    def __init__(self, command: tuple[str, ...], reason: str):
        super().__init__(command, reason)
        self.command = command
        self.reason = reason


class ConfigError(SimdevError):
    exit_code = 2
