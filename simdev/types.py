from typing import Literal

Subcommand = Literal[
    "build", "test", "debug", "profile", "bench", "example", "help", "default"
]
Mode = Literal["debug", "info", "rel", "dev"]
LogMode = Literal["debug", "info"]

Cmd = tuple[str, ...]
EnvironmentSet = dict[str, str]
