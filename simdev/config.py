from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any
import os
import shlex

import toml
from returns.io import IOResultE, impure_safe
from returns.result import safe

from simdev.errors import ConfigError
from simdev.types import LogMode

LOG_MODES: tuple[LogMode, ...] = ("debug", "info")

ENV_PREFIX = "SIMDEV_"

# variable name -> settings field
ENV_FIELDS = {
    "PYTHONHOME": "python_home",
    "PYTHONPATH": "python_path",
    "LIBRARY_PATH": "library_path",
    "LOG_NAMESPACE": "log_namespace",
    "PROFILER": "profiler",
    "PROFILE_TARGET": "profile_target",
    "DEFAULT_MODE": "default_mode",
}


@dataclass(frozen=True)
class Settings:
    python_home: tuple[str, ...] = ("~/anaconda3", "~/anaconda3/envs/TPIR")
    python_path: tuple[str, ...] = (
        "~/anaconda3/envs/TPIR",
        "~/ibm/quantum/private-qiskit-sdk-py-dev",
    )
    library_path: tuple[str, ...] = ("~/anaconda3/lib",)
    log_namespace: str = "unitary_simulator"
    profiler: tuple[str, ...] = ("perf", "record", "-g")
    profile_target: str = "target/release/examples/unitary-simulator-timeit"
    default_mode: LogMode | None = None


SETTINGS_FIELDS = frozenset(f.name for f in fields(Settings))


def _strings(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings, got {value!r}")


def _normalize(key: str, value: Any) -> Any:
    match key:
        case "python_home" | "python_path" | "library_path":
            if isinstance(value, str):
                return tuple(p for p in value.split(os.pathsep) if p)
            return _strings(key, value)
        case "profiler":
            try:
                argv = shlex.split(value) if isinstance(value, str) else _strings(key, value)
            except ValueError as e:
                raise ConfigError(f"'profiler' could not be split: {e}") from e
            if not argv:
                raise ConfigError("'profiler' must name an executable")
            return tuple(argv)
        case "default_mode":
            if not value:
                return None
            if value not in LOG_MODES:
                raise ConfigError(
                    f"'default_mode' must be one of {LOG_MODES}, got '{value}'"
                )
            return value
        case _:
            if not isinstance(value, str):
                raise ConfigError(f"'{key}' must be a string, got {value!r}")
            return value


@safe
def apply_overrides(settings: Settings, values: Mapping[str, Any]) -> Settings:
    unknown = set(values) - SETTINGS_FIELDS
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    return replace(
        settings,
        **{key: _normalize(key, value) for key, value in values.items()},
    )


def environment_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    return {
        field: environ[ENV_PREFIX + name]
        for name, field in ENV_FIELDS.items()
        if ENV_PREFIX + name in environ
    }


@impure_safe
def load_config_file(config_path: Path) -> dict[str, Any]:
    table = toml.loads(config_path.read_text()).get("simdev", {})
    if not isinstance(table, dict):
        raise ConfigError("[simdev] must be a table")
    return table


def load_settings(
    config_path: Path | None,
    environ: Mapping[str, str],
    overrides: Mapping[str, Any],
) -> IOResultE[Settings]:
    file_values = (
        load_config_file(config_path)
        if config_path is not None
        else IOResultE.from_value({})
    )
    return (
        file_values.alt(
            lambda e: ConfigError(f"Could not load config '{config_path}': {e}")
        )
        .bind_result(lambda values: apply_overrides(Settings(), values))
        .bind_result(lambda s: apply_overrides(s, environment_overrides(environ)))
        .bind_result(lambda s: apply_overrides(s, overrides))
    )
