import json
import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

import yaml
from adaptix import Retort
from adaptix.load_error import (
    BadVariantLoadError,
    LoadError,
    LoadExceptionGroup,
    TypeLoadError,
    ValidationLoadError,
    ValueLoadError,
)
from adaptix.struct_trail import get_trail

from yaml_jumper.errors import ConfigError, ConfigFieldError
from yaml_jumper.types import DotSeparatedPath, JSONValue

logger = logging.getLogger("yaml_jumper")

ENV_PREFIX = "YAML_JUMPER_"

SUPPORTED_EXTENSIONS = (".json", ".toml", ".yaml", ".yml")


@dataclass(frozen=True, slots=True, kw_only=True)
class JumperConfig:
    max_file_size: int = 1024 * 1024
    cache_enabled: bool = True
    cache_ttl: float = 30.0
    depth_limit: int = 10
    max_history_size: int = 100
    use_smart_parser: bool = True
    debug_performance: bool = False
    picker_type: Literal["table", "unique_path"] = "table"


_retort = Retort(strict_coercion=False)


def _load_file(path: Path) -> JSONValue:
    match path.suffix.lower():
        case ".yaml" | ".yml":
            with path.open() as file_:
                return cast("JSONValue", yaml.safe_load(file_))
        case ".toml":
            with path.open("rb") as file_:
                return cast("JSONValue", tomllib.load(file_))
        case ".json":
            with path.open() as file_:
                return cast("JSONValue", json.load(file_))
        case _:
            supported = ", ".join(SUPPORTED_EXTENSIONS)
            msg = f"Cannot determine config format for file '{path}'. Use a supported extension: {supported}"
            raise ValueError(msg)


def _apply_prefix(data: JSONValue, prefix: DotSeparatedPath | None) -> JSONValue:
    if not prefix:
        return data

    for key in prefix.split("."):
        if not isinstance(data, dict) or key not in data:
            return {}
        data = data[key]

    return data


def _infer_type(value: str) -> JSONValue:
    if value == "":
        return value

    try:
        return cast("JSONValue", json.loads(value))
    except (json.JSONDecodeError, ValueError):
        return value


def _load_env(prefix: str) -> dict[str, JSONValue]:
    return {
        key[len(prefix) :].lower(): _infer_type(value) for key, value in os.environ.items() if key.startswith(prefix)
    }


def _describe_error(exc: BaseException) -> str:
    if isinstance(exc, (ValidationLoadError, ValueLoadError)):
        return str(exc.msg)

    if isinstance(exc, TypeLoadError):
        expected_name = getattr(exc.expected_type, "__name__", str(exc.expected_type))
        return f"Expected {expected_name}, got {type(exc.input_value).__name__}"

    if isinstance(exc, BadVariantLoadError):
        allowed = ", ".join(repr(variant) for variant in exc.allowed_values)
        return f"Invalid variant: {exc.input_value!r} (allowed: {allowed})"

    return str(exc)


def _walk_exception(exc: BaseException, parent_path: list[str], result: list[ConfigFieldError]) -> None:
    current_path = parent_path + [str(elem) for elem in get_trail(exc)]

    if isinstance(exc, LoadExceptionGroup):
        for sub_exc in exc.exceptions:
            _walk_exception(sub_exc, current_path, result)
        return

    result.append(
        ConfigFieldError(
            field_path=current_path,
            message=_describe_error(exc),
            input_value=getattr(exc, "input_value", None),
        ),
    )


def extract_field_errors(exc: BaseException) -> list[ConfigFieldError]:
    result: list[ConfigFieldError] = []
    _walk_exception(exc, [], result)
    return result


def load_config(
    file_: str | None = None,
    *,
    prefix: DotSeparatedPath | None = None,
    env_prefix: str | None = ENV_PREFIX,
    **overrides: JSONValue,
) -> JumperConfig:
    data: dict[str, JSONValue] = {}

    if file_ is not None:
        loaded = _apply_prefix(_load_file(Path(file_)), prefix)
        if isinstance(loaded, dict):
            data.update(loaded)

    if env_prefix:
        data.update(_load_env(env_prefix))

    data.update(overrides)

    logger.debug(
        "[load_config] file=%s, prefix=%s, keys=%s",
        file_ or "<none>",
        prefix or "<none>",
        sorted(data.keys()),
    )

    try:
        return _retort.load(data, JumperConfig)
    except LoadError as exc:
        source_name = file_ or "JumperConfig"
        raise ConfigError(source_name, extract_field_errors(exc)) from exc
