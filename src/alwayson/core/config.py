"""alwayson configuration — layered settings sources.

Priority (highest first):
    1. CLI overrides, passed as init kwargs
    2. ALWAYSON_* environment variables, "__" between nested keys
    3. alwayson.config.yaml
    4. Model defaults

pydantic-settings does the layering and the nested merge. Validation
errors are reported per dotted key, e.g. ``display.active_interval_ms``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsError,
)

from alwayson.core.exceptions import ConfigError
from alwayson.core.models import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "alwayson.config.yaml"
CONFIG_SUBDIR = ".alwayson"


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Build a Config from the config file, the environment and overrides.

    Args:
        config_path: Explicit YAML path. If None, the nearest
            alwayson.config.yaml is used (see find_config_file). A path
            that does not exist means "no file layer".
        overrides: Nested dict applied above everything else.

    Returns:
        Validated Config instance.

    Raises:
        ConfigError: If the file cannot be parsed or any key fails validation.
    """
    if config_path is None:
        config_path = find_config_file()

    file_data: dict[str, Any] = {}
    if config_path is not None and config_path.exists():
        file_data = _load_yaml(config_path)
        logger.debug("Config file %s: sections %s", config_path, sorted(file_data))

    settings_cls = _with_file_layer(file_data)
    try:
        return settings_cls(**(overrides or {}))
    except ValidationError as e:
        msg = f"Config validation failed: {_describe_errors(e)}"
        raise ConfigError(msg) from e
    except SettingsError as e:
        msg = f"Config validation failed: {e}"
        raise ConfigError(msg) from e


def save_config(config: Config, path: Path) -> None:
    """Write every setting to path as YAML."""
    data = config.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )
    logger.debug("Saved config to %s", path)


def find_config_file(start: Path | None = None) -> Path | None:
    """Return the nearest config file, walking up from start (default: cwd).

    Each directory is checked for alwayson.config.yaml, then
    .alwayson/alwayson.config.yaml.
    """
    here = start or Path.cwd()
    for directory in (here, *here.parents):
        for candidate in (
            directory / DEFAULT_CONFIG_FILENAME,
            directory / CONFIG_SUBDIR / DEFAULT_CONFIG_FILENAME,
        ):
            if candidate.is_file():
                return candidate
    return None


def parse_override(key: str, raw: str) -> dict[str, Any]:
    """Turn a dotted key and a raw string into a typed nested override.

    The key is checked against the Config schema and the value coerced
    to the field's type, so ``display.active_interval_ms 500`` becomes
    ``{"display": {"active_interval_ms": 500}}``. Range checks are left
    to load_config.

    Raises:
        ConfigError: Unknown key, section used as a value, or a value of
            the wrong type.
    """
    parts = key.split(".")
    model: type[BaseModel] = Config
    annotation: Any = None
    for depth, part in enumerate(parts):
        field = model.model_fields.get(part)
        if field is None:
            section = ".".join(parts[:depth]) or "top level"
            msg = f"Unknown config key: {key} ({section} has: {', '.join(model.model_fields)})"
            raise ConfigError(msg)
        annotation = field.annotation
        is_section = isinstance(annotation, type) and issubclass(annotation, BaseModel)
        if depth < len(parts) - 1:
            if not is_section:
                msg = f"Config key {'.'.join(parts[: depth + 1])} has no nested keys"
                raise ConfigError(msg)
            model = annotation
        elif is_section:
            msg = f"Config key {key} is a section; set one of its keys instead"
            raise ConfigError(msg)

    try:
        value = TypeAdapter(annotation).validate_python(raw)
    except ValidationError as e:
        msg = f"Invalid value for {key}: {raw!r} ({e.errors()[0]['msg']})"
        raise ConfigError(msg) from e

    override: dict[str, Any] = {parts[-1]: value}
    for part in reversed(parts[:-1]):
        override = {part: override}
    return override


def _with_file_layer(file_data: dict[str, Any]) -> type[Config]:
    """Config subclass that reads file_data below the environment."""

    class FileBackedConfig(Config):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, InitSettingsSource(settings_cls, file_data))

    return FileBackedConfig


def _describe_errors(error: ValidationError) -> str:
    """One "dotted.key: message" entry per failing field."""
    entries = []
    for item in error.errors():
        key = ".".join(str(part) for part in item["loc"]) or "config"
        entries.append(f"{key}: {item['msg']}")
    return "; ".join(entries)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read the config file. An empty file is an empty mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML: {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Failed to read config: {path}: {e}"
        raise ConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must be a YAML mapping, got {type(data).__name__}: {path}"
        raise ConfigError(msg)
    return data
