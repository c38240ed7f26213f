"""Active configuration, held in a ContextVar so tests and tasks can override it."""

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.config.config_template import load_templated_yaml


@dataclass
class AppContext:
    """Application-wide state visible to the current task."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load config.yaml, or the file named by ``BOOKSTORE_CONFIG``.

    Falls back to the built-in defaults when the file does not exist.
    """
    config_path = Path(os.getenv("BOOKSTORE_CONFIG", "config.yaml"))
    if not config_path.exists():
        logger.warning("Configuration file {} not found; using defaults", config_path)
        return ConfigData()
    return load_templated_yaml(config_path)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def get_config() -> ConfigData:
    """The configuration of the current context."""
    return get_context().config


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Only the fields assigned on ``model`` or on its nested models."""
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_values(value)
            if nested:
                values[name] = nested
            elif name in model.model_fields_set:
                values[name] = value.model_dump()
        elif name in model.model_fields_set:
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily layer ``config_override`` on top of the current configuration.

    Only fields that were explicitly set on the override replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData()
        override.database.name = "bookstore_test"
        with with_context(override):
            assert get_config().database.name == "bookstore_test"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    current = get_context()
    merged = ConfigData.model_validate(
        _deep_merge(current.config.model_dump(), _explicit_values(config_override))
    )
    token = _app_context.set(replace(current, config=merged))
    try:
        yield
    finally:
        _app_context.reset(token)
