"""Loading config.yaml with environment variable placeholders."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.bookstore.runtime.config.config_data import ConfigData

# ${NAME}, ${NAME:-default} or ${NAME:?message}
_PLACEHOLDER = re.compile(r"\$\{([^}:]+)(?::([-?])([^}]*))?\}")


def _resolve(match: re.Match) -> str:
    name, operator, argument = match.groups()
    value = os.getenv(name)
    if operator == "-":
        return argument if value is None else value
    if value is None:
        if operator == "?":
            raise ValueError(f"Required environment variable {name}: {argument}")
        raise ValueError(f"Required environment variable {name} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """Replace every ``${...}`` placeholder in ``text``.

    ``${NAME:-default}`` falls back to ``default``; ``${NAME}`` and
    ``${NAME:?message}`` raise ValueError when ``NAME`` is unset.
    """
    return _PLACEHOLDER.sub(_resolve, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment.

    With ``APP_ENVIRONMENT=production``, ``PRODUCTION_MONGODB_URL`` wins over
    ``MONGODB_URL`` during substitution.
    """
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    if overrides:
        logger.info("Applying {} overrides: {}", env_mode, sorted(overrides))
    os.environ.update(overrides)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path``, substitute placeholders and validate the ``config`` section.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a required variable is missing, the YAML is empty or
            malformed, or the values fail validation
    """
    with open(file_path) as f:
        content = f.read()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration {} for environment: {}", file_path, env_mode)
    apply_environment_overrides(env_mode)

    try:
        loaded = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError(f"Configuration file {file_path} is empty")

    try:
        return ConfigData(**loaded.get("config", {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
