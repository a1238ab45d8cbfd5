"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a YAML
configuration file (~/.backoffhttp/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from backoffhttp.domain.exceptions import InvalidConfigurationError
from backoffhttp.domain.models.retry import DEFAULT_INITIAL_DELAY_S, DEFAULT_MAX_ATTEMPTS, RetryPolicy

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".backoffhttp"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "BACKOFFHTTP_"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority). Nested sections are flattened to dotted keys.
    if config_file.exists():
        with open(config_file, 'r') as f:
            try:
                yaml_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidConfigurationError(f"Failed to parse YAML config {config_file}: {e}") from e
        if isinstance(yaml_config, dict):
            _config.update(_flatten(yaml_config))
            logger.info(f"Loaded configuration from YAML: {config_file}")
        elif yaml_config is not None:
            logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file. override=False: environment variables take precedence.
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    _loaded = True
    logger.debug("Configuration loading process completed.")


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = value
    return flat


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable
    3. YAML config
    4. Default value

    Args:
        key: The configuration key
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = key.upper()
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    return default


def _lookup(name: str, yaml_key: str) -> Any:
    """Checks ENV BACKOFFHTTP_<NAME> first, then the dotted YAML key."""
    value = get_config(f"{ENV_PREFIX}{name}")
    if value is None:
        value = get_config(yaml_key)
    return value


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_retry_policy() -> RetryPolicy:
    """Builds the retry policy from configuration.

    Raises:
        InvalidConfigurationError: If a configured value is not a positive number.
    """
    max_attempts = _lookup("MAX_ATTEMPTS", "retry.max_attempts")
    initial_delay = _lookup("INITIAL_DELAY", "retry.initial_delay")
    max_delay = _lookup("MAX_DELAY", "retry.max_delay")
    cancellable = _lookup("CANCELLABLE_BACKOFF", "retry.cancellable_backoff")

    return RetryPolicy(
        max_attempts=DEFAULT_MAX_ATTEMPTS if max_attempts is None else max_attempts,
        initial_delay=DEFAULT_INITIAL_DELAY_S if initial_delay is None else initial_delay,
        max_delay=max_delay,
        cancellable_backoff=True if cancellable is None else _as_bool(cancellable, "cancellable_backoff"),
    )


def _as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise InvalidConfigurationError(f"Expected a boolean for {name} (got {value!r}).")


def get_log_level() -> int:
    """Gets the configured log level, defaulting to INFO."""
    level = _lookup("LOG_LEVEL", "logging.level")
    if level is None:
        return logging.INFO
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        logger.warning(f"Unknown log level '{level}'. Defaulting to INFO.")
        return logging.INFO
    return resolved


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")


def reset_configuration() -> None:
    """Forgets loaded configuration so the next load reads files again."""
    global _config, _loaded
    _config = {}
    _loaded = False
