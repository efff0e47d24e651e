"""delegate_matcher Configuration

Configuration loading with environment variable support and sensible defaults.

Environment Variables:
    DELEGATE_MATCHER_CONFIG_PATH: Path to config file (default: delegate-matcher.yaml in cwd)
    DELEGATE_MATCHER_PASSTHROUGH: Override matching.passthrough ("1", "true", "yes", "on")
    DELEGATE_MATCHER_LOG_LEVEL: Override logging.level

Configuration Schema:
    matching:
        passthrough: bool - Forward spied calls to the real delegate (default: False)
    messages:
        max_repr_length: int - Truncate rendered argument reprs (default: 200, null disables)
    logging:
        level: str - Level for the delegate_matcher logger (default: "WARNING")
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "delegate-matcher.yaml"

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "matching": {
        "passthrough": False,
    },
    "messages": {
        "max_repr_length": 200,
    },
    "logging": {
        "level": "WARNING",
    },
}

_TRUTHY = {"1", "true", "yes", "on"}

_config_cache: Optional[Dict[str, Any]] = None


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override dict into base dict.

    Args:
        base: Base dictionary (defaults)
        override: Override dictionary (user config)

    Returns:
        Merged dictionary with override values taking precedence
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return data


def load_config(
    config_path: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load configuration from YAML file with environment variable overrides.

    Configuration Loading Order (later overrides earlier):
    1. Default values (DEFAULT_CONFIG)
    2. Config file (from DELEGATE_MATCHER_CONFIG_PATH or config_path parameter)
    3. Environment variable overrides

    Args:
        config_path: Explicit config file path (overrides DELEGATE_MATCHER_CONFIG_PATH)
        base_dir: Directory searched for the default config file (default: cwd)

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigurationError: If an explicit config file is invalid YAML or unreadable
    """
    if base_dir is None:
        base_dir = Path.cwd()

    config = copy.deepcopy(DEFAULT_CONFIG)

    file_path = config_path or os.environ.get("DELEGATE_MATCHER_CONFIG_PATH")

    if file_path:
        # Explicit config path - must be valid if it exists
        resolved_path = Path(file_path)
        if not resolved_path.is_absolute():
            resolved_path = (base_dir / resolved_path).resolve()
        if resolved_path.exists():
            try:
                config = _deep_merge(config, _read_yaml(resolved_path))
                logger.info(f"Loaded configuration from: {resolved_path}")
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Cannot read config file: {e}") from e
        else:
            logger.warning(f"Config file not found (using defaults): {file_path}")
    else:
        default_config_path = base_dir / DEFAULT_CONFIG_FILENAME
        if default_config_path.exists():
            try:
                config = _deep_merge(config, _read_yaml(default_config_path))
                logger.info(f"Loaded configuration from: {default_config_path}")
            except (yaml.YAMLError, ConfigurationError) as e:
                logger.warning(f"Invalid default config (ignoring): {e}")
            except OSError as e:
                logger.warning(f"Cannot read default config (ignoring): {e}")
        else:
            logger.debug("No config file found, using defaults")

    _check_sections(config)

    # Apply environment variable overrides
    passthrough_override = os.environ.get("DELEGATE_MATCHER_PASSTHROUGH")
    if passthrough_override is not None:
        config["matching"]["passthrough"] = passthrough_override.strip().lower() in _TRUTHY
        logger.info(f"Passthrough override from env: {config['matching']['passthrough']}")

    level_override = os.environ.get("DELEGATE_MATCHER_LOG_LEVEL")
    if level_override:
        config["logging"]["level"] = level_override.strip().upper()

    _validate(config)
    return config


def _check_sections(config: Dict[str, Any]) -> None:
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            raise ConfigurationError(f"Config section '{section}' must be a mapping")


def _validate(config: Dict[str, Any]) -> None:
    max_len = config["messages"].get("max_repr_length")
    if max_len is not None and (not isinstance(max_len, int) or max_len < 4):
        raise ConfigurationError(
            f"messages.max_repr_length must be an integer >= 4 or null, got {max_len!r}"
        )
    level = config["logging"].get("level")
    if not isinstance(logging.getLevelName(str(level).upper()), int):
        raise ConfigurationError(f"Unknown logging level: {level!r}")


def get_config() -> Dict[str, Any]:
    """Return the process-wide configuration, loading it on first use."""
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
        configure_logging(_config_cache)
    return _config_cache


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_cache
    _config_cache = None


def configure_logging(config: Dict[str, Any]) -> None:
    """
    Apply logging.level to the delegate_matcher package logger.

    Handlers are left to the application or test runner.

    Args:
        config: Configuration dictionary from load_config()
    """
    level = str(config.get("logging", {}).get("level", "WARNING")).upper()
    logging.getLogger("delegate_matcher").setLevel(level)


def get_max_repr_length(config: Dict[str, Any]) -> Optional[int]:
    """Extract messages.max_repr_length from config."""
    return config.get("messages", {}).get("max_repr_length")


def get_default_passthrough(config: Dict[str, Any]) -> bool:
    """Extract matching.passthrough from config."""
    return bool(config.get("matching", {}).get("passthrough", False))
