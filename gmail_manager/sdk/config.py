"""Configuration management for Gmail Manager.

OAuth client settings come from the process environment (a ``.env`` file is
loaded by the CLI entry point). Optional display and transport settings are
read from a YAML file, by default ~/.config/gmail-manager/config.yaml.
"""

import os
import copy
import yaml
import logging
from pathlib import Path
from typing import Any, Dict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variables holding the OAuth client settings
CLIENT_ID_ENV = "GOOGLE_CLIENT_ID"
CLIENT_SECRET_ENV = "GOOGLE_CLIENT_SECRET"
REDIRECT_URI_ENV = "GOOGLE_REDIRECT_URI"

# Token file lives next to the package unless overridden
DEFAULT_TOKEN_FILE = Path(__file__).resolve().parents[1] / "token.json"

DEFAULT_CONFIG = {
    "auth": {
        "token_file": None,
    },
    "display": {
        "limit": 5,
        "default_count": 10,
    },
    "http": {
        "timeout": 60,
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    env_path = os.getenv("GMAIL_MANAGER_CONFIG_DIR")
    if env_path:
        return Path(env_path)
    return Path.home() / ".config" / "gmail-manager"


def get_config_file_path() -> Path:
    """
    Get the path to the config file, respecting the GMAIL_MANAGER_CONFIG_FILE env var.
    """
    env_path = os.getenv("GMAIL_MANAGER_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return get_config_dir() / "config.yaml"


def load_config() -> dict:
    """Load the configuration file merged over the defaults."""
    config_file = get_config_file_path()
    if not config_file.exists():
        logger.debug(f"Config file not found at {config_file}, using default config.")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
            if config is None:
                return copy.deepcopy(DEFAULT_CONFIG)
            if not isinstance(config, dict):
                raise ConfigurationError(f"Top level of {config_file} must be a mapping")
            return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), config)
    except yaml.YAMLError as e:
        logger.error(f"Error loading config file {config_file}: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)
    except Exception as e:
        logger.error(f"An unexpected error occurred while loading config: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)


def get_config_value(key: str, default: Any = None, config_data: dict = None) -> Any:
    """Retrieve a configuration value using a dot-separated key."""
    if config_data is None:
        config_data = load_config()
    value = config_data
    for k in key.split('.'):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def get_client_config() -> Dict[str, str]:
    """
    Read the OAuth client settings from the environment.

    Missing values are not rejected here; the authorization server does that.

    Returns:
        Dict with 'client_id', 'client_secret' and 'redirect_uri' keys
    """
    settings = {
        "client_id": os.getenv(CLIENT_ID_ENV, ""),
        "client_secret": os.getenv(CLIENT_SECRET_ENV, ""),
        "redirect_uri": os.getenv(REDIRECT_URI_ENV, ""),
    }
    missing = [name for name, env in (
        ("client_id", CLIENT_ID_ENV),
        ("client_secret", CLIENT_SECRET_ENV),
        ("redirect_uri", REDIRECT_URI_ENV),
    ) if not settings[name]]
    if missing:
        logger.warning(f"OAuth client settings not set: {', '.join(missing)}")
    return settings


def get_token_file_path(config_data: dict = None) -> Path:
    """
    Get the token file path.

    Resolution order: GMAIL_MANAGER_TOKEN_FILE env var, the 'auth.token_file'
    config key, then token.json next to the package.
    """
    env_path = os.getenv("GMAIL_MANAGER_TOKEN_FILE")
    if env_path:
        return Path(env_path)
    configured = get_config_value("auth.token_file", config_data=config_data)
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_TOKEN_FILE


def get_display_limit(config_data: dict = None) -> int:
    """Number of messages rendered per list-style command."""
    env_value = os.getenv("GMAIL_MANAGER_DISPLAY_LIMIT")
    if env_value:
        return _positive_int(env_value, "GMAIL_MANAGER_DISPLAY_LIMIT", DEFAULT_CONFIG["display"]["limit"])
    value = get_config_value("display.limit", config_data=config_data)
    return _positive_int(value, "display.limit", DEFAULT_CONFIG["display"]["limit"])


def get_default_count(config_data: dict = None) -> int:
    """Number of messages requested when a command omits its count."""
    value = get_config_value("display.default_count", config_data=config_data)
    return _positive_int(value, "display.default_count", DEFAULT_CONFIG["display"]["default_count"])


def get_request_timeout(config_data: dict = None) -> float:
    """Socket timeout in seconds for Gmail API requests."""
    value = get_config_value("http.timeout", config_data=config_data)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.error(f"Invalid http.timeout value {value!r}, using default.")
        return float(DEFAULT_CONFIG["http"]["timeout"])
    if timeout <= 0:
        logger.error(f"http.timeout must be positive, got {timeout}; using default.")
        return float(DEFAULT_CONFIG["http"]["timeout"])
    return timeout


def _positive_int(value: Any, name: str, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.error(f"Invalid {name} value {value!r}, using {default}.")
        return default
    if number <= 0:
        logger.error(f"{name} must be positive, got {number}; using {default}.")
        return default
    return number


def _deep_merge(base: dict, new: dict) -> dict:
    """Recursively merge dictionary `new` into `base`."""
    for k, v in new.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            base[k] = _deep_merge(base[k], v)
        else:
            base[k] = v
    return base
