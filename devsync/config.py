"""
Configuration for DevSync.

Handles paths, defaults, JSON config file, and environment-based overrides.
Configuration is loaded from ~/.devsync/config.json with sensible defaults.
"""

import json
import logging
import os
import secrets
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Default data directory: ~/.devsync/
DEFAULT_DATA_DIR = Path.home() / ".devsync"
CONFIG_FILE_NAME = "config.json"
DATABASE_FILE_NAME = "devsync.db"

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "database_url": None,  # Falls back to SQLite in the data dir
    "jwt_secret": None,  # Generated on first use
    "jwt_algorithm": "HS256",
    "token_ttl_seconds": 7 * 24 * 60 * 60,
    "default_profile_photo": "https://via.placeholder.com/150",
    "log_level": "INFO",
}

# Module-level config cache
_config_cache: Optional[Dict[str, Any]] = None


def get_data_dir() -> Path:
    """Get the data directory (DEVSYNC_DATA_DIR or ~/.devsync)."""
    return Path(os.environ.get("DEVSYNC_DATA_DIR", DEFAULT_DATA_DIR)).expanduser()


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_data_dir() / CONFIG_FILE_NAME


def load_config() -> Dict[str, Any]:
    """
    Load configuration from JSON file, with defaults for missing values.

    Environment variables can override config file values:
    - DEVSYNC_DATA_DIR: Override data directory
    - DEVSYNC_DATABASE_URL: Override database_url
    - DEVSYNC_JWT_SECRET: Override jwt_secret
    - DEVSYNC_TOKEN_TTL_SECONDS: Override token_ttl_seconds
    - DEVSYNC_LOG_LEVEL: Override log_level

    Returns:
        Dict containing configuration values
    """
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    config = DEFAULT_CONFIG.copy()
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config.update(json.load(f))
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Could not load config from %s: %s", config_path, e)

    # Environment variable overrides
    if os.environ.get("DEVSYNC_DATABASE_URL"):
        config["database_url"] = os.environ["DEVSYNC_DATABASE_URL"]

    if os.environ.get("DEVSYNC_JWT_SECRET"):
        config["jwt_secret"] = os.environ["DEVSYNC_JWT_SECRET"]

    if os.environ.get("DEVSYNC_TOKEN_TTL_SECONDS"):
        try:
            config["token_ttl_seconds"] = int(os.environ["DEVSYNC_TOKEN_TTL_SECONDS"])
        except ValueError:
            logger.warning(
                "Ignoring non-integer DEVSYNC_TOKEN_TTL_SECONDS=%r",
                os.environ["DEVSYNC_TOKEN_TTL_SECONDS"],
            )

    if os.environ.get("DEVSYNC_LOG_LEVEL"):
        config["log_level"] = os.environ["DEVSYNC_LOG_LEVEL"]

    _config_cache = config
    return config


def save_config(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Configuration dict to save. If None, saves current config.
    """
    global _config_cache

    if config is None:
        config = load_config()

    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)

    _config_cache = config


def clear_config_cache() -> None:
    """Clear the config cache, forcing reload on next access."""
    global _config_cache
    _config_cache = None


def ensure_data_dir() -> Path:
    """Create data directory if it doesn't exist."""
    data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_database_url() -> str:
    """Get the SQLAlchemy database URL (SQLite file in the data dir by default)."""
    url = load_config().get("database_url")
    if url:
        return url
    return f"sqlite:///{get_data_dir() / DATABASE_FILE_NAME}"


def is_postgres(db_url: Optional[str] = None) -> bool:
    """True when db_url (default: the configured database) is PostgreSQL."""
    return (db_url or get_database_url()).startswith(("postgresql", "postgres"))


def get_jwt_secret() -> str:
    """
    Get the token signing secret.

    When none is configured, a random secret is generated and persisted to
    the config file so tokens survive restarts.
    """
    config = load_config()
    secret = config.get("jwt_secret")
    if not secret:
        secret = secrets.token_hex(32)
        config["jwt_secret"] = secret
        save_config(config)
        logger.info("Generated new token signing secret in %s", get_config_path())
    return secret


def get_jwt_algorithm() -> str:
    return load_config().get("jwt_algorithm", DEFAULT_CONFIG["jwt_algorithm"])


def get_token_ttl_seconds() -> int:
    return int(load_config().get("token_ttl_seconds", DEFAULT_CONFIG["token_ttl_seconds"]))


def get_default_profile_photo() -> str:
    return load_config().get("default_profile_photo", DEFAULT_CONFIG["default_profile_photo"])


def get_log_level() -> str:
    return str(load_config().get("log_level", DEFAULT_CONFIG["log_level"])).upper()
