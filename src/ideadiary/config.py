"""
Configuration management for Idea Diary.

Uses XDG base directories:
- Config: ~/.config/ideadiary/config.toml
- Data: ~/ideadiary/ (the diary itself)
"""

from pathlib import Path
from typing import Any
import os

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / "ideadiary"


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/ideadiary)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "ideadiary"


def get_diary_home() -> Path:
    """Get the diary data directory (~/ideadiary or IDEADIARY_HOME)."""
    if env_home := os.environ.get("IDEADIARY_HOME"):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_db_path(config: dict[str, Any] | None = None) -> Path:
    """Get the path to the storage database, honouring [storage] path."""
    if config and (path := config.get("storage", {}).get("path")):
        return Path(path).expanduser()
    return get_diary_home() / "ideadiary.db"


def ensure_dirs() -> None:
    """Ensure all required directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_diary_home().mkdir(parents=True, exist_ok=True)


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    Returns default config if file doesn't exist. Sections missing from
    the file fall back to their defaults.
    """
    config_path = get_config_path()
    config = get_default_config()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        user_config = tomli.load(f)

    for section, values in user_config.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
        else:
            config[section] = values
    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "storage": {
            "path": str(get_diary_home() / "ideadiary.db"),
        },
        "mail": {
            "recipient": "",  # mailto: target for hand-offs
        },
        "logging": {
            "level": "WARNING",
        },
    }
