"""Config file management for tagged-logging."""

import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "tagged-logging"
CONFIG_FILE = CONFIG_DIR / "config.toml"


def config_path() -> Path:
    """Config file location; TAGGED_LOGGING_CONFIG overrides the default."""
    override = os.getenv("TAGGED_LOGGING_CONFIG")
    return Path(override).expanduser() if override else CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict:
    """Read config from TOML file, return flat dict."""
    path = path or config_path()
    if not path.exists():
        return {}

    import tomllib

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Flatten sections one level deep
    flat: dict = {}
    for section_key, section_data in data.items():
        if isinstance(section_data, dict):
            for k, v in section_data.items():
                flat[k] = v
        else:
            flat[section_key] = section_data
    return flat

