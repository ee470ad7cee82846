"""Reading and writing the user's gator configuration file."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

CONFIG_FILENAME = ".gatorconfig.json"


class ConfigError(Exception):
    """Raised when the configuration file cannot be located, read or written."""


@dataclass
class Config:
    """Settings stored in the configuration file."""

    db_url: str = ""
    current_user_name: str = ""

    def set_user(self, username, path=None):
        """Make ``username`` the current user and save the configuration."""
        self.current_user_name = username
        try:
            write(self, path)
        except ConfigError as exc:
            raise ConfigError("write function error") from exc


def get_config_file_path():
    """Return the location of the configuration file in the home directory."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError("home directory not found") from exc
    return home / CONFIG_FILENAME


def _resolve(path):
    return Path(path) if path is not None else get_config_file_path()


def read(path=None):
    """Load the configuration from ``path``, or from the default location."""
    file = _resolve(path)
    try:
        content = file.read_bytes()
    except OSError as exc:
        raise ConfigError(f"error opening file: {exc}") from exc

    try:
        data = json.loads(content)
    except ValueError as exc:
        raise ConfigError(f"error decoding json: {exc}") from exc

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError("error decoding json: expected a JSON object")

    values = {}
    for field in fields(Config):
        value = data.get(field.name)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"error decoding json: {field.name} must be a string")
        values[field.name] = value
    return Config(**values)


def write(cfg, path=None):
    """Save ``cfg`` as indented JSON to ``path``, or to the default location."""
    try:
        file = _resolve(path)
    except ConfigError as exc:
        raise ConfigError(f"file not found {exc}") from exc

    text = json.dumps(asdict(cfg), indent=2, ensure_ascii=False)
    try:
        file.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"error writing to file: {exc}") from exc