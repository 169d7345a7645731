import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

DEFAULT_CONFIG: Dict[str, Any] = {
    "api": {
        "base_url": "https://bahaiprayers.net/api/prayer",
        "timeout": None,  # seconds; None waits forever
    },
    "markup": {
        "opening_words_length": 45,
    },
    "output": {
        "directory": ".",
        "merged_file": "merged.db",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "languages": {
        "labels": {},
        "authors": {},
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class Config:
    def __init__(self, config_path: Optional[str] = None):
        logging.debug("Initializing Config class")

        self.config_file = Path(config_path).resolve() if config_path else None
        if self.config_file:
            logging.debug(f"Using config file: {self.config_file}")

        self._load_config()

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute environment variables in config data"""
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            # Format: ${VAR_NAME} or $VAR_NAME
            if data.startswith('${') and data.endswith('}'):
                return os.environ.get(data[2:-1], data)
            elif data.startswith('$') and len(data) > 1:
                return os.environ.get(data[1:], data)
            return data
        else:
            return data

    def _load_config(self) -> None:
        """Load configuration from file and layer it over the defaults"""
        if self.config_file is None:
            logging.debug("No config file given, using default configuration")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
            return

        if not self.config_file.exists():
            raise ConfigurationError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file, encoding="utf-8") as f:
                new_data = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            raise ConfigurationError(f"Error loading config {self.config_file}: {e}") from e

        if new_data is None:
            new_data = {}
        if not isinstance(new_data, dict):
            raise ConfigurationError("Invalid config format: root must be a dictionary")

        new_data = self._substitute_env_vars(new_data)
        for name in DEFAULT_CONFIG:
            if name in new_data and not isinstance(new_data[name], dict):
                raise ConfigurationError(f"Invalid config format: section '{name}' must be a dictionary")

        self.data = _deep_merge(DEFAULT_CONFIG, new_data)
        logging.debug(f"Loaded config data: {self.data}")

        # Expand ~ in log file path
        log_file = self.data["logging"].get("file")
        if log_file:
            self.data["logging"]["file"] = os.path.expanduser(log_file)

    def section(self, name: str) -> Dict[str, Any]:
        """Get config for a specific section"""
        return self.data.get(name) or {}

    @property
    def opening_words_length(self) -> int:
        try:
            length = int(self.section("markup").get("opening_words_length"))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"markup.opening_words_length must be an integer: {e}") from e
        if length < 1:
            raise ConfigurationError("markup.opening_words_length must be positive")
        return length

    @property
    def output_dir(self) -> Path:
        return Path(os.path.expanduser(str(self.section("output").get("directory") or ".")))

    @property
    def merged_file(self) -> Path:
        """Combined store path; a relative path is taken from the working directory, not output.directory"""
        return Path(os.path.expanduser(str(self.section("output").get("merged_file") or "merged.db")))
