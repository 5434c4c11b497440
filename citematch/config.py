"""
Configuration management for CiteMatch.

This module handles loading, validation, and access to the optional YAML
configuration. Every setting has a default, so CiteMatch runs without a
config file; a file only needs the keys it overrides.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from citematch.citation.exceptions import ConfigurationError

READ_ERROR_POLICIES = ("skip", "abort")
LOG_FORMATS = ("json", "markdown")

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "output": {
        "directory": None,
        "matched_filename": "citations.csv",
        "unmatched_filename": "unmatched_citations.csv",
        "batch_size": 500,
    },
    "scan": {
        "on_read_error": "skip",
        "encoding": "utf-8",
        "read_pdf": True,
    },
    "general": {
        "log_dir": "logs",
        "log_format": "json",
    },
}


class Config:
    """Configuration manager for CiteMatch."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration from a YAML file, or from defaults.

        Args:
            config_path: Path to the configuration file. When omitted the
                CITEMATCH_CONFIG environment variable and then
                ~/.config/citematch/config.yaml are tried.

        Raises:
            ConfigurationError: If an explicit file is missing or any entry is invalid.
        """
        explicit = config_path is not None
        if config_path is None:
            config_path = os.environ.get("CITEMATCH_CONFIG")
            explicit = config_path is not None
        if config_path is None:
            config_path = self._find_config_file()
        self.config_path = config_path
        self.cfg = self._load_config(explicit)
        self._validate_config()

    def _find_config_file(self) -> Optional[str]:
        """Return the user config path if it exists, else None."""
        config_path = Path.home() / ".config" / "citematch" / "config.yaml"
        if config_path.exists():
            return str(config_path)
        return None

    def _load_config(self, explicit: bool) -> Dict[str, Any]:
        """
        Load the configuration from the YAML file.

        Returns:
            Dictionary containing the configuration values.

        Raises:
            ConfigurationError: If the configuration file is missing or invalid.
        """
        if self.config_path is None:
            return {}
        if not os.path.exists(self.config_path):
            if explicit:
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_path}"
                )
            return {}

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Could not read configuration file {self.config_path}: {e}"
            )

        # Handle empty or all-commented YAML files
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Invalid configuration in {self.config_path}: expected a mapping"
            )
        return config

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.cfg.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"config section '{name}' must be a mapping")
        merged = dict(DEFAULTS[name])
        merged.update(section)
        return merged

    def _validate_config(self):
        """
        Validate configuration values and expose them as attributes.

        Raises:
            ConfigurationError: If any configuration value is invalid.
        """
        output = self._section("output")
        self.output_dir = output["directory"]
        self.matched_filename = output["matched_filename"]
        self.unmatched_filename = output["unmatched_filename"]
        self.batch_size = output["batch_size"]

        scan = self._section("scan")
        self.on_read_error = scan["on_read_error"]
        self.encoding = scan["encoding"]
        self.read_pdf = scan["read_pdf"]

        general = self._section("general")
        self.log_dir = general["log_dir"]
        self.log_format = general["log_format"]

        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
            raise ConfigurationError("config 'output.batch_size' must be an integer")
        if self.batch_size < 1:
            raise ConfigurationError("config 'output.batch_size' must be positive")

        if self.on_read_error not in READ_ERROR_POLICIES:
            raise ConfigurationError(
                f"config 'scan.on_read_error' must be one of {', '.join(READ_ERROR_POLICIES)}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"config 'general.log_format' must be one of {', '.join(LOG_FORMATS)}"
            )
        if not isinstance(self.read_pdf, bool):
            raise ConfigurationError("config 'scan.read_pdf' must be true or false")

        required_strings = {
            "output.matched_filename": self.matched_filename,
            "output.unmatched_filename": self.unmatched_filename,
            "scan.encoding": self.encoding,
            "general.log_dir": self.log_dir,
        }
        for key, val in required_strings.items():
            if not isinstance(val, str) or not val.strip():
                raise ConfigurationError(f"config '{key}' must be a non-empty string")

        if self.output_dir is not None and (
            not isinstance(self.output_dir, str) or not self.output_dir.strip()
        ):
            raise ConfigurationError("config 'output.directory' must be a path or null")

        if self.matched_filename == self.unmatched_filename:
            raise ConfigurationError(
                "config 'output.matched_filename' and 'output.unmatched_filename' must differ"
            )


CONFIG = None


def load_config(config_path: Optional[str] = None) -> "Config":
    """Load the global configuration instance if not already loaded."""
    global CONFIG
    if CONFIG is None:
        CONFIG = Config(config_path)
    return CONFIG


def get_config() -> "Config":
    """Get the global configuration instance, loading it if necessary."""
    return load_config()


def reset_config() -> None:
    """Forget the loaded configuration so the next call reloads it."""
    global CONFIG
    CONFIG = None
