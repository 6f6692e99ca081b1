"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from remote_replace.exceptions import ConfigurationError
from remote_replace.models.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    ReplaceConfig,
)

log = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "connect_timeout": DEFAULT_CONNECT_TIMEOUT,
    "read_timeout": DEFAULT_READ_TIMEOUT,
    "log_dir": "",
}


class ConfigManager:
    """
    Handles all operations related to the application's INI config file.

    The file is optional: when it does not exist the built-in defaults are
    used, unless ``required`` is set (a path given explicitly by the user).
    """

    def __init__(self, config_file_path: Path, required: bool = False):
        self.config_file_path = config_file_path
        self.required = required
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any]) -> ReplaceConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Must contain ``source_root`` and ``remote_base``.

        Returns:
            A validated ReplaceConfig object.

        Raises:
            ConfigurationError: If a required config file is missing, the file
            cannot be parsed, or validation fails.
        """
        config_from_file = self.read_settings()
        config_from_file.update(cli_options)

        try:
            return ReplaceConfig(
                **config_from_file, config_path=str(self.config_file_path)
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def read_settings(self) -> dict[str, Any]:
        """Returns the settings stored in the config file, or the defaults."""
        if not self.config_file_path.is_file():
            if self.required:
                raise ConfigurationError(
                    f"Configuration file not found at '{self.config_file_path}'."
                )
            log.debug(
                f"No configuration file at '{self.config_file_path}', using defaults."
            )
            return dict(DEFAULT_SETTINGS)

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        if self._migrate_if_needed():
            log.info(
                "[yellow]Configuration file was updated with new default values."
                "[/yellow]"
            )

        try:
            return self._get_config_as_dict()
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a new configuration file filled with default values.

        Args:
            settings: Optional values overriding the defaults.
        """
        config = configparser.ConfigParser()
        config["DEFAULT"] = {}

        values = {**DEFAULT_SETTINGS, **(settings or {})}
        for key in sorted(ReplaceConfig.get_ini_keys()):
            config["DEFAULT"][key] = str(values.get(key, ""))

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        return {
            "connect_timeout": section.getfloat(
                "connect_timeout", DEFAULT_CONNECT_TIMEOUT
            ),
            "read_timeout": section.getfloat("read_timeout", DEFAULT_READ_TIMEOUT),
            "log_dir": section.get("log_dir", ""),
        }

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        needs_saving = False
        config_section = self._parser["DEFAULT"]

        for key in ReplaceConfig.get_ini_keys():
            if key not in config_section:
                config_section[key] = str(DEFAULT_SETTINGS[key])
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
