import os

import pytest

from remote_replace.exceptions import ConfigurationError
from remote_replace.models.config import DEFAULT_CONNECT_TIMEOUT, ReplaceConfig
from remote_replace.storage.config_manager import ConfigManager
from remote_replace.utils.path import validate_source_root

TARGETS = {"source_root": "/data", "remote_base": "https://host/files"}


def test_missing_default_file_uses_defaults(tmp_path):
    manager = ConfigManager(tmp_path / "config.ini")

    config = manager.load_config(dict(TARGETS))

    assert config.connect_timeout == DEFAULT_CONNECT_TIMEOUT
    assert config.remote_base == "https://host/files/"
    assert not (tmp_path / "config.ini").exists()


def test_missing_explicit_file_is_an_error(tmp_path):
    manager = ConfigManager(tmp_path / "nope.ini", required=True)

    with pytest.raises(ConfigurationError):
        manager.load_config(dict(TARGETS))


def test_cli_options_override_file(tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nconnect_timeout = 3\nread_timeout = 4\n")

    config = ConfigManager(config_file).load_config({**TARGETS, "read_timeout": 7.5})

    assert config.connect_timeout == 3.0
    assert config.read_timeout == 7.5


def test_old_file_is_migrated(tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nconnect_timeout = 3\n")

    ConfigManager(config_file).load_config(dict(TARGETS))

    content = config_file.read_text()
    assert "read_timeout" in content
    assert "log_dir" in content


def test_invalid_values_raise_configuration_error(tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nconnect_timeout = soon\n")

    with pytest.raises(ConfigurationError):
        ConfigManager(config_file).load_config(dict(TARGETS))

    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path / "other.ini").load_config(
            {**TARGETS, "read_timeout": 0}
        )


def test_save_new_config_round_trips(tmp_path):
    config_file = tmp_path / "nested" / "config.ini"
    manager = ConfigManager(config_file)

    manager.save_new_config({"read_timeout": 12})

    settings = ConfigManager(config_file).read_settings()
    assert settings["read_timeout"] == 12.0
    assert set(settings) == ReplaceConfig.get_ini_keys()


def test_source_root_whitespace_is_preserved(tmp_path):
    data_dir = tmp_path / "data "
    data_dir.mkdir()

    config = ConfigManager(tmp_path / "config.ini").load_config(
        {"source_root": str(data_dir), "remote_base": "  https://host/files "}
    )

    assert config.source_root == str(data_dir)
    assert validate_source_root(config.source_root) == str(data_dir) + os.sep
    assert config.remote_base == "https://host/files/"
