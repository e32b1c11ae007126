"""
Unit tests for configuration environment variable and YAML support.

Tests pydantic-settings integration for .env files and environment variables.
"""

import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.fontadmin.core.config import (
    DEFAULT_ARCHIVE_URL,
    MIN_USER_SCOPE_BUILD,
    AppConfig,
    DownloadConfig,
    InstallerConfig,
    UninstallConfig,
)
from src.fontadmin.core.exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    EmptyConfigFileError,
    InvalidYamlError,
)


class TestDefaults:
    """Test default configuration values."""

    def test_uninstall_defaults(self):
        config = UninstallConfig(_env_file=None)

        assert config.min_user_scope_build == MIN_USER_SCOPE_BUILD
        assert config.release_session_font is True
        assert config.broadcast_font_change is True

    def test_installer_defaults(self):
        config = InstallerConfig(_env_file=None)

        assert config.archive_url == DEFAULT_ARCHIVE_URL
        assert config.cache_path == Path(tempfile.gettempdir()) / "fonts.zip"
        assert config.extract_dir == Path(tempfile.gettempdir()) / "fonts"
        assert config.font_extensions == [".ttf", ".ttc", ".otf"]
        assert config.installer_command is None
        assert config.execution_policy == "Bypass"
        assert config.log_file is None

    def test_app_config_nests_defaults(self):
        config = AppConfig(_env_file=None)

        assert config.log_level == "INFO"
        assert isinstance(config.uninstall, UninstallConfig)
        assert isinstance(config.installer, InstallerConfig)
        assert isinstance(config.download, DownloadConfig)


class TestEnvironmentVariableSupport:
    """Test environment variable support for all config classes."""

    def test_uninstall_config_from_env_vars(self, monkeypatch):
        monkeypatch.setenv("UNINSTALL_MIN_USER_SCOPE_BUILD", "19041")
        monkeypatch.setenv("UNINSTALL_BROADCAST_FONT_CHANGE", "false")

        config = UninstallConfig()

        assert config.min_user_scope_build == 19041
        assert config.broadcast_font_change is False

    def test_installer_config_from_env_vars(self, monkeypatch, tmp_path):
        monkeypatch.setenv("INSTALLER_ARCHIVE_URL", "https://example.com/fonts.zip")
        monkeypatch.setenv("INSTALLER_CACHE_PATH", str(tmp_path / "fonts.zip"))
        monkeypatch.setenv(
            "INSTALLER_INSTALLER_COMMAND", '["powershell.exe", "-File", "Install-Font.ps1"]'
        )

        config = InstallerConfig()

        assert config.archive_url == "https://example.com/fonts.zip"
        assert config.cache_path == tmp_path / "fonts.zip"
        assert config.installer_command == ["powershell.exe", "-File", "Install-Font.ps1"]

    def test_download_config_from_env_vars(self, monkeypatch):
        monkeypatch.setenv("DOWNLOAD_MAX_RETRIES", "5")
        monkeypatch.setenv("DOWNLOAD_VERIFY_SSL", "false")

        config = DownloadConfig()

        assert config.max_retries == 5
        assert config.verify_ssl is False

    def test_app_config_picks_up_nested_prefixes(self, monkeypatch):
        monkeypatch.setenv("FONTADMIN_LOG_LEVEL", "debug")
        monkeypatch.setenv("UNINSTALL_MIN_USER_SCOPE_BUILD", "20000")

        config = AppConfig()

        assert config.log_level == "DEBUG"
        assert config.uninstall.min_user_scope_build == 20000

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("FONTADMIN_LOG_LEVEL=WARNING\n")

        config = AppConfig(_env_file=env_file)

        assert config.log_level == "WARNING"


class TestValidation:
    """Test field validators."""

    def test_archive_url_must_be_http(self):
        with pytest.raises(ValidationError, match="https://"):
            InstallerConfig(_env_file=None, archive_url="ftp://example.com/fonts.zip")

    def test_extensions_normalised(self):
        config = InstallerConfig(_env_file=None, font_extensions=[".TTF", ".Otf"])

        assert config.font_extensions == [".ttf", ".otf"]

    def test_extensions_need_leading_dot(self):
        with pytest.raises(ValidationError, match="must start with"):
            InstallerConfig(_env_file=None, font_extensions=["ttf"])

    def test_extensions_not_empty(self):
        with pytest.raises(ValidationError, match="at least one"):
            InstallerConfig(_env_file=None, font_extensions=[])

    def test_log_level(self):
        with pytest.raises(ValidationError, match="Unknown log level"):
            AppConfig(_env_file=None, log_level="chatty")

    def test_retries_positive(self):
        with pytest.raises(ValidationError):
            DownloadConfig(_env_file=None, max_retries=0)


class TestYamlLoading:
    """Test loading configuration from YAML files."""

    def test_app_config_from_yaml(self, tmp_path):
        config_path = tmp_path / "fontadmin.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "log_level": "WARNING",
                    "uninstall": {"min_user_scope_build": 18362},
                    "installer": {
                        "archive_url": "https://example.com/bundle.zip",
                        "extract_dir": str(tmp_path / "extract"),
                        "continue_on_error": False,
                    },
                    "download": {"timeout_seconds": 30},
                }
            )
        )

        config = AppConfig.from_yaml(config_path)

        assert isinstance(config, AppConfig)
        assert config.log_level == "WARNING"
        assert config.uninstall.min_user_scope_build == 18362
        assert config.installer.archive_url == "https://example.com/bundle.zip"
        assert config.installer.extract_dir == tmp_path / "extract"
        assert config.installer.continue_on_error is False
        assert config.download.timeout_seconds == 30

    def test_from_env_and_yaml_without_yaml(self):
        config = InstallerConfig.from_env_and_yaml(yaml_path=None)

        assert isinstance(config, InstallerConfig)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            AppConfig.from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(EmptyConfigFileError):
            AppConfig.from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("installer: [unclosed\n")

        with pytest.raises(InvalidYamlError):
            AppConfig.from_yaml(config_path)

    def test_invalid_values(self, tmp_path):
        config_path = tmp_path / "invalid.yaml"
        config_path.write_text(yaml.dump({"installer": {"archive_url": "file:///fonts.zip"}}))

        with pytest.raises(ConfigLoadError):
            AppConfig.from_yaml(config_path)
