"""Configuration management for the font administration tools."""

import tempfile
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    EmptyExtensionListError,
    InvalidArchiveUrlError,
    InvalidExtensionError,
    InvalidYamlError,
)

# Per-user font installation arrived with Windows 10 1809
MIN_USER_SCOPE_BUILD = 17763

DEFAULT_ARCHIVE_URL = (
    "https://github.com/dejavu-fonts/dejavu-fonts/releases/download/"
    "version_2_37/dejavu-fonts-ttf-2.37.zip"
)
DEFAULT_FONT_EXTENSIONS = [".ttf", ".ttc", ".otf"]


class UninstallConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="UNINSTALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Font uninstaller configuration."""

    min_user_scope_build: int = Field(
        MIN_USER_SCOPE_BUILD, ge=0, description="Minimum Windows build for User scope"
    )
    release_session_font: bool = Field(
        True, description="Remove the font from the current session before deleting"
    )
    broadcast_font_change: bool = Field(True, description="Broadcast WM_FONTCHANGE afterwards")


class DownloadConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DOWNLOAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Archive download configuration."""

    timeout_seconds: int = Field(300, gt=0, description="HTTP timeout in seconds")
    chunk_size: int = Field(8192, gt=0, description="Streaming chunk size in bytes")
    max_retries: int = Field(3, ge=1, description="Download attempts before giving up")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
    user_agent: str = Field("fontadmin/1.0.0", description="HTTP User-Agent header")


class InstallerConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INSTALLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Bulk font installer configuration."""

    archive_url: str = Field(DEFAULT_ARCHIVE_URL, description="Font archive to download")
    cache_path: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "fonts.zip",
        description="Where the downloaded archive is cached",
    )
    extract_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "fonts",
        description="Where the archive is extracted",
    )
    font_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FONT_EXTENSIONS),
        description="File extensions treated as fonts",
    )
    log_file: Path | None = Field(None, description="Log written by the font installer")
    continue_on_error: bool = Field(True, description="Keep installing after a failure")

    # External installer; the built-in manual installer is used when unset
    installer_command: list[str] | None = Field(
        None, description="Command prefix of an external single-font installer"
    )
    execution_policy: str | None = Field(
        "Bypass", description="PowerShell execution policy passed to the external installer"
    )
    command_timeout_seconds: int = Field(120, gt=0, description="External installer timeout")

    @field_validator("archive_url")
    @classmethod
    def validate_archive_url(cls, v):
        if not v.startswith(("https://", "http://")):
            raise InvalidArchiveUrlError()
        return v

    @field_validator("font_extensions")
    @classmethod
    def validate_font_extensions(cls, v):
        if not v:
            raise EmptyExtensionListError()
        normalized = []
        for ext in v:
            if not ext.startswith("."):
                raise InvalidExtensionError(ext)
            normalized.append(ext.lower())
        return normalized


class AppConfig(BaseSettings):
    """Main application configuration that loads from multiple sources."""

    model_config = SettingsConfigDict(
        env_prefix="FONTADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Application log level")

    uninstall: UninstallConfig = Field(default_factory=UninstallConfig)
    installer: InstallerConfig = Field(default_factory=InstallerConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise EmptyConfigFileError(str(config_path))

        if issubclass(config_class, BaseSettings):
            # YAML values win; skip the .env file for this instance
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)

    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e


def _add_yaml_methods():
    """Add YAML loading methods to configuration classes."""

    @classmethod
    def from_yaml(cls, config_path: str | Path):
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(cls, yaml_path: str | Path | None = None, env_file: str = ".env"):
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)

    for config_class in [UninstallConfig, DownloadConfig, InstallerConfig, AppConfig]:
        config_class.from_yaml = from_yaml
        config_class.from_env_and_yaml = from_env_and_yaml


_add_yaml_methods()
