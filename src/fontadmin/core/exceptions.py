"""Custom exceptions for the font administration tools."""

from typing import Any


class FontAdminError(Exception):
    """Base exception for all font administration errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class RegistryUnavailableError(FontAdminError):
    """Exception raised when a font registration set cannot be opened."""

    def __init__(self, scope: str, key_path: str):
        super().__init__(f"Unable to open font registry for {scope} scope: {key_path}")


class RegistryUpdateError(FontAdminError):
    """Exception raised when a font registration cannot be written or removed."""

    def __init__(self, name: str, scope: str, error: str):
        super().__init__(f"Failed to update registration '{name}' in {scope} scope: {error}")


class FontNotRegisteredError(FontAdminError):
    """Exception raised when a font name has no registration in a scope."""

    def __init__(self, name: str, scope: str):
        super().__init__(f"Font '{name}' is not registered in {scope} scope")


class InsufficientPrivilegeError(FontAdminError):
    """Exception raised when an operation requires an elevated session."""

    def __init__(self, action: str):
        super().__init__(
            f"{action} requires administrator privileges. "
            "Run the command again from an elevated prompt."
        )


class UnsupportedPlatformVersionError(FontAdminError):
    """Exception raised when the OS build is too old for a requested scope."""

    def __init__(self, scope: str, build: int, minimum_build: int):
        super().__init__(
            f"{scope} scope requires Windows build {minimum_build} or later "
            f"(current build: {build})"
        )


class FileDeleteDeniedError(FontAdminError):
    """Exception raised when a font file is in use and cannot be removed."""

    def __init__(self, path: str):
        super().__init__(
            f"Access denied deleting '{path}'; the font is probably in use. "
            "Retry from an elevated session to schedule deletion at next restart."
        )


class DeleteFailedError(FontAdminError):
    """Exception raised when a font file deletion fails for another reason."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to delete font file '{path}': {error}")


class DownloadError(FontAdminError):
    """Exception raised when a font archive cannot be downloaded."""

    def __init__(self, url: str, error: str):
        super().__init__(f"Failed to download {url}: {error}")


class ArchiveExtractionError(FontAdminError):
    """Exception raised when a font archive cannot be extracted."""

    def __init__(self, archive_path: str, error: str):
        super().__init__(f"Failed to extract {archive_path}: {error}")


class FontInstallError(FontAdminError):
    """Exception raised when a single font cannot be installed."""

    def __init__(self, font_path: str, error: str):
        super().__init__(f"Failed to install font '{font_path}': {error}")


class ConfigurationError(FontAdminError):
    """Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


# Field validation errors raised inside pydantic validators
class EmptyExtensionListError(ValueError):
    """Exception raised when no font extensions are configured."""

    def __init__(self):
        super().__init__("font_extensions must contain at least one extension")


class InvalidExtensionError(ValueError):
    """Exception raised for extensions without a leading dot."""

    def __init__(self, extension: str):
        super().__init__(f"Font extension must start with '.': {extension}")


class InvalidArchiveUrlError(ValueError):
    """Exception raised for archive URLs that are not http(s)."""

    def __init__(self):
        super().__init__("Archive URL must start with https:// or http://")
