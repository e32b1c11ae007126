"""Core components for font administration."""

from .config import AppConfig, DownloadConfig, InstallerConfig, UninstallConfig
from .exceptions import (
    ConfigurationError,
    DeleteFailedError,
    FileDeleteDeniedError,
    FontAdminError,
    FontInstallError,
    FontNotRegisteredError,
    InsufficientPrivilegeError,
    RegistryUnavailableError,
    RegistryUpdateError,
    UnsupportedPlatformVersionError,
)
from .models import (
    BulkInstallResult,
    DeleteOutcome,
    FontInstallResult,
    FontRegistration,
    FontScope,
    InstallMethod,
    UninstallResult,
)

__all__ = [
    "AppConfig",
    "BulkInstallResult",
    "ConfigurationError",
    "DeleteFailedError",
    "DeleteOutcome",
    "DownloadConfig",
    "FileDeleteDeniedError",
    "FontAdminError",
    "FontInstallError",
    "FontInstallResult",
    "FontNotRegisteredError",
    "FontRegistration",
    "FontScope",
    "InstallMethod",
    "InstallerConfig",
    "InsufficientPrivilegeError",
    "RegistryUnavailableError",
    "RegistryUpdateError",
    "UninstallConfig",
    "UninstallResult",
    "UnsupportedPlatformVersionError",
]
