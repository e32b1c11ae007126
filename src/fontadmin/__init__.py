"""Windows Font Administration
===========================

Tools for removing registered fonts (deferring deletion to the next restart
when a font file is in use) and for installing every font in a downloaded
archive for all users.
"""

__version__ = "1.0.0"

from .core.config import AppConfig, InstallerConfig, UninstallConfig
from .core.exceptions import FontAdminError
from .core.models import DeleteOutcome, FontScope, UninstallResult
from .fonts import BulkFontInstaller, FontUninstaller

__all__ = [
    "AppConfig",
    "BulkFontInstaller",
    "DeleteOutcome",
    "FontAdminError",
    "FontScope",
    "FontUninstaller",
    "InstallerConfig",
    "UninstallConfig",
    "UninstallResult",
]
