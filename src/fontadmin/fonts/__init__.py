"""Font Administration
===================

Uninstalling registered fonts and bulk-installing fonts from an archive.
"""

from .downloader import ArchiveDownloader
from .installer import BulkFontInstaller, create_font_installer, extract_archive, find_font_files
from .single import CommandFontInstaller, FontInstaller, ManualFontInstaller, registration_name
from .uninstaller import FontUninstaller

__all__ = [
    "ArchiveDownloader",
    "BulkFontInstaller",
    "CommandFontInstaller",
    "FontInstaller",
    "FontUninstaller",
    "ManualFontInstaller",
    "create_font_installer",
    "extract_archive",
    "find_font_files",
    "registration_name",
]
