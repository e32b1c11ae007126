"""Platform Access
===============

Registry, file system and session capability access for font administration.
"""

from .capabilities import PlatformCapabilities, StaticCapabilities, WindowsCapabilities
from .files import FontFileSystem
from .paths import FONTS_REG_PATH, fonts_directory, resolve_font_path
from .registry import FontRegistry, RegistrationSet, WindowsFontRegistry

__all__ = [
    "FONTS_REG_PATH",
    "FontFileSystem",
    "FontRegistry",
    "PlatformCapabilities",
    "RegistrationSet",
    "StaticCapabilities",
    "WindowsCapabilities",
    "WindowsFontRegistry",
    "fonts_directory",
    "resolve_font_path",
]
