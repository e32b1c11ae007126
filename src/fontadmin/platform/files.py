"""
Font File Operations
====================

File-level operations used when installing and removing fonts: deletion,
reboot-deferred deletion, copying, and the GDI calls that load, unload and
describe font resources in the current session.
"""

import ctypes
import logging
import os
import shutil
from pathlib import Path

try:
    from ctypes import windll
except ImportError:
    windll = None

logger = logging.getLogger(__name__)

MOVEFILE_DELAY_UNTIL_REBOOT = 0x4
ERROR_ACCESS_DENIED = 5

HWND_BROADCAST = 0xFFFF
WM_FONTCHANGE = 0x001D
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 1000
GFRI_DESCRIPTION = 1


class FontFileSystem:
    """
    Font file operations on the local file system.

    Deletion and copying use the standard library and behave the same on
    every platform. The session calls (font resources, change broadcast,
    deferred deletion) need Windows; elsewhere they are no-ops or raise
    ``OSError``.

    Access denial surfaces as ``PermissionError`` and a missing file as
    ``FileNotFoundError`` so callers can branch on the builtin types.
    """

    def __init__(self):
        self._kernel32 = None
        self._gdi32 = None
        self._user32 = None
        if windll is not None:
            self._kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
            self._gdi32 = ctypes.WinDLL("gdi32", use_last_error=True)
            self._user32 = ctypes.WinDLL("user32", use_last_error=True)

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def delete(self, path: Path) -> None:
        os.remove(path)
        logger.debug(f"Deleted {path}")

    def copy(self, source: Path, target: Path) -> None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        logger.debug(f"Copied {source} -> {target}")

    def schedule_delete_on_reboot(self, path: Path) -> None:
        """Ask the OS to delete ``path`` at next restart.

        Raises:
            PermissionError: If the request is denied
            OSError: If the request fails otherwise or is unsupported
        """
        if self._kernel32 is None:
            raise OSError(f"Deferred deletion is not supported on this platform: {path}")

        if not self._kernel32.MoveFileExW(str(path), None, MOVEFILE_DELAY_UNTIL_REBOOT):
            error = ctypes.get_last_error()
            if error == ERROR_ACCESS_DENIED:
                raise PermissionError(error, "Access is denied", str(path))
            raise ctypes.WinError(error)
        logger.debug(f"Scheduled {path} for deletion at next restart")

    def add_font_resource(self, path: Path) -> bool:
        """Load a font into the current session."""
        if self._gdi32 is None:
            return False
        return bool(self._gdi32.AddFontResourceW(str(path)))

    def remove_font_resource(self, path: Path) -> bool:
        """Unload a font from the current session."""
        if self._gdi32 is None:
            return False
        return bool(self._gdi32.RemoveFontResourceW(str(path)))

    def broadcast_font_change(self) -> None:
        """Tell running applications that the font table changed."""
        if self._user32 is None:
            return
        self._user32.SendMessageTimeoutW(
            HWND_BROADCAST, WM_FONTCHANGE, 0, 0, SMTO_ABORTIFHUNG, BROADCAST_TIMEOUT_MS, None
        )

    def font_description(self, path: Path) -> str | None:
        """Get the font's display name as GDI reports it, if available."""
        if self._gdi32 is None:
            return None

        size = ctypes.c_ulong()
        if not self._gdi32.GetFontResourceInfoW(
            str(path), ctypes.byref(size), None, GFRI_DESCRIPTION
        ):
            return None
        buffer = ctypes.create_unicode_buffer(size.value)
        if not self._gdi32.GetFontResourceInfoW(
            str(path), ctypes.byref(size), buffer, GFRI_DESCRIPTION
        ):
            return None
        return buffer.value or None
