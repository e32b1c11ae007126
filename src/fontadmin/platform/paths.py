"""Font directory locations for each scope."""

import os
from pathlib import Path

from src.fontadmin.core.models import FontScope

FONTS_REG_PATH = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"


def fonts_directory(scope: FontScope) -> Path:
    """Get the fonts directory backing a scope."""
    if scope == FontScope.MACHINE:
        return Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts"
    return Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts"


def resolve_font_path(value: str, scope: FontScope, fonts_dir: Path | None = None) -> Path:
    """
    Resolve a registration value to an absolute font file path.

    Machine scope stores a file name relative to the fonts directory, although
    installers sometimes write an absolute path. User scope stores the
    absolute path.
    """
    path = Path(value)
    if scope == FontScope.MACHINE and not path.is_absolute():
        return (fonts_dir or fonts_directory(scope)) / path
    return path
