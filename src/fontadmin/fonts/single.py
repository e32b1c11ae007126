"""
Single-Font Installers
======================

Installers that place one font file into a scope's font store. The bulk
installer drives one of these for every font it finds.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from src.fontadmin.core.exceptions import FontInstallError
from src.fontadmin.core.models import FontInstallResult, FontScope, InstallMethod
from src.fontadmin.platform import (
    FontFileSystem,
    FontRegistry,
    WindowsFontRegistry,
    fonts_directory,
)

logger = logging.getLogger(__name__)

TRUETYPE_EXTENSIONS = {".ttf", ".ttc"}
OPENTYPE_EXTENSIONS = {".otf"}
POWERSHELL_EXECUTABLES = {"powershell", "pwsh"}


def registration_name(description: str, extension: str) -> str:
    """Build the registry value name Windows uses for a font."""
    extension = extension.lower()
    if extension in TRUETYPE_EXTENSIONS:
        suffix = " (TrueType)"
    elif extension in OPENTYPE_EXTENSIONS:
        suffix = " (OpenType)"
    else:
        return description
    if description.endswith(suffix):
        return description
    return f"{description}{suffix}"


class FontInstaller(ABC):
    """Installs a single font file."""

    @abstractmethod
    def install(
        self,
        font_path: Path,
        scope: FontScope = FontScope.MACHINE,
        method: InstallMethod = InstallMethod.MANUAL,
        replace: bool = False,
    ) -> FontInstallResult:
        """
        Install ``font_path`` into ``scope``.

        Raises:
            FontInstallError: If the font cannot be installed
        """


class ManualFontInstaller(FontInstaller):
    """
    Installs fonts by copying them into the fonts directory and registering
    them in the scope's registration set.
    """

    def __init__(
        self,
        registry: FontRegistry | None = None,
        files: FontFileSystem | None = None,
        fonts_dirs: dict[FontScope, Path] | None = None,
    ):
        self.registry = registry or WindowsFontRegistry()
        self.files = files or FontFileSystem()
        self.fonts_dirs = fonts_dirs or {}

    def install(
        self,
        font_path: Path,
        scope: FontScope = FontScope.MACHINE,
        method: InstallMethod = InstallMethod.MANUAL,
        replace: bool = False,
    ) -> FontInstallResult:
        font_path = Path(font_path)
        if method != InstallMethod.MANUAL:
            raise FontInstallError(str(font_path), f"install method {method} is not supported")

        fonts_dir = self.fonts_dirs.get(scope) or fonts_directory(scope)
        target = fonts_dir / font_path.name

        if self.files.exists(target) and not replace:
            logger.info(f"Font already installed, skipping: {target}")
            return FontInstallResult(font_path=font_path, success=True, skipped=True)

        try:
            self.files.copy(font_path, target)
        except OSError as e:
            raise FontInstallError(str(font_path), str(e)) from e

        if not self.files.add_font_resource(target):
            logger.debug(f"Font not loaded into the current session: {target}")

        description = self.files.font_description(target) or font_path.stem
        name = registration_name(description, font_path.suffix)
        value = target.name if scope == FontScope.MACHINE else str(target)

        with self.registry.open(scope) as registrations:
            try:
                registrations.set(name, value)
            except OSError as e:
                raise FontInstallError(str(font_path), str(e)) from e

        self.files.broadcast_font_change()
        logger.info(f"Installed font '{name}' -> {target}")
        return FontInstallResult(font_path=font_path, success=True)


class CommandFontInstaller(FontInstaller):
    """
    Installs fonts by running an external installer command once per font.

    The command receives ``-Path``, ``-Scope`` and ``-Method`` arguments and
    ``-Force`` when replacing. For PowerShell the execution policy is passed
    on the command line for that process only.
    """

    def __init__(
        self,
        command: list[str],
        execution_policy: str | None = None,
        timeout_seconds: int = 120,
    ):
        if not command:
            raise ValueError("Installer command cannot be empty")
        self.command = list(command)
        self.execution_policy = execution_policy
        self.timeout_seconds = timeout_seconds

    def build_command(
        self, font_path: Path, scope: FontScope, method: InstallMethod, replace: bool
    ) -> list[str]:
        executable, *rest = self.command
        resolved = shutil.which(executable) or executable

        args = [resolved]
        if self.execution_policy and Path(executable).stem.lower() in POWERSHELL_EXECUTABLES:
            args.extend(["-ExecutionPolicy", self.execution_policy])
        args.extend(rest)
        args.extend(["-Path", str(font_path), "-Scope", str(scope), "-Method", str(method)])
        if replace:
            args.append("-Force")
        return args

    def install(
        self,
        font_path: Path,
        scope: FontScope = FontScope.MACHINE,
        method: InstallMethod = InstallMethod.MANUAL,
        replace: bool = False,
    ) -> FontInstallResult:
        font_path = Path(font_path)
        args = self.build_command(font_path, scope, method, replace)
        logger.debug(f"Running installer: {args}")

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise FontInstallError(
                str(font_path), f"installer timed out after {self.timeout_seconds}s"
            ) from e
        except OSError as e:
            raise FontInstallError(str(font_path), str(e)) from e

        if result.returncode != 0:
            output = (result.stderr or result.stdout or "").strip()
            raise FontInstallError(
                str(font_path), f"installer exited with code {result.returncode}: {output}"
            )

        logger.info(f"Installed font {font_path.name}")
        return FontInstallResult(font_path=font_path, success=True)
