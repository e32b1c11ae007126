"""
Bulk Font Installer
===================

Downloads a font archive, extracts it and installs every font it contains
for all users.
"""

import logging
import shutil
import zipfile
from collections.abc import Callable
from pathlib import Path

from src.fontadmin.core.config import DownloadConfig, InstallerConfig
from src.fontadmin.core.exceptions import (
    ArchiveExtractionError,
    FontInstallError,
    InsufficientPrivilegeError,
)
from src.fontadmin.core.models import (
    BulkInstallResult,
    FontInstallResult,
    FontScope,
    InstallMethod,
)
from src.fontadmin.platform import PlatformCapabilities, WindowsCapabilities

from .downloader import ArchiveDownloader
from .single import CommandFontInstaller, FontInstaller, ManualFontInstaller

logger = logging.getLogger(__name__)


def extract_archive(archive_path: Path, extract_dir: Path) -> Path:
    """
    Extract a zip archive, replacing whatever ``extract_dir`` held before.

    Raises:
        ArchiveExtractionError: If the archive is unreadable or a member
            would land outside ``extract_dir``
    """
    archive_path = Path(archive_path)
    extract_dir = Path(extract_dir)

    if extract_dir.exists():
        shutil.rmtree(extract_dir)
    extract_dir.mkdir(parents=True)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            root = extract_dir.resolve()
            for member in zf.namelist():
                if not (extract_dir / member).resolve().is_relative_to(root):
                    raise ArchiveExtractionError(
                        str(archive_path), f"member escapes target directory: {member}"
                    )
            zf.extractall(extract_dir)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveExtractionError(str(archive_path), str(e)) from e

    logger.info(f"Extracted {archive_path} to {extract_dir}")
    return extract_dir


def find_font_files(directory: Path, extensions: list[str]) -> list[Path]:
    """Find font files under ``directory``, sorted by path."""
    wanted = {ext.lower() for ext in extensions}
    return sorted(
        path
        for path in Path(directory).rglob("*")
        if path.is_file() and path.suffix.lower() in wanted
    )


def create_font_installer(config: InstallerConfig) -> FontInstaller:
    """Create the single-font installer selected by ``config``."""
    if config.installer_command:
        return CommandFontInstaller(
            config.installer_command,
            execution_policy=config.execution_policy,
            timeout_seconds=config.command_timeout_seconds,
        )
    return ManualFontInstaller()


class BulkFontInstaller:
    """
    Installs every font in a remote archive, machine-wide.

    The archive is downloaded once and cached; each run re-extracts it and
    reinstalls every font, replacing existing copies.
    """

    def __init__(
        self,
        config: InstallerConfig | None = None,
        font_installer: FontInstaller | None = None,
        downloader: ArchiveDownloader | None = None,
        confirm: Callable[[str], bool] | None = None,
        echo: Callable[[str], None] | None = None,
        capabilities: PlatformCapabilities | None = None,
    ):
        self.config = config or InstallerConfig()
        self.font_installer = font_installer or create_font_installer(self.config)
        self.downloader = downloader or ArchiveDownloader(DownloadConfig())
        self.confirm = confirm
        self.echo = echo or print
        self.capabilities = capabilities or WindowsCapabilities()

    def run(self) -> BulkInstallResult:
        """Download, extract and install all fonts in the configured archive."""
        if self.confirm and not self.confirm(
            "This will download and install fonts for all users. Continue?"
        ):
            logger.debug("Bulk install declined")
            return BulkInstallResult(aborted=True)

        if not self.capabilities.is_elevated():
            raise InsufficientPrivilegeError("Installing fonts for all users")

        result = BulkInstallResult(
            archive_path=self.config.cache_path,
            extract_dir=self.config.extract_dir,
        )

        result.downloaded = self.downloader.fetch(self.config.archive_url, self.config.cache_path)
        if not result.downloaded:
            self.echo(f"Archive already downloaded: {self.config.cache_path}")

        extract_archive(self.config.cache_path, self.config.extract_dir)

        font_files = find_font_files(self.config.extract_dir, self.config.font_extensions)
        self.echo(f"Installing {len(font_files)} fonts from {self.config.extract_dir}")

        for font_path in font_files:
            font_result = self._install_one(font_path)
            result.results.append(font_result)
            if not font_result.success and not self.config.continue_on_error:
                break

        self.echo(
            f"Font installation complete: {result.installed_count} installed, "
            f"{result.failed_count} failed"
        )
        self._report_log(result)
        return result

    def _install_one(self, font_path: Path) -> FontInstallResult:
        try:
            return self.font_installer.install(
                font_path,
                scope=FontScope.MACHINE,
                method=InstallMethod.MANUAL,
                replace=True,
            )
        except FontInstallError as e:
            logger.warning(str(e))
            return FontInstallResult(font_path=font_path, success=False, error=str(e))

    def _report_log(self, result: BulkInstallResult) -> None:
        log_file = self.config.log_file
        if log_file is None or not Path(log_file).is_file():
            return
        result.log_file = Path(log_file)
        self.echo(f"Installer log: {log_file}")
        self.echo(Path(log_file).read_text(encoding="utf-8", errors="replace"))
