"""
Font Uninstaller
================

Removes a registered font: resolves its registration to a file, deletes the
file (or schedules deletion at next restart when it is in use) and removes
the registration.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from src.fontadmin.core.config import UninstallConfig
from src.fontadmin.core.exceptions import (
    DeleteFailedError,
    FileDeleteDeniedError,
    FontNotRegisteredError,
    InsufficientPrivilegeError,
    RegistryUpdateError,
    UnsupportedPlatformVersionError,
)
from src.fontadmin.core.models import DeleteOutcome, FontRegistration, FontScope, UninstallResult
from src.fontadmin.platform import (
    FontFileSystem,
    FontRegistry,
    PlatformCapabilities,
    WindowsCapabilities,
    WindowsFontRegistry,
    fonts_directory,
    resolve_font_path,
)

logger = logging.getLogger(__name__)

# (target, action) -> proceed?
ShouldProcess = Callable[[str, str], bool]


class FontUninstaller:
    """
    Uninstalls fonts from the machine-wide or per-user font store.

    The registry, file system and capability checks are injected so the
    sequence can run against any backend.
    """

    def __init__(
        self,
        config: UninstallConfig | None = None,
        registry: FontRegistry | None = None,
        files: FontFileSystem | None = None,
        capabilities: PlatformCapabilities | None = None,
        fonts_dirs: dict[FontScope, Path] | None = None,
    ):
        self.config = config or UninstallConfig()
        self.registry = registry or WindowsFontRegistry()
        self.files = files or FontFileSystem()
        self.capabilities = capabilities or WindowsCapabilities()
        self.fonts_dirs = fonts_dirs or {}

    def fonts_dir(self, scope: FontScope) -> Path:
        return self.fonts_dirs.get(scope) or fonts_directory(scope)

    def check_scope_supported(self, scope: FontScope) -> None:
        """Fail when the OS build is too old for ``scope``."""
        if scope != FontScope.USER:
            return
        build = self.capabilities.os_build()
        if build < self.config.min_user_scope_build:
            raise UnsupportedPlatformVersionError(
                str(scope), build, self.config.min_user_scope_build
            )

    def uninstall(
        self,
        name: str,
        scope: FontScope = FontScope.MACHINE,
        ignore_not_present: bool = False,
        dry_run: bool = False,
        should_process: ShouldProcess | None = None,
    ) -> UninstallResult | None:
        """
        Uninstall a font by its registered name.

        Args:
            name: Registry value name, e.g. "Georgia (TrueType)"
            scope: Registration set to remove the font from
            ignore_not_present: Return None instead of failing when not registered
            dry_run: Resolve everything but change nothing
            should_process: Optional confirmation callback; declining acts as a dry run

        Returns:
            UninstallResult, or None when the font is not registered and ignored

        Raises:
            UnsupportedPlatformVersionError: User scope on a build that lacks it
            InsufficientPrivilegeError: Machine scope without elevation
            RegistryUnavailableError: The registration set cannot be opened
            FontNotRegisteredError: ``name`` is not registered
            FileDeleteDeniedError: The file is in use and the session is not elevated
            DeleteFailedError: The file could not be deleted for another reason
        """
        self.check_scope_supported(scope)

        elevated = self.capabilities.is_elevated()
        if scope == FontScope.MACHINE and not elevated and not dry_run:
            raise InsufficientPrivilegeError(f"Uninstalling a font in {scope} scope")

        with self.registry.open(scope, writable=not dry_run) as registrations:
            value = registrations.get(name)
            if value is None:
                if ignore_not_present:
                    logger.info(f"Font '{name}' is not registered in {scope} scope, ignoring")
                    return None
                raise FontNotRegisteredError(name, str(scope))

            path = resolve_font_path(value, scope, self.fonts_dir(scope))
            logger.debug(f"Resolved font '{name}' to {path}")

            result = UninstallResult(name=name, scope=scope, path=path)

            target = f"{name} ({path})"
            if dry_run or (should_process and not should_process(target, "Uninstall font")):
                logger.info(f"Would uninstall font '{name}' and delete {path}")
                result.dry_run = True
                return result

            result.outcome = self._delete_font_file(path, elevated)

            try:
                registrations.delete(name)
            except OSError as e:
                raise RegistryUpdateError(name, str(scope), str(e)) from e
            result.registry_removed = True
            logger.info(f"Removed font registration '{name}' from {scope} scope")

        if self.config.broadcast_font_change:
            self.files.broadcast_font_change()

        return result

    def _delete_font_file(self, path: Path, elevated: bool) -> DeleteOutcome:
        """Delete ``path``, deferring to next restart if it is in use."""
        if self.config.release_session_font:
            self.files.remove_font_resource(path)

        try:
            self.files.delete(path)
        except FileNotFoundError:
            logger.warning(f"Font file not found, removing registration only: {path}")
            return DeleteOutcome.MISSING
        except PermissionError as e:
            if not elevated:
                raise FileDeleteDeniedError(str(path)) from e
            return self._defer_delete(path)
        except OSError as e:
            raise DeleteFailedError(str(path), str(e)) from e

        logger.info(f"Deleted font file {path}")
        return DeleteOutcome.DELETED

    def _defer_delete(self, path: Path) -> DeleteOutcome:
        logger.info(f"Font file is in use, scheduling deletion at next restart: {path}")
        try:
            self.files.schedule_delete_on_reboot(path)
        except PermissionError:
            logger.warning(
                f"Access denied scheduling deletion of {path}; leaving the file in place"
            )
            return DeleteOutcome.SKIPPED
        except OSError as e:
            raise DeleteFailedError(str(path), str(e)) from e
        return DeleteOutcome.DEFERRED

    def list_registrations(self, scope: FontScope = FontScope.MACHINE) -> list[FontRegistration]:
        """List every font registered in ``scope``."""
        self.check_scope_supported(scope)
        with self.registry.open(scope, writable=False) as registrations:
            return registrations.registrations()
