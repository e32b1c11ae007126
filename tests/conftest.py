"""
Pytest configuration and fixtures for font administration tests.
"""

from contextlib import contextmanager
from pathlib import Path

import pytest

from src.fontadmin.core.config import InstallerConfig, UninstallConfig
from src.fontadmin.core.exceptions import RegistryUnavailableError
from src.fontadmin.core.models import FontScope
from src.fontadmin.fonts import FontUninstaller
from src.fontadmin.platform import (
    FONTS_REG_PATH,
    FontFileSystem,
    FontRegistry,
    RegistrationSet,
    StaticCapabilities,
)

MIN_USER_BUILD = 17763


class InMemoryRegistrationSet(RegistrationSet):
    """Registration set backed by a plain dict."""

    def __init__(self, scope: FontScope, values: dict[str, str], write_error=None):
        super().__init__(scope)
        self.values = values
        self.write_error = write_error

    def get(self, name):
        return self.values.get(name)

    def set(self, name, value):
        if self.write_error is not None:
            raise self.write_error
        self.values[name] = value

    def delete(self, name):
        if self.write_error is not None:
            raise self.write_error
        del self.values[name]

    def names(self):
        return list(self.values)


class InMemoryFontRegistry(FontRegistry):
    """Font registry holding one dict per scope."""

    def __init__(self, unavailable: tuple[FontScope, ...] = ()):
        self.values: dict[FontScope, dict[str, str]] = {scope: {} for scope in FontScope}
        self.unavailable = set(unavailable)
        self.opened: list[tuple[FontScope, bool]] = []
        self.write_error: OSError | None = None

    @contextmanager
    def open(self, scope, writable=True):
        if scope in self.unavailable:
            raise RegistryUnavailableError(str(scope), FONTS_REG_PATH)
        self.opened.append((scope, writable))
        yield InMemoryRegistrationSet(scope, self.values[scope], self.write_error)


class ScriptedFontFileSystem(FontFileSystem):
    """
    Real file operations on temporary directories with scripted failures
    standing in for locked files and denied requests.
    """

    def __init__(self):
        super().__init__()
        self.delete_errors: dict[Path, OSError] = {}
        self.defer_error: OSError | None = None
        self.deferred: list[Path] = []
        self.added_resources: list[Path] = []
        self.removed_resources: list[Path] = []
        self.broadcasts = 0
        self.descriptions: dict[str, str] = {}

    def lock(self, path: Path) -> None:
        self.delete_errors[Path(path)] = PermissionError(13, "File in use", str(path))

    def delete(self, path):
        error = self.delete_errors.get(Path(path))
        if error is not None:
            raise error
        super().delete(path)

    def schedule_delete_on_reboot(self, path):
        if self.defer_error is not None:
            raise self.defer_error
        self.deferred.append(Path(path))

    def add_font_resource(self, path):
        self.added_resources.append(Path(path))
        return True

    def remove_font_resource(self, path):
        self.removed_resources.append(Path(path))
        return True

    def broadcast_font_change(self):
        self.broadcasts += 1

    def font_description(self, path):
        return self.descriptions.get(Path(path).name)


@pytest.fixture
def machine_fonts_dir(tmp_path):
    """Stand-in for %WINDIR%\\Fonts."""
    path = tmp_path / "Windows" / "Fonts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def user_fonts_dir(tmp_path):
    """Stand-in for %LOCALAPPDATA%\\Microsoft\\Windows\\Fonts."""
    path = tmp_path / "LocalAppData" / "Microsoft" / "Windows" / "Fonts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def fonts_dirs(machine_fonts_dir, user_fonts_dir):
    return {FontScope.MACHINE: machine_fonts_dir, FontScope.USER: user_fonts_dir}


@pytest.fixture
def registry():
    return InMemoryFontRegistry()


@pytest.fixture
def files():
    return ScriptedFontFileSystem()


@pytest.fixture
def elevated():
    """Elevated session on a build that supports per-user fonts."""
    return StaticCapabilities(elevated=True, build=MIN_USER_BUILD)


@pytest.fixture
def make_uninstaller(registry, files, fonts_dirs):
    """Build a FontUninstaller over the in-memory registry and temp directories."""

    def _make(elevated: bool = True, build: int = MIN_USER_BUILD) -> FontUninstaller:
        return FontUninstaller(
            UninstallConfig(_env_file=None),
            registry=registry,
            files=files,
            capabilities=StaticCapabilities(elevated=elevated, build=build),
            fonts_dirs=fonts_dirs,
        )

    return _make


@pytest.fixture
def installer_config(tmp_path):
    """Installer configuration pointing into a temporary directory."""
    return InstallerConfig(
        _env_file=None,
        archive_url="https://example.com/fonts.zip",
        cache_path=tmp_path / "cache" / "fonts.zip",
        extract_dir=tmp_path / "extract",
        log_file=tmp_path / "install.log",
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
