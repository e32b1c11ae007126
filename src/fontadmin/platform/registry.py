"""
Font Registry
=============

Access to the per-scope font registration sets. On Windows these live under
``HKLM`` and ``HKCU`` at ``SOFTWARE\\Microsoft\\Windows NT\\CurrentVersion\\Fonts``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from src.fontadmin.core.exceptions import RegistryUnavailableError
from src.fontadmin.core.models import FontRegistration, FontScope

from .paths import FONTS_REG_PATH

# Optional Windows dependency
try:
    import winreg
except ImportError:
    winreg = None

logger = logging.getLogger(__name__)


class RegistrationSet(ABC):
    """An opened font registration set for one scope."""

    def __init__(self, scope: FontScope):
        self.scope = scope

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Get the file reference registered under ``name``, or None."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Register ``value`` under ``name``, replacing any existing value."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove the registration named ``name``."""

    @abstractmethod
    def names(self) -> list[str]:
        """Names of every registration in the set."""

    def contains(self, name: str) -> bool:
        return self.get(name) is not None

    def registrations(self) -> list[FontRegistration]:
        """All registrations in the set, sorted by name."""
        registrations = []
        for name in sorted(self.names(), key=str.lower):
            value = self.get(name)
            if value is not None:
                registrations.append(FontRegistration(name=name, value=value, scope=self.scope))
        return registrations


class FontRegistry(ABC):
    """Opens registration sets by scope."""

    @abstractmethod
    def open(self, scope: FontScope, writable: bool = True):
        """Context manager yielding the scope's ``RegistrationSet``.

        Raises:
            RegistryUnavailableError: If the set cannot be opened
        """


class WindowsRegistrationSet(RegistrationSet):
    """Registration set backed by an open ``winreg`` key."""

    def __init__(self, scope: FontScope, key):
        super().__init__(scope)
        self._key = key

    def get(self, name: str) -> str | None:
        try:
            value, _ = winreg.QueryValueEx(self._key, name)
        except FileNotFoundError:
            return None
        return value

    def set(self, name: str, value: str) -> None:
        winreg.SetValueEx(self._key, name, 0, winreg.REG_SZ, value)
        logger.debug(f"Registered font '{name}' -> {value} ({self.scope} scope)")

    def delete(self, name: str) -> None:
        winreg.DeleteValue(self._key, name)
        logger.debug(f"Removed font registration '{name}' ({self.scope} scope)")

    def names(self) -> list[str]:
        names = []
        index = 0
        while True:
            try:
                value_name, _, _ = winreg.EnumValue(self._key, index)
            except OSError:
                break
            names.append(value_name)
            index += 1
        return names


class WindowsFontRegistry(FontRegistry):
    """Font registration sets in the Windows registry."""

    def _hive(self, scope: FontScope):
        if scope == FontScope.MACHINE:
            return winreg.HKEY_LOCAL_MACHINE
        return winreg.HKEY_CURRENT_USER

    @contextmanager
    def open(self, scope: FontScope, writable: bool = True) -> Iterator[RegistrationSet]:
        if winreg is None:
            raise RegistryUnavailableError(str(scope), FONTS_REG_PATH)

        access = winreg.KEY_READ
        if writable:
            access |= winreg.KEY_SET_VALUE

        try:
            key = winreg.OpenKey(self._hive(scope), FONTS_REG_PATH, 0, access)
        except OSError as e:
            raise RegistryUnavailableError(str(scope), FONTS_REG_PATH) from e

        try:
            yield WindowsRegistrationSet(scope, key)
        finally:
            winreg.CloseKey(key)
