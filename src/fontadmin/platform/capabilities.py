"""
Platform Capabilities
=====================

Privilege and OS-version queries used to gate font operations before any
mutation happens. The Windows implementation asks the running session;
the static implementation returns fixed answers.
"""

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

try:
    from ctypes import windll
except ImportError:
    windll = None

logger = logging.getLogger(__name__)


class PlatformCapabilities(ABC):
    """Answers the environment questions font operations depend on."""

    @abstractmethod
    def is_elevated(self) -> bool:
        """Whether the current process runs with administrator rights."""

    @abstractmethod
    def os_build(self) -> int:
        """Operating system build number."""


class WindowsCapabilities(PlatformCapabilities):
    """Capabilities of the current Windows session."""

    def is_elevated(self) -> bool:
        if windll is None:
            return False
        try:
            return bool(windll.shell32.IsUserAnAdmin())
        except OSError as e:
            logger.debug(f"IsUserAnAdmin failed: {e}")
            return False

    def os_build(self) -> int:
        getwindowsversion = getattr(sys, "getwindowsversion", None)
        if getwindowsversion is None:
            return 0
        return getwindowsversion().build


@dataclass
class StaticCapabilities(PlatformCapabilities):
    """Fixed capability answers."""

    elevated: bool = False
    build: int = 0

    def is_elevated(self) -> bool:
        return self.elevated

    def os_build(self) -> int:
        return self.build
