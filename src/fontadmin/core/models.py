"""Pydantic models for font registrations and operation results."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FontScope(Enum):
    """Where a font is registered and stored."""

    MACHINE = "Machine"
    USER = "User"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None

    def __str__(self) -> str:
        return self.value


class InstallMethod(Enum):
    """How the single-font installer places a font file."""

    MANUAL = "Manual"
    SHELL = "Shell"

    def __str__(self) -> str:
        return self.value


class DeleteOutcome(Enum):
    """What happened to the font file during an uninstall."""

    DELETED = "deleted"
    DEFERRED = "deferred"
    MISSING = "missing"
    SKIPPED = "skipped"


class FontRegistration(BaseModel):
    """A font name to file reference mapping in one scope's registration set."""

    name: str = Field(..., min_length=1, description="Registry value name")
    value: str = Field(..., description="File name (Machine) or absolute path (User)")
    scope: FontScope


class UninstallResult(BaseModel):
    """Outcome of a single font uninstall."""

    name: str
    scope: FontScope
    path: Path
    outcome: DeleteOutcome | None = Field(None, description="None when nothing was mutated")
    registry_removed: bool = False
    dry_run: bool = False


class FontInstallResult(BaseModel):
    """Outcome of installing one font file."""

    font_path: Path
    success: bool
    skipped: bool = Field(False, description="Already installed and replace was not requested")
    error: str | None = None


class BulkInstallResult(BaseModel):
    """Outcome of a bulk archive install."""

    aborted: bool = False
    downloaded: bool = False
    archive_path: Path | None = None
    extract_dir: Path | None = None
    results: list[FontInstallResult] = Field(default_factory=list)
    log_file: Path | None = None

    @property
    def installed_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def get_failed_items(self) -> list[FontInstallResult]:
        """Get results of fonts that failed to install."""
        return [r for r in self.results if not r.success]
