from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .report import CheckReport


class VersionSyncError(Exception):
    """Base class for all version-sync errors"""

    pass


class InputError(VersionSyncError):
    """A check could not run: unreadable file, bad version or bad template"""

    pass


class FormatError(VersionSyncError):
    """Malformed embedded data. Checkers turn this into a mismatch."""

    pass


class CheckFailed(VersionSyncError, AssertionError):
    """Raised when a report contains at least one mismatch"""

    def __init__(self, message: str, report: "CheckReport") -> None:
        super().__init__(message)
        self.report = report
