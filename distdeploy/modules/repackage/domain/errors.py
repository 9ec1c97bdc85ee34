"""Exceptions raised by the repackage pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import DeploymentReport


class RepackageError(RuntimeError):
    """Base class for fatal pipeline errors."""


class WorkspaceError(RepackageError):
    """Raised when the workspace cannot be reset."""


class DistributionLayoutError(RepackageError):
    """Raised when the extracted distribution does not look like one."""


class ArchiveError(RepackageError):
    """Raised when an archive cannot be read or holds an unsafe entry."""


class MavenNotConfiguredError(RepackageError):
    """Raised when no Maven home is available for deploy-file."""


class RunInProgressError(RepackageError):
    """Raised when a second run is requested while one is still going."""


class DeploymentFailedError(RepackageError):
    """Raised after the deploy loop stopped, when the caller asked for it."""

    def __init__(self, report: "DeploymentReport") -> None:
        super().__init__(
            f"deploy of {report.failed} failed with exit code {report.failed_exit_code}; "
            f"{len(report.skipped)} artifact(s) not attempted"
        )
        self.report = report
