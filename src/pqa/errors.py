"""Exception hierarchy for audit runs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pqa.schemas.audit import AuditResult


class AuditError(Exception):
    """Base exception for audit failures."""


class SetupError(AuditError):
    """Browser launch or report directory creation failed; the run cannot continue."""


class InvalidURLError(AuditError, ValueError):
    """A target URL could not be parsed into scheme, host and path."""


class PageError(AuditError):
    """A page could not be created in the shared browser."""


class NavigationError(AuditError):
    """The page could not be navigated to its target URL."""


class LighthouseNotFoundError(AuditError):
    """Raised when the Lighthouse CLI is not found in PATH."""


class AuditRunError(AuditError):
    """Lighthouse exited with an error or produced no readable report."""


class ThresholdError(AuditError):
    """One or more categories scored below their minimum."""

    def __init__(self, message: str, result: AuditResult) -> None:
        super().__init__(message)
        self.result = result


class CheckFailedError(AuditError):
    """Raised at the test boundary for a check that did not pass."""
