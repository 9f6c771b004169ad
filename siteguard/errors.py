from typing import Optional


class SiteGuardError(Exception):
    """Base class for every failure surfaced to a scan or export request."""


class MalformedScanError(SiteGuardError):
    """The scan payload is missing required summary data."""


class UpstreamError(SiteGuardError):
    """The scan or PDF service answered with an error payload or a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ServiceUnreachableError(SiteGuardError):
    """The request never got an answer (DNS, timeout, connection reset)."""
