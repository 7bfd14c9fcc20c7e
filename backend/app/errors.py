"""
Audit error taxonomy.

Every error carries the HTTP status it maps to and knows how to render
itself as a JSON response body.
"""
from typing import Any, Dict, Optional


class AuditError(Exception):
    """Base exception for the audit service."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class SiteUrlError(AuditError):
    """siteUrl missing or not a usable URL."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class ConfigurationError(AuditError):
    """A required credential is not configured."""

    def __init__(self, message: str):
        super().__init__(message, status_code=500)


class UpstreamError(Exception):
    """A provider answered with a payload we cannot use."""


class AuditFailedError(AuditError):
    """A provider call or the aggregation failed."""

    def __init__(self, details: str, site_url: Optional[str] = None):
        super().__init__("Audit failed", status_code=500)
        self.details = details
        self.site_url = site_url

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "details": self.details,
            "siteUrl": self.site_url,
        }
