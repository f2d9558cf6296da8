"""
Service Errors

Every failure a handler can report. The app registers one exception
handler for ServiceError, so services raise these instead of HTTPException.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base error carrying the HTTP status and response body"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Missing or malformed request field"""

    status_code = 400


class UpstreamFetchError(ServiceError):
    """Network or parsing failure against the target URL or the hosting repository"""

    status_code = 500


class ExtractionError(UpstreamFetchError):
    """The fetched page yielded no readable article text"""


class ModelError(ServiceError):
    """Completion API failure"""

    status_code = 500
