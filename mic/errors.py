"""Exceptions raised by the MIC login flow"""

from typing import Optional


class MICError(Exception):
    """Base exception for MIC and Kinvey session errors."""

    pass


class ConfigurationError(MICError):
    """Raised when a required setting is missing or still the placeholder."""

    pass


class TransportError(MICError):
    """Raised when the HTTP client could not complete a request.

    The underlying httpx error is chained as ``__cause__``.
    """

    def __init__(self, stage: str, detail: str):
        super().__init__(f"Network error while {stage}: {detail}")
        self.stage = stage
        self.detail = detail


class ProtocolError(MICError):
    """Raised when a request completed but the response was not a success.

    Attributes:
        stage: Human-readable description of the step that failed
        status_code: HTTP status of the response
        content_type: Content-Type header of the response
        request_id: Kinvey request id, if the service returned one
        error: Provider ``error`` field (JSON bodies only)
        description: Provider ``description`` field (JSON bodies only)
        debug: Provider ``debug`` field (JSON bodies only)
        body: Raw response text (non-JSON bodies only)
    """

    def __init__(
        self,
        stage: str,
        status_code: int,
        content_type: str = "",
        request_id: Optional[str] = None,
        error: Optional[str] = None,
        description: Optional[str] = None,
        debug: Optional[str] = None,
        body: Optional[str] = None,
    ):
        self.stage = stage
        self.status_code = status_code
        self.content_type = content_type
        self.request_id = request_id
        self.error = error
        self.description = description
        self.debug = debug
        self.body = body
        super().__init__(f"Error {stage} (HTTP {status_code}): {self.message}")

    @property
    def message(self) -> str:
        """Most specific explanation the provider gave"""
        for value in (self.error, self.description, self.body):
            if value:
                return str(value)
        return "unexpected response"

    def details(self) -> dict:
        """Fields worth reporting, in display order"""
        details = {
            "HTTP Status": self.status_code,
            "Request ID": self.request_id,
        }
        if self.body is None:
            details["Error"] = self.error
            details["Description"] = self.description
            details["Debug"] = self.debug
        else:
            details["Response body"] = self.body
        return details
