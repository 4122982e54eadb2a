"""
Exceptions module.

Contains the exception hierarchy for the Slack logger.
All custom exceptions inherit from SlackLoggerError for consistent handling.
"""

from typing import Any, Dict, Optional


class SlackLoggerError(Exception):
    """
    Base exception for all Slack logger errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
        context: Additional context information for debugging.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or 'UNKNOWN_ERROR'
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.context:
            return f'[{self.code}] {self.message} - Context: {self.context}'
        return f'[{self.code}] {self.message}'


class ConfigurationError(SlackLoggerError):
    """
    Exception raised when a logger is constructed with missing or invalid
    configuration (webhook URL, username, author).

    Attributes:
        missing: Names of the mandatory parameters that were empty.
    """

    def __init__(
        self,
        message: str,
        missing: Optional[list[str]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if missing:
            ctx['missing'] = missing
        super().__init__(message, 'CONFIGURATION_ERROR', ctx)
        self.missing = missing or []


class ValidationError(SlackLoggerError):
    """
    Exception raised when a log call is missing a mandatory parameter.

    No network activity happens before this is raised.

    Attributes:
        field_name: The offending call parameter.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if field_name:
            ctx['field'] = field_name
        super().__init__(message, 'VALIDATION_ERROR', ctx)
        self.field_name = field_name


class DeliveryError(SlackLoggerError):
    """
    Exception raised when the webhook exchange fails.

    Covers transport failures (connection refused, DNS, timeout) as well as
    rejected requests (non-2xx status or unexpected body).

    Attributes:
        status_code: HTTP status code, None for transport failures.
        body: Response body text, truncated.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if status_code is not None:
            ctx['status_code'] = status_code
        if body:
            ctx['body'] = body[:500]  # Truncate for logging
        super().__init__(message, 'DELIVERY_ERROR', ctx)
        self.status_code = status_code
        self.body = body
