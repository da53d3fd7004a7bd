"""
Request-level error taxonomy.

Every exception carries the HTTP status it is rendered with and a message that
is safe to show to the caller. Row/record-level problems never use these; they
are absorbed where they happen and only counted.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for failures that end a request with an error envelope."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(IngestionError):
    """Raised when an API key or data-store credential is missing."""

    status_code = 500


class AuthenticationError(IngestionError):
    """Raised when the bearer token is absent, invalid or expired."""

    status_code = 401


class AuthorizationError(IngestionError):
    """Raised when the caller's role may not import products."""

    status_code = 403


class BadRequest(IngestionError):
    """Raised when the request body is malformed or lacks the file."""

    status_code = 400


class UnsupportedFileType(BadRequest):
    pass


class PayloadTooLarge(IngestionError):
    status_code = 413


class UpstreamRateLimited(IngestionError):
    status_code = 429


class UpstreamPaymentRequired(IngestionError):
    status_code = 402


class UpstreamFailure(IngestionError):
    """Raised for any other non-OK answer from the AI gateway."""

    status_code = 500


class UpstreamTimeout(UpstreamFailure):
    pass


class ParseFailure(IngestionError):
    """Raised when the model output holds no parseable JSON."""

    status_code = 500


class InvalidFormat(IngestionError):
    """Raised when the parsed model output is not a JSON array."""

    status_code = 500


class ValidationFailure(IngestionError):
    """Raised when the model returned records but none passed validation."""

    status_code = 500
