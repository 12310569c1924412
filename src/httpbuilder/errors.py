# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class HttpBuilderError(Exception):
    """Base class for every error raised by httpbuilder itself."""


class BuilderConfigurationError(HttpBuilderError, ValueError):
    """A vendor builder or client factory was given an unusable configuration."""


class BodyEncodingError(HttpBuilderError, ValueError):
    """Request data could not be serialized to a JSON body."""


class InvalidHeadersError(HttpBuilderError, TypeError):
    """Headers (or a header producer's result) were not a mapping."""


class UnsupportedMethodError(HttpBuilderError, ValueError):
    def __init__(self, method: str):
        super().__init__(f"Unsupported HTTP method: {method!r}")
        self.method = method


class InvalidAttemptNumberError(HttpBuilderError, ValueError):
    def __init__(self, attempt_number: Any):
        super().__init__(f"attempt_number must be a positive integer, got {attempt_number!r}")
        self.attempt_number = attempt_number


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ApiError(HttpBuilderError):
    """Failure surfaced by the bundled httpx vendor adapters."""


class ApiResponseError(ApiError):
    """The API answered with a 4xx/5xx status."""

    def __init__(
        self,
        status: int,
        reason: str = "",
        data: Any = None,
        category: ErrorCategory = ErrorCategory.NONE,
    ):
        super().__init__(f"{status} {reason}".strip())
        self.status = status
        self.reason = reason
        self.data = data
        self.category = category


class ApiUnreachableError(ApiError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str = "", category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message or error_category_to_reason(category) or "Could not reach the API")
        self.category = category


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map the httpx exceptions seen by the vendor error adapter to ErrorCategory.

    Status failures are NONE unless the API answered 429. Transport failures
    are narrowed by the socket/ssl exception httpx chained as their cause.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code == 429:
            return ErrorCategory.RATE_LIMITED
        return ErrorCategory.NONE

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.TransportError):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout while calling the API",
        ErrorCategory.RATE_LIMITED: "Rate limited by the API",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Could not reach the API",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error while calling the API",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiUnreachableError",
    "BodyEncodingError",
    "BuilderConfigurationError",
    "ErrorCategory",
    "HttpBuilderError",
    "InvalidAttemptNumberError",
    "InvalidHeadersError",
    "UnsupportedMethodError",
    "categorize_exception",
    "error_category_to_reason",
]
