"""Custom exceptions for the qn client.

This module provides a closed hierarchy of exceptions so callers can tell
apart configuration mistakes, bad requests, server failures and network
problems without inspecting messages.
"""

from typing import Any


class QiniuError(Exception):
    """Base exception for all qn errors.

    All qn exceptions inherit from this class, making it easy
    to catch every client-specific error in one place.
    """

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class QiniuConfigurationError(QiniuError, TypeError):
    """Raised when the client is constructed without required credentials."""

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing configuration fields
        """
        self.missing_fields = missing_fields or []

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = (
                "Pass them to QiniuClient or set the matching QINIU_* "
                "environment variables."
            )
        else:
            hint = "Check your access key, secret key and bucket name."

        super().__init__(message or "Invalid qn configuration", hint)


class QiniuSerializationError(QiniuError):
    """Raised when a put policy cannot be serialized to JSON."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.original_error = original_error
        super().__init__(
            message,
            "Policy values must be JSON types (str, int, float, bool, list, dict).",
        )


class QiniuTransportError(QiniuError):
    """Raised when the upload request never produced an HTTP response.

    Wraps connection failures and timeouts reported by the HTTP transport.
    The original exception is kept on ``original_error``.
    """

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
    ):
        """Initialize the transport error.

        Args:
            message: Custom error message (optional)
            original_error: The exception raised by the transport
            endpoint: The URL the request was sent to
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            hint = None
        elif original_error is not None:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Upload request failed"
            hint = "Check your network connection."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        target = endpoint or "the upload endpoint"
        kind = type(error).__name__

        if "Timeout" in kind:
            return (
                f"Upload to {target} timed out: {error}",
                "Increase the client timeout or pass a larger per-call timeout.",
            )

        if "Connect" in kind:
            return (
                f"Could not connect to {target}: {error}",
                "Check your network connection and proxy settings.",
            )

        return (f"Upload to {target} failed: {error}", None)


class QiniuResponseError(QiniuError):
    """Base class for errors reported by the upload endpoint."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        hint: str | None = None,
    ):
        """Initialize the response error.

        Args:
            message: The error message
            status_code: HTTP status code of the response
            body: The parsed response body, if any
            hint: Optional hint for resolving the error
        """
        self.status_code = status_code
        self.body = body
        super().__init__(message, hint)


class QiniuClientAuthError(QiniuResponseError):
    """Raised for 4xx responses: the request or its token was rejected."""

    def __init__(self, message: str, status_code: int, body: Any = None):
        hint = None
        if status_code == 401:
            hint = "Check the access key, secret key and token deadline."
        elif status_code == 413:
            hint = "The uploaded file exceeds the size allowed by the bucket."
        super().__init__(message, status_code, body, hint)


class QiniuServerError(QiniuResponseError):
    """Raised for 5xx responses. The same upload may succeed on retry."""

    def __init__(self, message: str, status_code: int, body: Any = None):
        super().__init__(
            message,
            status_code,
            body,
            "The upload service failed; retrying the upload is safe.",
        )
