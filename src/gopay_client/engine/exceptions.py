"""
Exception and Error Definitions Module

Defines the single error taxonomy shared by the transport client, the
session/account operations and the payment flow. Every failure a caller can
observe is an instance of GoPayError and carries a machine-readable kind plus
a human-readable message.

Exception Hierarchy:
    GoPayError (root)
    ├── RequestError
    │   ├── RequestTimeoutError
    │   ├── HTTPError
    │   ├── NetworkError
    │   └── DecodeError
    ├── InsufficientFundsError
    ├── UnauthenticatedError
    └── ConfigurationError
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Machine-readable classification of a failure."""
    TIMEOUT = "Timeout"
    HTTP_ERROR = "HTTPError"
    NETWORK_ERROR = "NetworkError"
    DECODE_ERROR = "DecodeError"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    UNAUTHENTICATED = "Unauthenticated"
    CONFIGURATION = "Configuration"


DEFAULT_MESSAGES = {
    ErrorKind.TIMEOUT: "Request timed out",
    ErrorKind.HTTP_ERROR: "Request failed",
    ErrorKind.NETWORK_ERROR: "Server error while processing request.",
    ErrorKind.DECODE_ERROR: "Unexpected server response",
    ErrorKind.INSUFFICIENT_FUNDS: "Insufficient funds",
    ErrorKind.UNAUTHENTICATED: "User not authenticated. Token missing.",
    ErrorKind.CONFIGURATION: "Invalid client configuration",
}


class GoPayError(Exception):
    """
    Root exception class for all project-specific exceptions.

    Subclasses pin ``kind``; callers that need to react to a failure branch
    on it (or on the class) and show ``user_message()`` to the user.
    """
    kind: ErrorKind = ErrorKind.NETWORK_ERROR

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def user_message(self) -> str:
        """Return the message to display, falling back to a kind default."""
        return self.message or DEFAULT_MESSAGES[self.kind]


class RequestError(GoPayError):
    """
    Base exception for failures of a single transport call.

    Attributes:
        message: Human-readable description (server-supplied when available)
        status: HTTP status code, when the server answered
        payload: Decoded response body, when one could be decoded
    """

    def __init__(
        self,
        message: str = "",
        status: Optional[int] = None,
        payload: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status={self.status})"


class RequestTimeoutError(RequestError):
    """
    Raised when the request deadline elapses before a response arrives.

    The in-flight call has already been cancelled when this is raised. It
    never carries a status or payload.
    """
    kind = ErrorKind.TIMEOUT


class HTTPError(RequestError):
    """
    Raised when the server answers outside the 2xx range.

    ``message`` is the body's ``message`` field when present, otherwise
    ``"HTTP <status>"``.
    """
    kind = ErrorKind.HTTP_ERROR


class NetworkError(RequestError):
    """
    Raised when the underlying transport fails (DNS, refused connection,
    reset stream). The original httpx exception is chained as ``__cause__``.
    """
    kind = ErrorKind.NETWORK_ERROR


class DecodeError(RequestError):
    """
    Raised when a response body is not valid JSON, or does not match the
    schema the calling operation expects.
    """
    kind = ErrorKind.DECODE_ERROR


class InsufficientFundsError(GoPayError):
    """
    Raised by the payment flow when the cached balance is below the fixed
    payment amount. No network call has been made.

    Attributes:
        required: Amount required
        available: Amount available
    """
    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, required: int, available: int) -> None:
        super().__init__("Insufficient funds")
        self.required = required
        self.available = available


class UnauthenticatedError(GoPayError):
    """
    Raised when an authorized call is attempted without a stored credential.
    No network call has been made.
    """
    kind = ErrorKind.UNAUTHENTICATED


class ConfigurationError(GoPayError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Non-numeric or non-positive request timeout
    - Empty API base URL
    """
    kind = ErrorKind.CONFIGURATION
