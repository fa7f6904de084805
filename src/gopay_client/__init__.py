"""
gopay_client - async client core for the GoPay-Lite payment dashboard.

Re-exports the pieces a dashboard needs so integrators can
``from gopay_client import ...`` without navigating the package.
"""

from .config import Settings
from .clients.http_client import GoPayClient
from .sessions.store import DotenvSessionStore, MemorySessionStore, SessionStore
from .schemas.accounts import Account, AccountStatus, Transaction, apply_payment_result, normalize_profile
from .engine.exceptions import (
    ConfigurationError,
    DecodeError,
    ErrorKind,
    GoPayError,
    HTTPError,
    InsufficientFundsError,
    NetworkError,
    RequestError,
    RequestTimeoutError,
    UnauthenticatedError,
)
from .engine.events import (
    EventBus,
    PaymentFailedEvent,
    PaymentSucceededEvent,
    SessionExpiredEvent,
    SessionReadyEvent,
)
from .engine.guards import LOGIN_PATH, SessionGuard, SessionState, is_authenticated
from .engine.payments import PaymentFlowController

__all__ = [
    "Settings",
    "GoPayClient",
    "SessionStore",
    "MemorySessionStore",
    "DotenvSessionStore",
    "Account",
    "AccountStatus",
    "Transaction",
    "apply_payment_result",
    "normalize_profile",
    "GoPayError",
    "ErrorKind",
    "RequestError",
    "RequestTimeoutError",
    "HTTPError",
    "NetworkError",
    "DecodeError",
    "InsufficientFundsError",
    "UnauthenticatedError",
    "ConfigurationError",
    "EventBus",
    "PaymentSucceededEvent",
    "PaymentFailedEvent",
    "SessionReadyEvent",
    "SessionExpiredEvent",
    "SessionGuard",
    "SessionState",
    "LOGIN_PATH",
    "is_authenticated",
    "PaymentFlowController",
]
