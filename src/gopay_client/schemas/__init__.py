from .https import (
    ClientRequestHeader,
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    ForgotPasswordRequest,
    MessageResponse,
    RegisterResponse,
    LoginResponse,
    RefreshResponse,
    ProfileResponse,
    ProfileTransaction,
    PaymentRequest,
    PaymentRecord,
)
from .accounts import Account, AccountStatus, Transaction, normalize_profile, apply_payment_result

__all__ = [
    "ClientRequestHeader",
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "ForgotPasswordRequest",
    "MessageResponse",
    "RegisterResponse",
    "LoginResponse",
    "RefreshResponse",
    "ProfileResponse",
    "ProfileTransaction",
    "PaymentRequest",
    "PaymentRecord",
    "Account",
    "AccountStatus",
    "Transaction",
    "normalize_profile",
    "apply_payment_result",
]
