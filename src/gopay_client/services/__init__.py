"""
Named operations over the backend's auth and payment endpoints.
"""

from .auth import (
    forgot_password,
    get_profile,
    login,
    logout,
    refresh_token,
    register,
    verify_email,
)
from .payments import initiate_payment

__all__ = [
    "register",
    "login",
    "get_profile",
    "logout",
    "refresh_token",
    "forgot_password",
    "verify_email",
    "initiate_payment",
]
