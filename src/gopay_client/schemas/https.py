"""
HTTP Request/Response Schema Models for the GoPay-Lite API

This module defines the Pydantic models exchanged with the backend's auth and
payment endpoints. Response models only validate what the client relies on;
unknown fields are kept so callers can still inspect them.

The main session flow consists of:
1. Client registers or logs in and receives a bearer token
2. Client sends the token in the Authorization header on protected calls
3. Client fetches its profile (/auth/me) and initiates payments (/pay)
4. Client refreshes or discards the token (/auth/refresh, /auth/logout)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ResponseModel(BaseModel):
    """Base for decoded server responses; tolerates extra fields."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ============================================================================
# Request Headers
# ============================================================================

class ClientRequestHeader(BaseModel):
    """HTTP request headers sent by client.

    Attributes:
        content_type: MIME type of request body (default: application/json).
        authorization: Optional bearer token for authenticated requests.
    """
    model_config = ConfigDict(populate_by_name=True)
    content_type: str = Field(default="application/json", alias="Content-Type")
    authorization: Optional[str] = Field(default=None, alias="Authorization")

    @classmethod
    def bearer(cls, token: str) -> "ClientRequestHeader":
        """Headers carrying ``token`` as an ``Authorization: Bearer`` credential."""
        return cls(authorization=f"Bearer {token}")


# ============================================================================
# Auth Requests
# ============================================================================

class RegisterRequest(BaseModel):
    """Body of POST /auth/register."""
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""
    email: str
    password: str


class RefreshRequest(BaseModel):
    """Body of POST /auth/refresh."""
    model_config = ConfigDict(populate_by_name=True)
    refresh_token: str = Field(..., alias="refreshToken")


class ForgotPasswordRequest(BaseModel):
    """Body of POST /auth/forgot-password."""
    email: str


# ============================================================================
# Auth Responses
# ============================================================================

class MessageResponse(ResponseModel):
    """Plain acknowledgement carrying a human-readable message."""
    message: str = ""


class RegisteredUser(ResponseModel):
    id: Optional[Union[int, str]] = Field(default=None, validation_alias=AliasChoices("id", "user_id"))
    email: Optional[str] = None


class RegisterResponse(ResponseModel):
    """Response of POST /auth/register. The token is only sent by backends
    that log the user in on registration."""
    message: str = ""
    token: Optional[str] = None
    user: Optional[RegisteredUser] = None


class LoginResponse(ResponseModel):
    """Response of POST /auth/login.

    Attributes:
        message: Server acknowledgement.
        token: Bearer token for subsequent protected calls.
        expires_in: Token lifetime in seconds, when the server reports it.
    """
    message: str = ""
    token: str = Field(..., min_length=1)
    expires_in: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("expiresIn", "expires_in")
    )


class RefreshResponse(ResponseModel):
    """Response of POST /auth/refresh."""
    token: str = Field(..., min_length=1)
    expires_in: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("expiresIn", "expires_in")
    )


class ProfileTransaction(ResponseModel):
    """A transaction as reported by /auth/me."""
    id: Union[int, str]
    amount: int
    timestamp: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("timestamp", "date", "created_at")
    )
    description: str = ""


class ProfileResponse(ResponseModel):
    """Response of GET /auth/me.

    Only ``email`` is guaranteed by every backend version; dashboard fields
    (balance, transactions, status) are optional and filled with defaults by
    ``schemas.accounts.normalize_profile``.
    """
    user_id: Optional[Any] = None
    email: Optional[str] = None
    name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    balance: Optional[int] = None
    transactions: Optional[List[ProfileTransaction]] = None
    status: Optional[str] = None


# ============================================================================
# Payments
# ============================================================================

class PaymentRequest(BaseModel):
    """Body of POST /pay. Amount is in minor currency units."""
    amount: int = Field(..., gt=0)
    from_account: str = Field(..., min_length=1)
    to_account: str = Field(..., min_length=1)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class PaymentRecord(ResponseModel):
    """Payment record returned by POST /pay.

    Attributes:
        order_id: Gateway order identifier, used as the local transaction id.
        id: Backend payment row id.
        status: Payment status (created, pending, completed, failed, refunded).
    """
    order_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("razorpay_order_id", "order_id")
    )
    id: Optional[int] = None
    status: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
