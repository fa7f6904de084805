"""
Auth endpoint operations.

Each function wraps one backend endpoint with a fixed path and method,
validates the decoded body into its response model and, where the endpoint
hands out or revokes a credential, updates the client's session store.
Errors from the transport client propagate unchanged.
"""

import logging
from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..clients.http_client import GoPayClient
from ..engine.exceptions import DecodeError
from ..schemas.https import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: Type[ModelT], data: Any) -> ModelT:
    """Validate a decoded body, reporting schema mismatches as DecodeError."""
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected {model.__name__} payload: {exc.error_count()} validation error(s)",
            payload=data,
        ) from exc


async def register(
    client: GoPayClient,
    user_data: Union[RegisterRequest, Mapping[str, Any]],
) -> RegisterResponse:
    """Create an account; stores the token when the backend returns one."""
    body = RegisterRequest.model_validate(user_data)
    data = await client.fetch_api("/auth/register", method="POST", body=body)
    result = parse_response(RegisterResponse, data)
    if result.token:
        client.session_store.set(result.token)
    return result


async def login(
    client: GoPayClient,
    credentials: Union[LoginRequest, Mapping[str, Any]],
) -> LoginResponse:
    """Authenticate and store the returned bearer token."""
    body = LoginRequest.model_validate(credentials)
    data = await client.fetch_api("/auth/login", method="POST", body=body)
    result = parse_response(LoginResponse, data)
    client.session_store.set(result.token)
    logger.info("Logged in as %s", body.email)
    return result


async def get_profile(client: GoPayClient) -> ProfileResponse:
    """Fetch the current user's profile (requires a stored token)."""
    data = await client.fetch_api("/auth/me", authorized=True)
    return parse_response(ProfileResponse, data)


async def logout(client: GoPayClient) -> MessageResponse:
    """
    Invalidate the session server-side and drop the local credential.

    The credential is cleared even when the server call fails; the error is
    still raised to the caller.
    """
    authorized = client.session_store.is_authenticated()
    try:
        data = await client.fetch_api("/auth/logout", method="POST", authorized=authorized)
    finally:
        client.session_store.clear()
    return parse_response(MessageResponse, data)


async def refresh_token(client: GoPayClient, refresh_token: str) -> RefreshResponse:
    """Exchange a refresh token for a new bearer token and store it."""
    body = RefreshRequest(refresh_token=refresh_token)
    data = await client.fetch_api("/auth/refresh", method="POST", body=body)
    result = parse_response(RefreshResponse, data)
    client.session_store.set(result.token)
    return result


async def forgot_password(client: GoPayClient, email: str) -> MessageResponse:
    body = ForgotPasswordRequest(email=email)
    data = await client.fetch_api("/auth/forgot-password", method="POST", body=body)
    return parse_response(MessageResponse, data)


async def verify_email(client: GoPayClient, token: str) -> MessageResponse:
    data = await client.fetch_api("/auth/verify-email", params={"token": token})
    return parse_response(MessageResponse, data)
