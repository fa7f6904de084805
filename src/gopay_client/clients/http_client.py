"""
GoPay Transport Client

Provides the single request path every API operation goes through. It sits
on top of httpx.AsyncClient and adds a hard per-request deadline, bearer
attachment from a SessionStore, and normalization of transport and HTTP
failures into the GoPayError taxonomy.
"""

import asyncio
import json
import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from ..config import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT, Settings
from ..engine.exceptions import (
    DecodeError,
    HTTPError,
    NetworkError,
    RequestTimeoutError,
    UnauthenticatedError,
)
from ..schemas.https import ClientRequestHeader
from ..sessions.store import DotenvSessionStore, MemorySessionStore, SessionStore

logger = logging.getLogger(__name__)

RequestBody = Union[BaseModel, Mapping[str, Any]]


class GoPayClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient bound to the GoPay-Lite API.

    Fully compatible with httpx.AsyncClient - it can be used as an async
    context manager and all plain httpx methods keep working. API operations
    should go through ``fetch_api``, which owns the deadline and the error
    normalization.

    Usage:
        ```python
        async with GoPayClient.from_settings(Settings.from_env()) as client:
            profile = await client.fetch_api("/auth/me", authorized=True)
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        session_store: Optional[SessionStore] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        **kwargs
    ):
        """
        Initialize client.

        Args:
            base_url: API origin and prefix that endpoint paths are appended to
            session_store: Where the bearer credential is read from (default: in-memory)
            request_timeout: Hard deadline in seconds for each fetch_api call
            **kwargs: All standard httpx.AsyncClient arguments (transport, cookies, etc.)
        """
        # The deadline below is the only timeout; httpx's 5s default would undercut it.
        kwargs.setdefault("timeout", None)
        super().__init__(base_url=base_url, **kwargs)
        self.session_store = session_store if session_store is not None else MemorySessionStore()
        self.request_timeout = request_timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_store: Optional[SessionStore] = None,
        **kwargs
    ) -> "GoPayClient":
        """Build a client from resolved settings, defaulting to the durable store."""
        return cls(
            base_url=settings.api_base_url,
            session_store=session_store or DotenvSessionStore(settings.session_file),
            request_timeout=settings.request_timeout,
            **kwargs
        )

    @property
    def timeout_message(self) -> str:
        """Message carried by RequestTimeoutError, e.g. "Request timed out (8s)"."""
        return f"Request timed out ({self.request_timeout:g}s)"

    # =========================================================================
    # Core request path
    # =========================================================================

    async def fetch_api(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Optional[RequestBody] = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        authorized: bool = False,
    ) -> Any:
        """
        Perform one API call and return the decoded JSON body.

        Flow:
            1. Compose headers (JSON content type, caller overrides, bearer)
            2. Send the request under the hard deadline
            3. 204 -> None; otherwise decode JSON
            4. Non-2xx -> HTTPError; 2xx -> decoded body as-is

        Args:
            path: Endpoint path relative to the base URL (e.g. "/auth/login")
            method: HTTP method
            body: JSON body, as a mapping or a pydantic model
            headers: Extra headers; may override Content-Type but not drop it
            params: Query string parameters
            authorized: Attach the stored bearer credential

        Returns:
            Decoded JSON body, or None for 204 responses

        Raises:
            UnauthenticatedError: authorized call without a stored credential
            RequestTimeoutError: deadline elapsed; the request was cancelled
            HTTPError: response status outside 2xx
            NetworkError: transport failure or redirect loop
            DecodeError: response body cannot be decoded or is not valid JSON
        """
        request_headers = self._compose_headers(headers, authorized)
        payload = self._serialize_body(body)

        try:
            response = await asyncio.wait_for(
                super().request(
                    method,
                    path,
                    json=payload,
                    headers=request_headers,
                    params=params,
                ),
                timeout=self.request_timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s %s timed out after %ss", method, path, self.request_timeout)
            raise RequestTimeoutError(self.timeout_message) from exc
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(str(exc)) from exc
        except httpx.DecodingError as exc:
            logger.warning("%s %s returned an undecodable body: %s", method, path, exc)
            raise DecodeError(str(exc)) from exc
        except httpx.RequestError as exc:
            # Redirect loops and any other request-level failure.
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(str(exc)) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return self._handle_response(response)

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _compose_headers(
        self,
        headers: Optional[Mapping[str, str]],
        authorized: bool,
    ) -> httpx.Headers:
        """
        Merge default, caller and authorization headers.

        Caller headers are applied case-insensitively over the JSON content
        type; an empty override keeps the default. The bearer header is set
        last so a stale caller value cannot shadow it.
        """
        token = None
        if authorized:
            token = self.session_store.get()
            if not token:
                raise UnauthenticatedError("User not authenticated. Token missing.")

        merged = httpx.Headers(ClientRequestHeader().model_dump(by_alias=True, exclude_none=True))
        for key, value in (headers or {}).items():
            if value:
                merged[key] = value
        if token:
            merged["Authorization"] = ClientRequestHeader.bearer(token).authorization
        return merged

    def _serialize_body(self, body: Optional[RequestBody]) -> Optional[Any]:
        if body is None:
            return None
        if isinstance(body, BaseModel):
            return body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return dict(body)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode a response and raise HTTPError outside the 2xx range."""
        if response.status_code == 204:
            return None

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning(
                "Undecodable body from %s (status %s)", response.request.url, response.status_code
            )
            raise DecodeError(str(exc), status=response.status_code) from exc

        if not response.is_success:
            message = None
            if isinstance(data, dict):
                message = data.get("message")
            raise HTTPError(
                message or f"HTTP {response.status_code}",
                status=response.status_code,
                payload=data,
            )

        return data
