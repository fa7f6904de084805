"""
Test suite for the GoPay transport client.
Tests: URL/header composition, bearer attachment, response decoding,
error normalization and the hard request deadline.
"""
import asyncio
import time

import httpx
import pytest

from conftest import BASE_URL, MOCK_TOKEN, json_response
from gopay_client.engine.exceptions import (
    DecodeError,
    ErrorKind,
    HTTPError,
    NetworkError,
    RequestTimeoutError,
    UnauthenticatedError,
)
from gopay_client.schemas.https import RefreshRequest


async def never_responds(request: httpx.Request) -> httpx.Response:
    await asyncio.sleep(3600)
    return httpx.Response(200, json={})


class TestRequestComposition:
    """Test how fetch_api builds the outgoing request."""

    @pytest.mark.asyncio
    async def test_path_is_appended_to_base_url(self, make_client):
        client, recorder = make_client(json_response(200, {"ok": True}))
        async with client:
            data = await client.fetch_api("/auth/login", method="POST", body={"email": "a@b.c"})

        assert data == {"ok": True}
        assert str(recorder.last.url) == f"{BASE_URL}/auth/login"
        assert recorder.last.method == "POST"
        assert recorder.last_json() == {"email": "a@b.c"}

    @pytest.mark.asyncio
    async def test_method_defaults_to_get_without_body(self, make_client):
        client, recorder = make_client(json_response(200, {}))
        async with client:
            await client.fetch_api("/auth/me")

        assert recorder.last.method == "GET"
        assert recorder.last.content == b""

    @pytest.mark.asyncio
    async def test_default_content_type_is_json(self, make_client):
        client, recorder = make_client(json_response(200, {}))
        async with client:
            await client.fetch_api("/auth/me")

        assert recorder.last.headers["Content-Type"] == "application/json"
        assert "Authorization" not in recorder.last.headers

    @pytest.mark.asyncio
    async def test_caller_headers_override_but_never_remove_content_type(self, make_client):
        client, recorder = make_client(json_response(200, {}))
        async with client:
            await client.fetch_api("/a", headers={"content-type": "application/vnd.api+json", "X-Trace": "1"})
            overridden = recorder.last
            await client.fetch_api("/b", headers={"Content-Type": ""})
            emptied = recorder.last

        assert overridden.headers["Content-Type"] == "application/vnd.api+json"
        assert overridden.headers["X-Trace"] == "1"
        assert emptied.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_pydantic_body_is_serialized_by_alias(self, make_client):
        client, recorder = make_client(json_response(200, {}))
        async with client:
            await client.fetch_api("/auth/refresh", method="POST", body=RefreshRequest(refresh_token="r1"))

        assert recorder.last_json() == {"refreshToken": "r1"}

    @pytest.mark.asyncio
    async def test_query_params_are_encoded(self, make_client):
        client, recorder = make_client(json_response(200, {}))
        async with client:
            await client.fetch_api("/auth/verify-email", params={"token": "a b&c"})

        assert recorder.last.url.params["token"] == "a b&c"

    @pytest.mark.asyncio
    async def test_cookies_are_sent_back(self, make_client):
        def handler(request):
            return httpx.Response(200, json={}, headers={"Set-Cookie": "sid=abc123; Path=/"})

        client, recorder = make_client(handler)
        async with client:
            await client.fetch_api("/auth/login", method="POST", body={})
            await client.fetch_api("/auth/me")

        assert "sid=abc123" in recorder.last.headers.get("Cookie", "")


class TestAuthorization:
    """Test bearer attachment from the session store."""

    @pytest.mark.asyncio
    async def test_authorized_call_attaches_bearer(self, make_client, authed_store):
        client, recorder = make_client(json_response(200, {}), session_store=authed_store)
        async with client:
            await client.fetch_api("/auth/me", authorized=True)

        assert recorder.last.headers["Authorization"] == f"Bearer {MOCK_TOKEN}"

    @pytest.mark.asyncio
    async def test_caller_cannot_shadow_bearer(self, make_client, authed_store):
        client, recorder = make_client(json_response(200, {}), session_store=authed_store)
        async with client:
            await client.fetch_api("/auth/me", headers={"Authorization": "Bearer stale"}, authorized=True)

        assert recorder.last.headers["Authorization"] == f"Bearer {MOCK_TOKEN}"

    @pytest.mark.asyncio
    async def test_authorized_call_without_token_makes_no_request(self, make_client, store):
        client, recorder = make_client(json_response(200, {}), session_store=store)
        async with client:
            with pytest.raises(UnauthenticatedError) as exc_info:
                await client.fetch_api("/auth/me", authorized=True)

        assert recorder.requests == []
        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED


class TestResponseHandling:
    """Test decoding and HTTP error normalization."""

    @pytest.mark.asyncio
    async def test_204_returns_none_without_decoding(self, make_client):
        def handler(request):
            return httpx.Response(204, content=b"definitely not json")

        client, _ = make_client(handler)
        async with client:
            assert await client.fetch_api("/auth/logout", method="POST") is None

    @pytest.mark.asyncio
    async def test_success_body_is_returned_as_is(self, make_client):
        body = {"token": "t", "extra": [1, 2, {"nested": None}]}
        client, _ = make_client(json_response(201, body))
        async with client:
            assert await client.fetch_api("/pay", method="POST", body={}) == body

    @pytest.mark.asyncio
    async def test_non_2xx_carries_message_status_and_payload(self, make_client):
        body = {"message": "card declined"}
        client, _ = make_client(json_response(402, body))
        async with client:
            with pytest.raises(HTTPError) as exc_info:
                await client.fetch_api("/pay", method="POST", body={})

        error = exc_info.value
        assert error.kind is ErrorKind.HTTP_ERROR
        assert error.message == "card declined"
        assert error.status == 402
        assert error.payload == body

    @pytest.mark.asyncio
    async def test_missing_message_falls_back_to_status(self, make_client):
        client, _ = make_client(json_response(500, {}))
        async with client:
            with pytest.raises(HTTPError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.message == "HTTP 500"
        assert exc_info.value.payload == {}

    @pytest.mark.asyncio
    async def test_non_object_error_body_falls_back_to_status(self, make_client):
        client, _ = make_client(json_response(503, ["down"]))
        async with client:
            with pytest.raises(HTTPError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.message == "HTTP 503"
        assert exc_info.value.payload == ["down"]

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self, make_client):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        client, _ = make_client(handler)
        async with client:
            with pytest.raises(DecodeError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.status == 200
        assert exc_info.value.message
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = make_client(handler)
        async with client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.message == "connection refused"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_broken_content_encoding_raises_decode_error(self, make_client):
        def handler(request):
            return httpx.Response(200, content=b"not gzip at all", headers={"Content-Encoding": "gzip"})

        client, _ = make_client(handler)
        async with client:
            with pytest.raises(DecodeError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.kind is ErrorKind.DECODE_ERROR
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_redirect_loop_raises_network_error(self, make_client):
        def handler(request):
            return httpx.Response(302, headers={"Location": f"{BASE_URL}/auth/me"})

        client, recorder = make_client(handler, follow_redirects=True, max_redirects=2)
        async with client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_api("/auth/me")

        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)
        assert len(recorder.requests) == 3


class TestDeadline:
    """Test the hard per-request deadline."""

    def test_default_deadline_is_eight_seconds(self):
        from gopay_client.clients.http_client import GoPayClient

        client = GoPayClient()
        assert client.request_timeout == 8.0
        assert client.timeout_message == "Request timed out (8s)"
        assert GoPayClient(request_timeout=2.5).timeout_message == "Request timed out (2.5s)"

    @pytest.mark.asyncio
    async def test_deadline_cancels_request_and_raises_timeout(self, make_client):
        client, recorder = make_client(never_responds, request_timeout=0.05)
        async with client:
            with pytest.raises(RequestTimeoutError) as exc_info:
                await client.fetch_api("/auth/me")

            assert asyncio.all_tasks() == {asyncio.current_task()}

        error = exc_info.value
        assert error.kind is ErrorKind.TIMEOUT
        assert error.message == "Request timed out (0.05s)"
        assert error.status is None
        assert error.payload is None
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_httpx_timeout_maps_to_timeout_error(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        client, _ = make_client(handler)
        async with client:
            with pytest.raises(RequestTimeoutError) as exc_info:
                await client.fetch_api("/auth/me")

        assert exc_info.value.message == "Request timed out (8s)"

    @pytest.mark.asyncio
    async def test_unresponsive_endpoint_times_out_within_bound(self, make_client):
        client, _ = make_client(never_responds)
        async with client:
            start = time.monotonic()
            with pytest.raises(RequestTimeoutError):
                await client.fetch_api("/auth/me")
            elapsed = time.monotonic() - start

            assert asyncio.all_tasks() == {asyncio.current_task()}

        assert 8.0 <= elapsed < 8.5
