"""
Shared fixtures: an in-memory session store and a factory for GoPayClient
instances wired to an httpx.MockTransport that records every request.
"""

import inspect
import json
from typing import Any, Callable, List, Optional

import httpx
import pytest

from gopay_client.clients.http_client import GoPayClient
from gopay_client.schemas.accounts import Account
from gopay_client.sessions.store import MemorySessionStore

BASE_URL = "http://example.org/api/v1"
MOCK_TOKEN = "eyJ.mock.token"


class RecordingHandler:
    """MockTransport handler that keeps every request it sees."""

    def __init__(self, handler: Callable) -> None:
        self.handler = handler
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def json_response(status: int, body: Any = None, **kwargs) -> Callable:
    """Handler that always answers with ``status`` and a JSON ``body``."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body if body is not None else {}, **kwargs)
    return handler


def make_account(balance: int = 1000, transactions: Optional[list] = None) -> Account:
    return Account(
        display_name="user@example.com",
        email="user@example.com",
        balance=balance,
        transactions=transactions or [],
    )


@pytest.fixture
def store():
    """Provide an empty in-memory session store."""
    return MemorySessionStore()


@pytest.fixture
def authed_store():
    """Provide a session store holding a valid-looking token."""
    return MemorySessionStore(token=MOCK_TOKEN)


@pytest.fixture
def make_client():
    """Provide a factory returning (client, recorder) for a given handler."""
    def factory(handler: Callable, session_store=None, **kwargs):
        recorder = RecordingHandler(handler)
        client = GoPayClient(
            base_url=BASE_URL,
            session_store=session_store if session_store is not None else MemorySessionStore(),
            transport=httpx.MockTransport(recorder),
            **kwargs
        )
        return client, recorder
    return factory
