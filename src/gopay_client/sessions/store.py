"""
Credential storage.

The bearer token is the only piece of client state that outlives a single
call. It is kept behind the SessionStore interface so the transport client,
the operations and the guard all read and clear the same entry, and tests can
swap in an in-memory fake.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

import dotenv

logger = logging.getLogger(__name__)

TOKEN_KEY = "GOPAY_TOKEN"


class SessionStore(ABC):
    """Key-value holder for the bearer credential."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored token, or None when unauthenticated."""
        pass

    @abstractmethod
    def set(self, token: str) -> None:
        """Persist ``token``, replacing any previous one."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget the token. Clearing an empty store is a no-op."""
        pass

    def is_authenticated(self) -> bool:
        return bool(self.get())


def validate_token(token: str) -> str:
    """
    Check that ``token`` can be stored and sent as a bearer header.

    Raises:
        ValueError: If the token is empty or contains control characters.
    """
    if not token:
        raise ValueError("Token must be a non-empty string")
    if not token.isprintable():
        raise ValueError("Token must not contain control characters")
    return token


class MemorySessionStore(SessionStore):
    """Process-local store; the token is lost when the process exits."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._values: Dict[str, str] = {}
        if token:
            self.set(token)

    def get(self) -> Optional[str]:
        return self._values.get(TOKEN_KEY)

    def set(self, token: str) -> None:
        self._values[TOKEN_KEY] = validate_token(token)

    def clear(self) -> None:
        self._values.pop(TOKEN_KEY, None)


class DotenvSessionStore(SessionStore):
    """
    Durable store backed by a dotenv-format file.

    The token lives under ``GOPAY_TOKEN`` next to any other keys the file
    already holds; only that key is ever written or removed. Values are
    written quoted, so ``#``, spaces and ``=`` inside a token read back
    unchanged.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def get(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        return dotenv.dotenv_values(self.path).get(TOKEN_KEY) or None

    def set(self, token: str) -> None:
        validate_token(token)
        if not os.path.exists(self.path):
            with open(self.path, "a", encoding="utf-8"):
                pass
        dotenv.set_key(self.path, TOKEN_KEY, token)
        if self.get() != token:
            dotenv.unset_key(self.path, TOKEN_KEY)
            raise ValueError(f"Token cannot be stored in {self.path} without alteration")
        logger.debug("Stored session credential in %s", self.path)

    def clear(self) -> None:
        if not os.path.exists(self.path):
            return
        if TOKEN_KEY not in dotenv.dotenv_values(self.path):
            return
        dotenv.unset_key(self.path, TOKEN_KEY)
        logger.debug("Cleared session credential from %s", self.path)
