"""
Client configuration.

Settings are read from the process environment after layering in an optional
``.env`` file. Values already present in the environment win over the file.
"""

import logging
import math
import os
from typing import Mapping, Optional

import dotenv
from pydantic import BaseModel, Field

from .engine.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8080/api/v1"
DEFAULT_REQUEST_TIMEOUT = 8.0
DEFAULT_SESSION_FILE = ".gopay_session"

ENV_API_BASE_URL = "GOPAY_API_BASE_URL"
ENV_REQUEST_TIMEOUT = "GOPAY_REQUEST_TIMEOUT"
ENV_SESSION_FILE = "GOPAY_SESSION_FILE"


class Settings(BaseModel):
    """Resolved client settings.

    Attributes:
        api_base_url: Origin and path prefix every endpoint path is appended to.
        request_timeout: Hard per-request deadline in seconds.
        session_file: Path of the durable credential store.
    """
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    session_file: str = Field(default=DEFAULT_SESSION_FILE, min_length=1)

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str] = ".env",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: dotenv file to load first; ``None`` skips file loading.
            environ: Mapping to read from instead of ``os.environ``.

        Raises:
            ConfigurationError: If a value is present but invalid.
        """
        if env_file is not None and environ is None:
            dotenv.load_dotenv(dotenv_path=env_file)
        source = os.environ if environ is None else environ

        raw_timeout = source.get(ENV_REQUEST_TIMEOUT)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_REQUEST_TIMEOUT} must be a number, got {raw_timeout!r}"
            ) from exc
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigurationError(
                f"{ENV_REQUEST_TIMEOUT} must be a positive finite number, got {raw_timeout!r}"
            )

        base_url = source.get(ENV_API_BASE_URL) or DEFAULT_API_BASE_URL
        session_file = source.get(ENV_SESSION_FILE) or DEFAULT_SESSION_FILE

        logger.debug("Loaded settings: api_base_url=%s timeout=%ss", base_url, timeout)
        return cls(
            api_base_url=base_url,
            request_timeout=timeout,
            session_file=session_file,
        )
