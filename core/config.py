# =============================================================================
# core/config.py  —  Process Configuration
# =============================================================================
#
# Everything the server needs from the environment, read ONCE at startup.
#
#   TAVILY_API_KEY          (required) bearer credential for Tavily
#   TAVILY_API_URL          search endpoint, default https://api.tavily.com/search
#   TAVILY_TIMEOUT_SECONDS  HTTP timeout for the one provider call, default 30
#   LOG_LEVEL               stdlib logging level name, default INFO
#
# A .env file in the working directory is loaded first (python-dotenv), so
# local development doesn't need exported variables.  Real environment
# variables win over .env values.
#
# Settings itself doesn't insist on the API key; TavilySearchClient does,
# at construction.  That keeps "no key" a single, well-defined failure.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from core.errors import ConfigurationError

DEFAULT_API_URL = "https://api.tavily.com/search"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the process configuration."""

    api_key: Optional[str]
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        """Build Settings from the environment (and .env, if present).

        Raises:
            ConfigurationError: if TAVILY_TIMEOUT_SECONDS isn't a positive number.
        """
        if load_dotenv_file:
            load_dotenv(find_dotenv(usecwd=True))

        raw_timeout = os.environ.get("TAVILY_TIMEOUT_SECONDS", "").strip()
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"TAVILY_TIMEOUT_SECONDS must be a number; got {raw_timeout!r}"
                ) from None
            if timeout <= 0:
                raise ConfigurationError("TAVILY_TIMEOUT_SECONDS must be greater than zero")

        return cls(
            api_key=os.environ.get("TAVILY_API_KEY"),
            api_url=os.environ.get("TAVILY_API_URL") or DEFAULT_API_URL,
            timeout_seconds=timeout,
            log_level=(os.environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )

    def __repr__(self) -> str:
        # Never leak the key into logs or tracebacks.
        key_state = "set" if self.api_key else "missing"
        return (
            f"Settings(api_key=<{key_state}>, api_url={self.api_url!r}, "
            f"timeout_seconds={self.timeout_seconds}, log_level={self.log_level!r})"
        )
