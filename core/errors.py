# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure the adapter can produce is one of these five types.  They all
# derive from SearchError so the MCP layer can catch them in one place.
#
#   ConfigurationError  → process-fatal (missing API key at startup)
#   ValidationError     → call-scoped  (bad caller arguments)
#   ProviderError       → call-scoped  (Tavily answered with an error body)
#   TransportError      → call-scoped  (network, timeout, anything else)
#   UnknownToolError    → call-scoped  (caller asked for a tool we don't have)
#
# Call-scoped errors fail ONE invocation.  The server keeps serving.
# Nothing here retries; the caller decides whether to try again.
# =============================================================================

from typing import Optional


class SearchError(Exception):
    """Base class for every error raised by the search adapter."""


class ConfigurationError(SearchError):
    """Required configuration (the API key) is missing or invalid."""


class ValidationError(SearchError):
    """Caller-supplied tool arguments are malformed."""


class ProviderError(SearchError):
    """Tavily rejected the request with a structured error body."""

    def __init__(
        self,
        provider_message: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(f"Tavily API error: {provider_message}")
        self.provider_message = provider_message
        self.status_code = status_code


class TransportError(SearchError):
    """The provider could not be reached, or answered with something unusable."""

    def __init__(self, cause: object) -> None:
        super().__init__(f"Search failed: {cause}")


class UnknownToolError(SearchError):
    """A tool name that isn't in the registry was requested."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name
