# =============================================================================
# core/tavily.py  —  Search Adapter (Tavily REST client)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Executes one web search on behalf of a tool caller:
#     1. parse_search_args()  → validated, defaulted SearchRequest
#     2. _post_json()         → ONE HTTPS POST to Tavily, bearer auth
#     3. SearchResponse.from_payload() + format_search_response()
#                             → the Markdown text handed back to the client
#
# THE NETWORK-CALL BOUNDARY:
#   _post_json() is the only code that touches the network, and it only ever
#   exits in one of three ways:
#     - returns the decoded JSON object              (success)
#     - raises ProviderError                         (Tavily sent an error body)
#     - raises TransportError                        (everything else)
#   Callers never inspect HTTP errors themselves.
#
# WHAT THIS MODULE DOES NOT DO:
#   No retries, no caching, no streaming, no re-ranking.  One call in, one
#   request out, one document (or one error) back.
# =============================================================================

import json
import urllib.error
import urllib.request
from typing import Any, Optional

from core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, Settings
from core.errors import ConfigurationError, ProviderError, TransportError
from core.formatting import format_search_response
from core.models import SearchRequest, SearchResponse, parse_search_args
from core.registry import get_tool


class TavilySearchClient:
    """Stateless adapter between MCP tool calls and the Tavily search API.

    The API key is captured once, here, and never re-read from the
    environment.  Without a key the client can't be constructed at all.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError("TAVILY_API_KEY environment variable is required")
        self._api_key = api_key.strip()
        self._api_url = api_url
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TavilySearchClient":
        return cls(
            api_key=settings.api_key,
            api_url=settings.api_url,
            timeout_seconds=settings.timeout_seconds,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    def __repr__(self) -> str:
        return f"TavilySearchClient(api_url={self._api_url!r})"

    # -------------------------------------------------------------------------
    # Tool dispatch
    # -------------------------------------------------------------------------
    def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> str:
        """Run the named tool with a raw argument bag.

        Raises:
            UnknownToolError: if ``name`` isn't a registered tool.
        """
        # web_search is the only registered tool; get_tool rejects the rest.
        get_tool(name)
        return self.handle_web_search(arguments)

    def handle_web_search(self, arguments: Optional[dict[str, Any]]) -> str:
        """Validate arguments, search, and render the result as Markdown.

        Raises:
            ValidationError: bad arguments (nothing is sent to Tavily).
            ProviderError: Tavily answered with a structured error.
            TransportError: any other failure reaching Tavily.
        """
        request = parse_search_args(arguments)
        response = self.search(request)
        return format_search_response(response, include_answer=request.include_answer)

    # -------------------------------------------------------------------------
    # Provider call
    # -------------------------------------------------------------------------
    def search(self, request: SearchRequest) -> SearchResponse:
        """Send one search request to Tavily and parse the reply."""
        payload = self._post_json(request.to_payload())
        try:
            return SearchResponse.from_payload(payload, fallback_query=request.query)
        except (AttributeError, TypeError) as e:
            # e.g. "results" isn't a list of objects
            raise TransportError(f"malformed response from Tavily: {e}") from e

    def _post_json(self, body: dict[str, Any]) -> dict[str, Any]:
        http_request = urllib.request.Request(
            self._api_url,
            data=json.dumps(body).encode("utf-8"),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
            method="POST",
        )

        try:
            with urllib.request.urlopen(http_request, timeout=self._timeout_seconds) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            message = _provider_error_message(_read_error_body(e))
            if message is not None:
                raise ProviderError(message, status_code=e.code) from e
            raise TransportError(e) from e
        except Exception as e:
            # URLError, socket timeouts, SSL errors, anything unexpected.
            raise TransportError(_describe(e)) from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise TransportError(f"invalid JSON from Tavily: {e}") from e
        if not isinstance(data, dict):
            raise TransportError("invalid JSON from Tavily: expected an object")
        return data


# =============================================================================
# Helpers
# =============================================================================
def _read_error_body(error: urllib.error.HTTPError) -> bytes:
    try:
        return error.read() or b""
    except OSError:
        return b""


def _provider_error_message(body: bytes) -> Optional[str]:
    """Pull Tavily's own error message out of an error response body.

    Tavily has answered in a few shapes over time:
        {"error": "Invalid API key"}
        {"detail": {"error": "Invalid API key"}}
        {"detail": "Invalid API key"}

    Returns None when the body isn't one of these.
    """
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, str) and error:
        return error

    detail = data.get("detail")
    if isinstance(detail, dict):
        error = detail.get("error")
        if isinstance(error, str) and error:
            return error
    if isinstance(detail, str) and detail:
        return detail
    return None


def _describe(error: Exception) -> str:
    # URLError wraps the real cause in .reason
    if isinstance(error, urllib.error.URLError) and error.reason is not None:
        return str(error.reason)
    return str(error) or type(error).__name__
