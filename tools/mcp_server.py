# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (web_search)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the Tavily search adapter as an MCP tool.  WebSearchTool is a thin
#   wrapper: it hands the raw argument dict to TavilySearchClient.call_tool()
#   and returns the rendered Markdown.
#
# HOW IT WORKS (the flow):
#   1. A client (Claude Desktop, an agent framework, main.py) spawns this
#      process and speaks MCP over stdin/stdout
#   2. tools/list → FastMCP advertises "web_search" with the name, description
#      and input schema from core/registry.py, unchanged
#   3. tools/call → WebSearchTool.run() → core/tavily.py validates, defaults
#      and searches (in a worker thread, so the event loop keeps answering)
#   4. The Markdown document comes back as a single text content item
#
# ERRORS:
#   Every SearchError (bad arguments, Tavily error, network failure) is
#   re-raised as a FastMCP ToolError carrying the same message.  The client
#   gets an error result; this process keeps serving.
#
#   A missing TAVILY_API_KEY is different: main() refuses to start.
#
# RUNNING THIS SERVER:
#     a) python -m tools.mcp_server
#     b) tavily-mcp-server            (console script from pyproject.toml)
# =============================================================================

import copy
import json
import logging
import sys
from typing import Any, Optional

import anyio.to_thread
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from pydantic import PrivateAttr

from core.config import Settings
from core.errors import ConfigurationError, SearchError
from core.registry import WEB_SEARCH_TOOL, list_tools
from core.tavily import TavilySearchClient

SERVER_NAME = "tavily-search"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout IS the MCP transport.  A stray log line on
# stdout would corrupt the JSON-RPC stream and break the client.
#
# ANSI colours make tool traffic easy to scan:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status
#     - RED for failures
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log a one-line summary of the rendered document in GREEN, then return it."""
    heading = text.split("\n", 1)[0]
    logging.info(f"{_GREEN}  ← {tool_name} response: {len(text)} chars, {heading}{_RESET}")
    return text


def _log_error(tool_name: str, error: Exception) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} failed: {error}{_RESET}")


# =============================================================================
# The web_search tool
# =============================================================================
# FastMCP would normally derive the input schema from a function signature.
# We advertise the registry's schema verbatim instead, and let
# parse_search_args() do the validating and defaulting, so the MCP path and
# direct callers of TavilySearchClient follow one policy.
# =============================================================================
class WebSearchTool(Tool):
    """web_search bound to one TavilySearchClient."""

    _client: TavilySearchClient = PrivateAttr()

    @classmethod
    def for_client(cls, client: TavilySearchClient) -> "WebSearchTool":
        tool = cls(
            name=WEB_SEARCH_TOOL.name,
            description=WEB_SEARCH_TOOL.description,
            parameters=copy.deepcopy(WEB_SEARCH_TOOL.input_schema),
        )
        tool._client = client
        return tool

    async def run(self, arguments: Optional[dict[str, Any]]) -> ToolResult:
        _log_request(self.name, arguments or {})

        # urlopen blocks; keep it off the event loop so pings still get answers.
        try:
            text = await anyio.to_thread.run_sync(self._client.call_tool, self.name, arguments)
        except SearchError as e:
            _log_error(self.name, e)
            raise ToolError(str(e)) from e

        _log_status(f"Searched via {self._client.api_url}")
        return ToolResult(content=_log_response(self.name, text))


# =============================================================================
# Server factory
# =============================================================================
def create_server(client: TavilySearchClient) -> FastMCP:
    """Build the FastMCP server with web_search bound to ``client``.

    The client is constructed (and its API key checked) before this is
    called, so a server instance always has a working adapter behind it.
    """
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    mcp.add_tool(WebSearchTool.for_client(client))
    return mcp


# =============================================================================
# Entry point
# =============================================================================
def main() -> None:
    """Load configuration, build the adapter, and serve MCP on stdio.

    Exits with status 1 if the configuration is invalid (e.g. no API key).
    """
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        configure_logging()
        logging.error(f"{_RED}Configuration error: {e}{_RESET}")
        sys.exit(1)

    configure_logging(settings.log_level)
    logging.debug(f"Loaded {settings!r}")

    try:
        client = TavilySearchClient.from_settings(settings)
    except ConfigurationError as e:
        logging.error(f"{_RED}Configuration error: {e}{_RESET}")
        sys.exit(1)

    server = create_server(client)
    logging.info(f"Registered tools: {json.dumps([tool.name for tool in list_tools()])}")
    # Printed regardless of LOG_LEVEL; process supervisors watch for it.
    print("Tavily MCP server running on stdio", file=sys.stderr, flush=True)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
