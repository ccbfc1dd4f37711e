# =============================================================================
# core/registry.py  —  Tool Registry
# =============================================================================
#
# The server exposes exactly one tool: web_search.  This module owns its
# name, description and JSON input schema, so the MCP layer and any client
# code agree on one definition.
#
# The descriptor is fixed at import time.  Listing tools has no side effects
# and cannot fail.
# =============================================================================

from dataclasses import dataclass
from typing import Any

from core.errors import UnknownToolError
from core.models import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_SEARCH_DEPTH,
    MAX_MAX_RESULTS,
    MIN_MAX_RESULTS,
    SEARCH_DEPTHS,
)

WEB_SEARCH = "web_search"


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, human description and input schema of one callable tool."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return the descriptor in MCP wire shape (``inputSchema``)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


WEB_SEARCH_TOOL = ToolDescriptor(
    name=WEB_SEARCH,
    description=(
        "Search the web using Tavily API. "
        "Returns relevant search results with content snippets."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The search query to execute",
            },
            "search_depth": {
                "type": "string",
                "enum": list(SEARCH_DEPTHS),
                "description": "The depth of the search (basic or advanced)",
                "default": DEFAULT_SEARCH_DEPTH,
            },
            "include_answer": {
                "type": "boolean",
                "description": "Whether to include a direct answer to the query",
                "default": True,
            },
            "max_results": {
                "type": "number",
                "description": "Maximum number of search results to return",
                "default": DEFAULT_MAX_RESULTS,
                "minimum": MIN_MAX_RESULTS,
                "maximum": MAX_MAX_RESULTS,
            },
            "include_domains": {
                "type": "array",
                "items": {"type": "string"},
                "description": "List of domains to include in search",
            },
            "exclude_domains": {
                "type": "array",
                "items": {"type": "string"},
                "description": "List of domains to exclude from search",
            },
        },
        "required": ["query"],
    },
)

_TOOLS: dict[str, ToolDescriptor] = {WEB_SEARCH_TOOL.name: WEB_SEARCH_TOOL}


def list_tools() -> list[ToolDescriptor]:
    """Return every tool this server advertises."""
    return list(_TOOLS.values())


def get_tool(name: str) -> ToolDescriptor:
    """Look up a tool by name.

    Raises:
        UnknownToolError: if no tool is registered under ``name``.
    """
    try:
        return _TOOLS[name]
    except KeyError:
        raise UnknownToolError(name) from None
