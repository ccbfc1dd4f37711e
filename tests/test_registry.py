import pytest

from core.errors import UnknownToolError
from core.registry import WEB_SEARCH_TOOL, get_tool, list_tools


def test_registry_advertises_only_web_search():
    assert [tool.name for tool in list_tools()] == ["web_search"]


def test_web_search_schema():
    schema = WEB_SEARCH_TOOL.input_schema
    props = schema["properties"]

    assert schema["required"] == ["query"]
    assert props["query"]["type"] == "string"
    assert props["search_depth"]["enum"] == ["basic", "advanced"]
    assert props["search_depth"]["default"] == "basic"
    assert props["include_answer"] == {
        "type": "boolean",
        "description": "Whether to include a direct answer to the query",
        "default": True,
    }
    assert (props["max_results"]["minimum"], props["max_results"]["maximum"]) == (1, 20)
    assert props["max_results"]["default"] == 5
    assert props["include_domains"]["items"] == {"type": "string"}
    assert props["exclude_domains"]["items"] == {"type": "string"}
    assert "include_raw_content" not in props


def test_to_dict_uses_wire_field_names():
    wire = WEB_SEARCH_TOOL.to_dict()

    assert wire["name"] == "web_search"
    assert wire["description"].startswith("Search the web using Tavily API.")
    assert wire["inputSchema"] is WEB_SEARCH_TOOL.input_schema


def test_get_tool_unknown_name():
    assert get_tool("web_search") is WEB_SEARCH_TOOL
    with pytest.raises(UnknownToolError, match="Unknown tool: nope") as exc_info:
        get_tool("nope")
    assert exc_info.value.tool_name == "nope"
