# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  It:
#     1. Declares the web_search tool to FastMCP (schema from core/registry.py)
#     2. Forwards each call to TavilySearchClient
#     3. Turns SearchError into ToolError so clients see a clean error result
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate or default arguments (core/models.py does)
#   - They do NOT talk to Tavily (core/tavily.py does)
#   - They do NOT format results (core/formatting.py does)
# =============================================================================
