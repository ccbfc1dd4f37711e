# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the search logic: argument parsing, the Tavily
# HTTP call, and Markdown rendering.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any other MCP machinery.
#   Every module here is plain Python plus python-dotenv, so it can be
#   imported and tested without a running server.
# =============================================================================
