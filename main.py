# =============================================================================
# main.py  —  Smoke Test for the Tavily MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Starts the server WITHOUT an API key and checks it refuses to run
#   2. Starts the server as a real subprocess over stdio (exactly how an MCP
#      client like Claude Desktop would) and completes the MCP handshake
#   3. Lists tools and checks that web_search is advertised
#   4. Calls web_search once, but ONLY if a real TAVILY_API_KEY is set;
#      otherwise the live search is skipped
#   5. Prints a PASS / FAIL / SKIP summary and exits 1 if anything failed
#
# This is a deployment check, not a unit test.  The unit tests live in
# tests/ and never touch the network.
# =============================================================================

import asyncio
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load TAVILY_API_KEY from .env before we decide whether to run a live search.
load_dotenv()

from fastmcp import Client
from fastmcp.client.transports import StdioTransport

from core.registry import WEB_SEARCH

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
SERVER_ARGS = ["-m", "tools.mcp_server"]
PLACEHOLDER_KEY = "test-key-for-startup-test"
STARTUP_TIMEOUT_SECONDS = 10
SEARCH_TIMEOUT_SECONDS = 15
TEST_QUERIES = [
    "latest AI developments",
    "Python packaging best practices",
    "Model Context Protocol tutorial",
]


@dataclass
class CheckResult:
    name: str
    status: str                        # "PASS", "FAIL" or "SKIP"
    error: Optional[str] = None


def _server_env(api_key: Optional[str]) -> dict[str, str]:
    env = dict(os.environ)
    env.pop("TAVILY_API_KEY", None)
    if api_key:
        env["TAVILY_API_KEY"] = api_key
    return env


# =============================================================================
# Individual checks
# =============================================================================
def check_refuses_without_key() -> CheckResult:
    """The server must exit non-zero straight away when no key is configured."""
    print("\n🔑 Checking startup without TAVILY_API_KEY...")
    env = _server_env(None)
    # Keep a .env in the project root from supplying the key.
    env["TAVILY_API_KEY"] = ""
    try:
        completed = subprocess.run(
            [sys.executable, *SERVER_ARGS],
            cwd=PROJECT_ROOT,
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=STARTUP_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired:
        return CheckResult("Missing Key Rejected", "FAIL", "server kept running without a key")

    if completed.returncode != 0 and "TAVILY_API_KEY" in completed.stderr:
        print("✅ Server refused to start")
        return CheckResult("Missing Key Rejected", "PASS")
    return CheckResult(
        "Missing Key Rejected",
        "FAIL",
        f"exit code {completed.returncode}, stderr: {completed.stderr.strip()[-200:]}",
    )


async def check_list_tools(client: Client) -> CheckResult:
    print("\n🔧 Testing list tools...")
    tools = await asyncio.wait_for(client.list_tools(), STARTUP_TIMEOUT_SECONDS)
    web_search = next((tool for tool in tools if tool.name == WEB_SEARCH), None)
    if web_search is None:
        return CheckResult("List Tools", "FAIL", "web_search tool not found in tools list")
    print("✅ web_search tool found")
    print(f"   Description: {web_search.description}")
    return CheckResult("List Tools", "PASS")


async def check_web_search(client: Client, live: bool) -> CheckResult:
    print("\n🔍 Testing web search functionality...")
    if not live:
        print("⚠️  Skipping web search test - no valid TAVILY_API_KEY provided")
        return CheckResult("Web Search", "SKIP")

    result = await asyncio.wait_for(
        client.call_tool(
            WEB_SEARCH,
            {"query": TEST_QUERIES[0], "max_results": 3, "include_answer": True},
            raise_on_error=False,
        ),
        SEARCH_TIMEOUT_SECONDS,
    )
    text = result.content[0].text if result.content else ""
    if result.is_error:
        print(f"⚠️  Web search returned error: {text}")
        return CheckResult("Web Search", "FAIL", text)
    print("✅ Web search completed successfully")
    print(f"   Results contain: {text[:100]}...")
    return CheckResult("Web Search", "PASS")


# =============================================================================
# Runner
# =============================================================================
async def run_checks() -> list[CheckResult]:
    results = [check_refuses_without_key()]

    real_key = os.environ.get("TAVILY_API_KEY", "")
    live = bool(real_key) and real_key != PLACEHOLDER_KEY

    print("\n🚀 Testing server startup...")
    transport = StdioTransport(
        command=sys.executable,
        args=SERVER_ARGS,
        env=_server_env(real_key or PLACEHOLDER_KEY),
        cwd=PROJECT_ROOT,
    )
    client = Client(transport)
    try:
        async with client:
            print("✅ Server started successfully")
            results.append(CheckResult("Server Startup", "PASS"))
            results.append(await check_list_tools(client))
            results.append(await check_web_search(client, live))
    except Exception as e:
        # Report and keep going to the summary; the failure is the result.
        results.append(CheckResult("Server Session", "FAIL", f"{type(e).__name__}: {e}"))

    return results


def print_results(results: list[CheckResult]) -> int:
    print("\n📊 Test Results Summary:")
    print("========================")

    icons = {"PASS": "✅", "FAIL": "❌", "SKIP": "⚠️"}
    for result in results:
        print(f"{icons[result.status]} {result.name}: {result.status}")
        if result.error:
            print(f"   Error: {result.error}")

    passed = sum(1 for r in results if r.status == "PASS")
    failed = sum(1 for r in results if r.status == "FAIL")
    skipped = sum(1 for r in results if r.status == "SKIP")

    print("\n📈 Summary:")
    print(f"   Passed: {passed}")
    print(f"   Failed: {failed}")
    print(f"   Skipped: {skipped}")

    if failed:
        print("\n❌ Some checks failed. Please check the errors above.")
        return 1
    print("\n🎉 All checks passed! The MCP server is ready for deployment.")
    return 0


def main() -> None:
    print("🧪 Starting Tavily MCP Server checks...")
    sys.exit(print_results(asyncio.run(run_checks())))


if __name__ == "__main__":
    main()
