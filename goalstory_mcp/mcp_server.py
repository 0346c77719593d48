# =============================================================================
# goalstory_mcp/mcp_server.py  —  FastMCP Server (ALL catalog tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes every tool in goalstory.catalog over MCP.  Unlike a hand-written
#   @mcp.tool() per function, the tools here are DATA: each catalog entry
#   becomes one CatalogTool whose input schema is the catalog's JSON schema,
#   and whose run() hands the call to the shared Dispatcher.
#
# HOW IT WORKS (the flow):
#   1. The MCP client asks for the tool list → 25 tools in catalog order
#   2. It calls a tool by name with an argument object
#   3. FastMCP routes the call to that tool's CatalogTool.run()
#   4. run() → Dispatcher.dispatch() → exactly one HTTP call (or none)
#   5. The ToolResult text goes back as a single text content block;
#      failures are raised as ToolError so the client sees isError=true
#
# RUNNING THIS SERVER:
#   Build it with create_server(config) and call .run() (stdio transport).
#   main.py does exactly that.
# =============================================================================

import json
import logging
import sys
from typing import Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from goalstory.catalog import CATALOG, CatalogEntry, list_tools
from goalstory.config import GatewayConfig
from goalstory.dispatcher import Dispatcher
from goalstory.models import ToolResult

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  STDOUT is the MCP transport, and a stray log line on
# it would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming tool calls (name + argument keys)
#     - YELLOW for status messages
#     - GREEN for successful results
#     - RED for error results
# =============================================================================

_CYAN = "\033[36m"     # Requests
_GREEN = "\033[32m"    # Successful responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error envelopes
_RESET = "\033[0m"

LOG_FORMAT = "%(asctime)s [MCP] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr in the [MCP] format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )
    # httpx logs every request URL at INFO; ours already does that.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call in CYAN.  Only argument names, never values."""
    keys = ", ".join(sorted(arguments)) or "(no arguments)"
    logger.info(f"{_CYAN}{tool_name} called with: {keys}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the first line of the result, GREEN for success, RED for errors."""
    color = _RED if result.is_error else _GREEN
    headline = result.text.splitlines()[0] if result.text else ""
    logger.info(f"{color}  ← {tool_name}: {headline}{_RESET}")
    return result


# =============================================================================
# CatalogTool — one MCP tool backed by one catalog entry
# =============================================================================
class CatalogTool(Tool):
    """An MCP tool whose schema comes from the catalog and whose calls go
    through the Dispatcher."""

    _dispatcher: Optional[Dispatcher] = PrivateAttr(default=None)

    @classmethod
    def from_entry(cls, entry: CatalogEntry, dispatcher: Dispatcher) -> "CatalogTool":
        definition = entry.definition
        tool = cls(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        if self._dispatcher is None:
            raise ToolError(f"Tool {self.name} is not connected to a backend")

        _log_request(self.name, arguments or {})
        result = _log_response(self.name, await self._dispatcher.dispatch(self.name, arguments))

        if result.is_error:
            raise ToolError(result.text)
        return MCPToolResult(content=[TextContent(type="text", text=result.text)])


# =============================================================================
# Server factory
# =============================================================================
SERVER_NAME = "goalstory-mcp-server"


def create_server(
    config: GatewayConfig,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastMCP:
    """Create the FastMCP server with every catalog tool registered in order.

    Args:
        config: Validated backend settings.
        http_client: Optional shared httpx client (tests pass one built on
            httpx.MockTransport).

    Returns:
        A FastMCP instance ready for .run().
    """
    dispatcher = Dispatcher(config, http_client)
    mcp = FastMCP(SERVER_NAME)

    for entry in CATALOG.values():
        mcp.add_tool(CatalogTool.from_entry(entry, dispatcher))

    _log_status(f"Registered {len(CATALOG)} tools against {config.base_url}")
    return mcp


def describe_tools() -> str:
    """The tool catalog as pretty JSON (for `goalstory-mcp --list-tools`)."""
    return json.dumps([d.to_dict() for d in list_tools()], indent=2)
