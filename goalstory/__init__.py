# =============================================================================
# goalstory/__init__.py
# =============================================================================
# This package contains the Tool Invocation Gateway for the Goal Story backend.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP surface lives in
#   goalstory_mcp/ and only calls into goalstory.dispatcher.  Everything here
#   can be exercised from a bare Python REPL (or a test) with a fake HTTP
#   transport and no MCP client at all.
#
# MODULES:
#   models.py           — dataclasses for definitions, requests and results
#   config.py           — immutable GatewayConfig (base URL, token, timeout)
#   schemas.py          — pydantic argument models + validation
#   request_builder.py  — URL/query/body composition helpers
#   step_order.py       — order keys for step sequences
#   time_settings.py    — (hour, period, utcOffset) → UTC time of day
#   catalog.py          — the 25 tool entries, in discovery order
#   backend.py          — the single HTTP exchange (httpx)
#   dispatcher.py       — tool name + arguments → ToolResult
# =============================================================================

__version__ = "0.5.0"
