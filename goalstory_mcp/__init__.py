# =============================================================================
# goalstory_mcp/  —  MCP Surface
# =============================================================================
# Only mcp_server.py lives here.  It depends on goalstory/ and nothing else
# depends on it, apart from main.py.
# =============================================================================
