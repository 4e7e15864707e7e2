# =============================================================================
# tools/__init__.py
# =============================================================================
# The MCP layer.  tools/mcp_server.py registers one FastMCP tool per entry in
# core.currency_tools.TOOL_SPECS and forwards every call to
# CurrencyTools.call_tool().
#
# What tools/ does NOT do:
#   - validate arguments, call HTTP, or format output (that is core/)
#   - know about the ADK agent (that is agent/)
# =============================================================================
