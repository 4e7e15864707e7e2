# =============================================================================
# agent/__init__.py
# =============================================================================
# The Google ADK agent that talks to the currency MCP server.
#
#   prompt.py          system prompt (today's date injected)
#   currency_agent.py  create_agent(): LiteLlm model + McpToolset over stdio
#
# The agent holds no currency logic of its own.  It decides which tool to
# call and explains the results; the numbers come from core/ via MCP.
# =============================================================================
