# =============================================================================
# agent/currency_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the ADK agent that answers currency questions by calling the
#   tools served by tools/mcp_server.py.
#
#   ┌──────────────────────────┐     stdio      ┌─────────────────────────┐
#   │  ADK Agent (LiteLlm)     │ ─────────────▶ │  FastMCP server         │
#   │  prompt + McpToolset     │ ◀───────────── │  tools/mcp_server.py    │
#   └──────────────────────────┘                └─────────────────────────┘
#                                                           │
#                                                           ▼
#                                               core/ → Frankfurter API
#
# MODEL:
#   Any LiteLLM model string works.  Default: "openrouter/openai/gpt-4o".
#   Override with CURRENCY_AGENT_MODEL.  LiteLLM reads the provider key
#   (e.g., OPENROUTER_API_KEY) from the environment.
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess through `uv run`, so the server
#   process gets the project's virtual environment.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import McpToolset, StdioConnectionParams
from mcp import StdioServerParameters

from agent.prompt import get_currency_assistant_prompt
from core.currency_tools import TOOL_NAMES

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def server_command(project_root: str) -> StdioServerParameters:
    """How ADK should launch the MCP server subprocess.

    Set CURRENCY_MCP_COMMAND=python to skip uv and use the current
    interpreter instead.
    """
    mcp_server_path = os.path.join(project_root, "tools", "mcp_server.py")

    if os.environ.get("CURRENCY_MCP_COMMAND", "uv") == "python":
        return StdioServerParameters(command=sys.executable, args=[mcp_server_path])
    return StdioServerParameters(command="uv", args=["run", "python", mcp_server_path])


def create_agent(model: str | None = None) -> Agent:
    """Create the currency assistant agent.

    Args:
        model: LiteLLM model string; defaults to $CURRENCY_AGENT_MODEL or
            DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent instance.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    mcp_tools = McpToolset(
        connection_params=StdioConnectionParams(
            server_params=server_command(project_root),
            timeout=30.0,
        ),
        tool_filter=TOOL_NAMES,
    )

    return Agent(
        name="currency_assistant",
        model=LiteLlm(model=model or os.environ.get("CURRENCY_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_currency_assistant_prompt(),
        tools=[mcp_tools],
    )
