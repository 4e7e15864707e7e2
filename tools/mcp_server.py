# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five currency tools from core/currency_tools.py over MCP.
#   Each tool is a thin wrapper: it hands the raw arguments to
#   CurrencyTools.call_tool() and turns the ToolResponse into a FastMCP
#   ToolResult.
#
# HOW IT WORKS (the flow):
#   1. An agent lists tools → FastMCP returns the five declared schemas
#   2. It calls a tool by name (e.g., "convert_currency")
#   3. FastMCP routes the call to CurrencyTool.run() below
#   4. run() executes the blocking dispatch in a worker thread
#   5. The agent receives text, with isError set for failures
#
# WHY NOT @mcp.tool()?
#   convert_currency takes a parameter literally named "from", which is a
#   Python keyword and cannot be a function argument.  So each tool is a
#   small Tool subclass carrying its JSON schema explicitly, and the
#   schema the agent sees is exactly the one in core/currency_tools.py.
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server
#     b) As a stdio subprocess of the ADK agent (agent/currency_agent.py)
# =============================================================================

import asyncio
import json
import logging
import os
import sys
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools import Tool, ToolResult
from pydantic import Field
from pydantic.json_schema import SkipJsonSchema

# Running "python tools/mcp_server.py" puts tools/ on sys.path, not the
# project root that holds core/.
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from core.config import Settings  # noqa: E402
from core.currency_tools import TOOL_SPECS, CurrencyTools, ToolResponse, ToolSpec  # noqa: E402
from core.frankfurter import FrankfurterClient  # noqa: E402

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: stdout is the MCP transport, and anything printed there would
# corrupt the JSON-RPC stream.
#
# Colors:
#   CYAN    incoming tool call + arguments
#   YELLOW  intermediate status
#   GREEN   successful response
#   RED     error response
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

# Response previews in the log are capped; the full text goes to the agent.
_LOG_PREVIEW_CHARS = 300

logger = logging.getLogger("frankfurter.mcp")


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, response: ToolResponse) -> ToolResponse:
    """Log a compact preview of the response (GREEN, or RED on error), then return it."""
    color = _RED if response.is_error else _GREEN
    preview = response.text[:_LOG_PREVIEW_CHARS].replace("\n", " ")
    if len(response.text) > _LOG_PREVIEW_CHARS:
        preview += " …"
    logger.info(f"{color}  ← {tool_name} response: {preview}{_RESET}")
    return response


# =============================================================================
# CurrencyTool — one MCP tool backed by CurrencyTools.call_tool()
# =============================================================================
class CurrencyTool(Tool):
    """A FastMCP tool whose schema and behavior come from a ToolSpec."""

    service: Annotated[SkipJsonSchema[Any], Field(exclude=True)] = None

    @classmethod
    def from_spec(cls, spec: ToolSpec, service: CurrencyTools) -> "CurrencyTool":
        return cls(
            name=spec.name,
            description=spec.description,
            parameters=spec.input_schema,
            service=service,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments)

        # The only blocking step is the HTTP call; keep it off the event loop.
        response = await asyncio.to_thread(self.service.call_tool, self.name, arguments)

        if response.truncation.truncated:
            _log_status(
                f"Output truncated ({response.truncation.original_length} characters before cut)"
            )
        _log_response(self.name, response)

        meta = {"truncation": response.truncation.to_dict()} if response.truncation.truncated else None
        return ToolResult(content=response.text, meta=meta, is_error=response.is_error)


# =============================================================================
# Server factory
# =============================================================================
def create_server(
    settings: Optional[Settings] = None,
    client: Optional[FrankfurterClient] = None,
) -> FastMCP:
    """Build a FastMCP server with all five currency tools registered.

    Args:
        settings: Defaults to Settings.from_env().
        client: Defaults to a FrankfurterClient using urllib.  Tests pass
            one with a fake transport.
    """
    settings = settings or (client.settings if client is not None else Settings.from_env())
    client = client or FrankfurterClient(settings)
    service = CurrencyTools(client, settings)

    server = FastMCP(settings.server_name, version=settings.server_version)
    for spec in TOOL_SPECS:
        server.add_tool(CurrencyTool.from_spec(spec, service))
    return server


# =============================================================================
# Server entry point
# =============================================================================
# The module-level instance is what `fastmcp run tools/mcp_server.py` and the
# ADK agent's stdio subprocess pick up.
# =============================================================================
load_dotenv()
mcp = create_server()


def main() -> None:
    configure_logging()
    logger.info(
        "%s running on stdio (tools: %s)",
        mcp.name,
        json.dumps([spec.name for spec in TOOL_SPECS]),
    )
    mcp.run()


if __name__ == "__main__":
    main()
