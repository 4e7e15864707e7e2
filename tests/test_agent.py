from __future__ import annotations

import sys
from datetime import date

from agent.currency_agent import server_command
from agent.prompt import get_currency_assistant_prompt
from core.currency_tools import TOOL_NAMES


def test_prompt_injects_date_and_names_every_tool() -> None:
    prompt = get_currency_assistant_prompt(date(2025, 3, 14))

    assert "TODAY'S DATE: 2025-03-14" in prompt
    for name in TOOL_NAMES:
        assert name in prompt


def test_server_command_defaults_to_uv(monkeypatch) -> None:
    monkeypatch.delenv("CURRENCY_MCP_COMMAND", raising=False)

    params = server_command("/srv/app")

    assert params.command == "uv"
    assert params.args == ["run", "python", "/srv/app/tools/mcp_server.py"]


def test_server_command_can_use_current_interpreter(monkeypatch) -> None:
    monkeypatch.setenv("CURRENCY_MCP_COMMAND", "python")

    params = server_command("/srv/app")

    assert params.command == sys.executable
    assert params.args == ["/srv/app/tools/mcp_server.py"]
