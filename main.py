# =============================================================================
# main.py  —  Entry Point for the Currency Assistant Agent
# =============================================================================
#
# USAGE:
#   uv run python main.py                          interactive session
#   uv run python main.py --ask "100 EUR in USD?"  one question, then exit
#   uv run python main.py --model openrouter/anthropic/claude-3.5-sonnet
#
# STARTUP SEQUENCE:
#   1. .env is loaded (model provider keys, optional FRANKFURTER_* overrides)
#   2. create_agent() builds the ADK agent, whose McpToolset spawns
#      tools/mcp_server.py as a stdio subprocess
#   3. Each question goes through the ADK Runner; tool calls are echoed as
#      they stream past, and the last text part is printed as the answer
#
# The tool server can also run alone, for any other MCP client:
#   uv run python -m tools.mcp_server
# =============================================================================

import argparse
import asyncio
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# LiteLlm picks up provider keys from the environment at construction time,
# so .env has to be loaded before the agent module builds anything.
load_dotenv()

from google.adk.runners import Runner  # noqa: E402
from google.adk.sessions import InMemorySessionService  # noqa: E402
from google.genai import types  # noqa: E402

from agent.currency_agent import create_agent  # noqa: E402

APP_NAME = "currency_assistant"
USER_ID = "demo_user"
RULE = "-" * 70
BANNER = "=" * 70
EXIT_WORDS = {"quit", "exit", "q"}


@dataclass
class AgentReply:
    """What one question produced: the tools the agent used and its final words."""

    text: str = ""
    tool_calls: list[str] = field(default_factory=list)


async def ask(runner: Runner, session_id: str, question: str) -> AgentReply:
    """Send one question through the runner and collect the streamed events."""
    message = types.Content(role="user", parts=[types.Part(text=question)])
    reply = AgentReply()

    async for event in runner.run_async(
        user_id=USER_ID, session_id=session_id, new_message=message
    ):
        for part in (event.content.parts if event.content else None) or []:
            call = getattr(part, "function_call", None)
            if call:
                reply.tool_calls.append(call.name)
                print(f"  🔧 Calling tool: {call.name}")
            if getattr(part, "text", None):
                # Later text parts supersede earlier ones; the last is the answer.
                reply.text = part.text
    return reply


def show(reply: AgentReply) -> None:
    print(RULE)
    if not reply.text:
        print("\n⚠️  The agent returned no answer. Check the MCP server log above.")
        return
    print(f"\n💱 Assistant:\n\n{reply.text}")


async def run_agent(model: Optional[str] = None, question: Optional[str] = None) -> None:
    """Start the agent, then answer ``question`` once or loop on stdin."""
    print(BANNER)
    print("  CURRENCY ASSISTANT")
    print("  Google ADK + LiteLLM + FastMCP (Frankfurter exchange rates)")
    print(BANNER)
    print("\n🔧 Starting agent and currency tool server...")

    sessions = InMemorySessionService()
    runner = Runner(agent=create_agent(model), app_name=APP_NAME, session_service=sessions)
    session = await sessions.create_session(app_name=APP_NAME, user_id=USER_ID)

    if question:
        show(await ask(runner, session.id, question))
        return

    print("✅ Ready. Ask about exchange rates or conversions ('quit' to leave).\n")
    print(RULE)

    while True:
        try:
            line = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            line = "quit"

        if line.lower() in EXIT_WORDS:
            print("\n👋 Bye!")
            return
        if line:
            print(f"\n💭 Working on it...\n{RULE}")
            show(await ask(runner, session.id, line))
            print("\n" + BANNER)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat with the Frankfurter currency assistant.")
    parser.add_argument("--model", help="LiteLLM model id (default: $CURRENCY_AGENT_MODEL)")
    parser.add_argument("--ask", dest="question", help="Answer one question and exit")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(run_agent(model=args.model, question=args.question))
