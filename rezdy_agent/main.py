import asyncio
import json
import logging
import sys
from typing import Optional, TextIO, Tuple

from . import __version__
from .config import Config, setup_logging
from .mcp.mcp_server import MCPServer
from .session import AgentSession
from .tools import register_tools

logger = logging.getLogger(__name__)


async def create_server(session: Optional[AgentSession] = None) -> Tuple[MCPServer, AgentSession]:
    """Build the MCP server with every Rezdy tool registered.

    When ``REZDY_API_KEY`` is set the session is configured up front;
    otherwise clients must call ``rezdy_agent_configure`` first.
    """
    session = session or AgentSession()
    if not session.is_configured and Config.validate():
        await session.configure(Config.REZDY_API_KEY, Config.REZDY_ENVIRONMENT)

    server = MCPServer(name="rezdy-agent-mcp", version=__version__)
    register_tools(server, session)
    return server, session


async def serve_stdio(server: MCPServer, stdin: TextIO = None, stdout: TextIO = None):
    """Serve newline-delimited JSON-RPC until stdin closes."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    loop = asyncio.get_running_loop()

    while True:
        line = await loop.run_in_executor(None, stdin.readline)
        if not line:
            break
        line = line.strip()
        if not line:
            continue

        response = await server.handle_message(line)
        if response is not None:
            stdout.write(json.dumps(response) + "\n")
            stdout.flush()


async def run():
    server, session = await create_server()
    logger.info("Rezdy Agent MCP server running on stdio")
    try:
        await serve_stdio(server)
    finally:
        await session.close()


def main():
    # stdout carries protocol messages
    setup_logging(stream=sys.stderr)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
