"""
MCP Server implementation for the Selenium test framework tools.

Exposes the same tool registry and executor over the Model Context Protocol
(stdio transport) so an MCP host can call the tools directly.
"""

import asyncio
import logging
from typing import Any, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from selenium_mcp.config import FrameworkConfig, get_config
from selenium_mcp.executor import ToolExecutor
from selenium_mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)


def create_server(
    registry: Optional[ToolRegistry] = None,
    executor: Optional[ToolExecutor] = None,
    config: Optional[FrameworkConfig] = None,
) -> Server:
    """Create and configure the MCP server."""
    config = config or get_config()
    registry = registry or ToolRegistry()
    executor = executor or ToolExecutor(config)
    registry.verify(executor.handler_names)

    server = Server("selenium-mcp")

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return the declared tools."""
        tools = registry.declarations()
        logger.info(f"Listing {len(tools)} tools")
        return tools

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> List[TextContent]:
        """Handle tool invocation.

        Error payloads are returned as content; a spawn failure is raised so
        the server reports the call with isError set.
        """
        logger.info(f"Tool call: {name} with args: {arguments}")

        try:
            outcome = await executor.execute(name, arguments or {})
        except OSError as e:
            logger.error(f"Tool {name} failed: {e}", exc_info=True)
            raise
        return [TextContent(type="text", text=outcome.payload)]

    return server


async def run_server():
    """Run the MCP server."""
    server = create_server()
    logger.info(f"Starting Selenium MCP Server (project root: {get_config().project.root})")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    logging.basicConfig(
        level=logging.DEBUG if get_config().debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
