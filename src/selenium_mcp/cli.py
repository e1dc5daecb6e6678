"""Command-line entry point: ask the model about the test framework."""

import asyncio
import logging
from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown

from selenium_mcp.config import FrameworkConfig, get_config
from selenium_mcp.errors import ModelClientError, RegistryMismatchError, TranscriptError
from selenium_mcp.executor import ToolExecutor
from selenium_mcp.model_client import AnthropicModelClient
from selenium_mcp.orchestrator import SessionResult, ToolLoop
from selenium_mcp.registry import ToolRegistry

logger = logging.getLogger(__name__)

console = Console()


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_loop(config: FrameworkConfig) -> ToolLoop:
    """Wire the model client, registry and executor into a loop."""
    return ToolLoop(
        client=AnthropicModelClient(config.model),
        registry=ToolRegistry(),
        executor=ToolExecutor(config),
        max_tokens=config.model.max_tokens,
        max_iterations=config.max_iterations,
        model_timeout=config.model.timeout,
    )


async def run_session(loop: ToolLoop, message: str) -> SessionResult:
    try:
        return await loop.run(message)
    finally:
        close = getattr(loop.client, "close", None)
        if close is not None:
            await close()


@click.command()
@click.argument("message", required=False)
def main(message: Optional[str]):
    """Ask the model about the Selenium test framework.

    MESSAGE defaults to asking which tests exist and how the last run went.
    """
    config = get_config()
    configure_logging(config.debug)

    logger.info("Selenium Test Framework MCP bridge started")
    loop = build_loop(config)
    logger.info(f"Tools available: {loop.registry.names()}")

    try:
        result = asyncio.run(run_session(loop, message or config.default_prompt))
    except (ModelClientError, TranscriptError, RegistryMismatchError) as e:
        raise click.ClickException(str(e))
    except OSError as e:
        logger.error(f"Tool execution failed: {e}", exc_info=True)
        raise click.ClickException(f"Tool execution failed: {e}")

    for text in result.texts:
        console.print(Markdown(text))


if __name__ == "__main__":
    main()
