"""
Language model collaborator.

``ModelClient`` is the interface the loop depends on; ``AnthropicModelClient``
implements it with the Anthropic Messages API.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple

import anthropic

from selenium_mcp.config import ModelConfig
from selenium_mcp.errors import ModelClientError
from selenium_mcp.transcript import ContentBlock, TextBlock, ToolCallRequest

logger = logging.getLogger(__name__)

# Termination signal for a natural end of the model's answer
END_TURN = "end_turn"


@dataclass(frozen=True)
class ModelResponse:
    """Content blocks plus the model's termination signal."""
    blocks: Tuple[ContentBlock, ...]
    stop_reason: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.stop_reason == END_TURN

    @property
    def tool_calls(self) -> List[ToolCallRequest]:
        return [b for b in self.blocks if isinstance(b, ToolCallRequest)]


class ModelClient(Protocol):
    """Request/response interface to the model."""

    async def create(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
        max_tokens: int,
    ) -> ModelResponse:
        ...


class AnthropicModelClient:
    """ModelClient backed by ``anthropic.AsyncAnthropic``."""

    def __init__(self, config: ModelConfig, client: Optional[anthropic.AsyncAnthropic] = None):
        self.config = config
        if client is None:
            # Without an explicit key the SDK falls back to ANTHROPIC_API_KEY
            client = anthropic.AsyncAnthropic(
                api_key=config.api_key or None,
                timeout=config.timeout,
            )
        self._client = client

    async def create(
        self,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
        max_tokens: int,
    ) -> ModelResponse:
        try:
            response = await self._client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                tools=tools,
                messages=messages,
            )
        except anthropic.APIError as e:
            raise ModelClientError(f"Model request failed: {e}") from e

        logger.debug(
            f"Model response: stop_reason={response.stop_reason}, "
            f"blocks={[block.type for block in response.content]}"
        )
        return ModelResponse(
            blocks=tuple(_convert_block(block) for block in response.content if block.type in ("text", "tool_use")),
            stop_reason=response.stop_reason,
        )

    async def close(self) -> None:
        await self._client.close()


def _convert_block(block: Any) -> ContentBlock:
    if block.type == "tool_use":
        return ToolCallRequest(id=block.id, name=block.name, arguments=dict(block.input or {}))
    return TextBlock(text=block.text)
