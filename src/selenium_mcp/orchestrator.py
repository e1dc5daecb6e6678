"""
Tool-calling orchestration loop.

One ToolLoop instance drives one session:

    AWAITING_MODEL -> AWAITING_TOOLS -> AWAITING_MODEL -> ... -> DONE

Each round sends the transcript and tool declarations to the model. A
natural completion ends the session; otherwise every requested tool runs
(concurrently, joined before the next round) and the results are appended as
a single turn.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from selenium_mcp.errors import ModelClientError
from selenium_mcp.executor import ToolExecutor
from selenium_mcp.model_client import ModelClient, ModelResponse
from selenium_mcp.registry import ToolRegistry
from selenium_mcp.transcript import ToolCallRequest, ToolCallResult, Transcript

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    AWAITING_MODEL = "awaiting_model"
    AWAITING_TOOLS = "awaiting_tools"
    DONE = "done"


class StopReason(str, Enum):
    """Why a session ended."""
    COMPLETED = "completed"
    NO_TOOL_CALLS = "no_tool_calls"
    MAX_ITERATIONS = "max_iterations"


@dataclass
class SessionResult:
    """Outcome of one session."""
    texts: List[str]
    stop_reason: StopReason
    iterations: int
    transcript: Transcript

    @property
    def text(self) -> str:
        return "\n".join(self.texts)


class ToolLoop:
    """Runs the model/tool conversation for a single session."""

    def __init__(
        self,
        client: ModelClient,
        registry: ToolRegistry,
        executor: ToolExecutor,
        max_tokens: int = 4096,
        max_iterations: int = 25,
        model_timeout: Optional[float] = None,
    ):
        registry.verify(executor.handler_names)

        self.client = client
        self.registry = registry
        self.executor = executor
        self.max_tokens = max_tokens
        self.max_iterations = max_iterations
        self.model_timeout = model_timeout
        self.state = LoopState.AWAITING_MODEL

    async def run(self, user_message: str) -> SessionResult:
        """
        Run a session to completion.

        Args:
            user_message: The initial user turn

        Returns:
            SessionResult with the final text blocks and the transcript

        Raises:
            ModelClientError: If the model is unreachable or times out
        """
        transcript = Transcript.start(user_message)
        self.state = LoopState.AWAITING_MODEL
        tools = self.registry.to_anthropic()

        for iteration in range(1, self.max_iterations + 1):
            logger.debug(f"Model round {iteration} ({len(transcript)} turns)")
            response = await self._request_model(transcript, tools)
            turn = transcript.add_assistant_content(response.blocks)

            if response.is_complete:
                return self._finish(transcript, StopReason.COMPLETED, iteration)

            requests = turn.tool_calls
            if not requests:
                logger.warning(
                    f"Model stopped with {response.stop_reason!r} and no tool calls; ending session"
                )
                return self._finish(transcript, StopReason.NO_TOOL_CALLS, iteration)

            self.state = LoopState.AWAITING_TOOLS
            results = await self._execute_all(requests)
            transcript.add_tool_results(results)
            self.state = LoopState.AWAITING_MODEL

        logger.warning(f"Reached {self.max_iterations} model rounds without completion")
        return self._finish(transcript, StopReason.MAX_ITERATIONS, self.max_iterations)

    async def _request_model(self, transcript: Transcript, tools: List[Dict[str, Any]]) -> ModelResponse:
        request = self.client.create(
            messages=transcript.to_messages(),
            tools=tools,
            max_tokens=self.max_tokens,
        )
        try:
            return await asyncio.wait_for(request, timeout=self.model_timeout)
        except asyncio.TimeoutError as e:
            raise ModelClientError(f"Model request timed out after {self.model_timeout}s") from e

    async def _execute_all(self, requests: List[ToolCallRequest]) -> List[ToolCallResult]:
        """Run one batch of tool calls concurrently and collect every result."""
        return list(await asyncio.gather(*(self._execute_one(r) for r in requests)))

    async def _execute_one(self, request: ToolCallRequest) -> ToolCallResult:
        logger.info(f"Executing tool: {request.name}")
        outcome = await self.executor.execute(request.name, request.arguments)
        return ToolCallResult(
            request_id=request.id,
            payload=outcome.payload,
            is_error=outcome.is_error,
        )

    def _finish(self, transcript: Transcript, reason: StopReason, iterations: int) -> SessionResult:
        self.state = LoopState.DONE
        last = transcript.last
        texts = [block.text for block in getattr(last, "text_blocks", [])]
        logger.info(f"Session finished ({reason.value}) after {iterations} model round(s)")
        return SessionResult(
            texts=texts,
            stop_reason=reason,
            iterations=iterations,
            transcript=transcript,
        )
