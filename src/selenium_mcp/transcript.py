"""
Conversation transcript for one tool-calling session.

Turns are a closed union (UserText, AssistantContent, ToolResults) and
assistant content blocks are a closed union (TextBlock, ToolCallRequest).
The Transcript only ever grows and rejects turns appended out of phase.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union

from selenium_mcp.errors import TranscriptError


# =============================================================================
# Content Blocks
# =============================================================================

@dataclass(frozen=True)
class TextBlock:
    """Plain text produced by the model."""
    text: str


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation requested by the model."""
    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


ContentBlock = Union[TextBlock, ToolCallRequest]


@dataclass(frozen=True)
class ToolCallResult:
    """Result of one ToolCallRequest; ``request_id`` pairs it to the request."""
    request_id: str
    payload: str
    is_error: bool = False


# =============================================================================
# Turns
# =============================================================================

@dataclass(frozen=True)
class UserText:
    text: str


@dataclass(frozen=True)
class AssistantContent:
    blocks: Tuple[ContentBlock, ...]

    @property
    def text_blocks(self) -> List[TextBlock]:
        return [b for b in self.blocks if isinstance(b, TextBlock)]

    @property
    def tool_calls(self) -> List[ToolCallRequest]:
        return [b for b in self.blocks if isinstance(b, ToolCallRequest)]


@dataclass(frozen=True)
class ToolResults:
    results: Tuple[ToolCallResult, ...]


Turn = Union[UserText, AssistantContent, ToolResults]


class Phase(str, Enum):
    """Which kind of turn the transcript accepts next."""
    EMPTY = "empty"
    AWAITING_MODEL = "awaiting_model"
    AWAITING_TOOLS = "awaiting_tools"


class Transcript:
    """
    Ordered, append-only turn history.

    Phases:
        EMPTY -> (UserText) -> AWAITING_MODEL
        AWAITING_MODEL -> (AssistantContent) -> AWAITING_TOOLS
        AWAITING_TOOLS -> (ToolResults) -> AWAITING_MODEL

    A ToolResults turn must answer exactly the tool calls of the assistant
    turn before it.
    """

    def __init__(self):
        self._turns: List[Turn] = []
        self._phase = Phase.EMPTY

    @classmethod
    def start(cls, user_text: str) -> "Transcript":
        transcript = cls()
        transcript.add_user_text(user_text)
        return transcript

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def last(self) -> Turn:
        if not self._turns:
            raise TranscriptError("Transcript is empty")
        return self._turns[-1]

    def add_user_text(self, text: str) -> UserText:
        self._expect(Phase.EMPTY, "user text")
        turn = UserText(text)
        self._turns.append(turn)
        self._phase = Phase.AWAITING_MODEL
        return turn

    def add_assistant_content(self, blocks: Sequence[ContentBlock]) -> AssistantContent:
        self._expect(Phase.AWAITING_MODEL, "assistant content")
        turn = AssistantContent(tuple(blocks))
        ids = [call.id for call in turn.tool_calls]
        if len(ids) != len(set(ids)):
            raise TranscriptError(f"Duplicate tool call ids in assistant turn: {ids}")
        self._turns.append(turn)
        self._phase = Phase.AWAITING_TOOLS
        return turn

    def add_tool_results(self, results: Sequence[ToolCallResult]) -> ToolResults:
        self._expect(Phase.AWAITING_TOOLS, "tool results")
        previous = self._turns[-1]
        if not isinstance(previous, AssistantContent):
            raise TranscriptError("Tool results must follow an assistant turn")

        requested = [call.id for call in previous.tool_calls]
        answered = [result.request_id for result in results]
        if len(answered) != len(requested) or set(answered) != set(requested):
            raise TranscriptError(
                f"Tool results {sorted(answered)} do not answer requests {sorted(requested)}"
            )

        turn = ToolResults(tuple(results))
        self._turns.append(turn)
        self._phase = Phase.AWAITING_MODEL
        return turn

    def _expect(self, phase: Phase, what: str) -> None:
        if self._phase != phase:
            raise TranscriptError(f"Cannot append {what} while transcript is {self._phase.value}")

    # =========================================================================
    # Wire format
    # =========================================================================

    def to_messages(self) -> List[Dict[str, Any]]:
        """Render turns as Messages API ``messages``."""
        messages: List[Dict[str, Any]] = []
        for turn in self._turns:
            if isinstance(turn, UserText):
                messages.append({"role": "user", "content": turn.text})
            elif isinstance(turn, AssistantContent):
                messages.append({"role": "assistant", "content": [_block_to_wire(b) for b in turn.blocks]})
            elif isinstance(turn, ToolResults):
                messages.append({
                    "role": "user",
                    "content": [
                        {
                            "type": "tool_result",
                            "tool_use_id": result.request_id,
                            "content": result.payload,
                            "is_error": result.is_error,
                        }
                        for result in turn.results
                    ],
                })
        return messages


def _block_to_wire(block: ContentBlock) -> Dict[str, Any]:
    if isinstance(block, TextBlock):
        return {"type": "text", "text": block.text}
    return {"type": "tool_use", "id": block.id, "name": block.name, "input": block.arguments}
