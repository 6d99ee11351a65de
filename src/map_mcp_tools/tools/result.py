"""Tool outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    """Tool call accepted. `data` is a confirmation for the model."""

    data: str | None = None

    @property
    def success(self) -> bool:
        return True

    def to_dict(self) -> dict:
        out: dict = {"status": "success"}
        if self.data is not None:
            out["data"] = self.data
        return out


@dataclass(frozen=True)
class Error:
    """Tool call rejected or failed."""

    message: str
    code: str | None = None

    @property
    def success(self) -> bool:
        return False

    def to_dict(self) -> dict:
        out: dict = {"status": "error", "message": self.message}
        if self.code is not None:
            out["code"] = self.code
        return out


ToolOutcome = Union[Success, Error]


@dataclass
class ToolCallResult:
    """Outcome of one tool call from a model response."""

    tool_name: str
    call_id: str
    outcome: ToolOutcome

    @property
    def success(self) -> bool:
        return self.outcome.success

    @property
    def content(self) -> str:
        """Text fed back to the model."""
        if isinstance(self.outcome, Success):
            return self.outcome.data or "Success"
        return f"Error: {self.outcome.message}"

    def to_content_block(self) -> dict:
        """Return an Anthropic `tool_result` content block."""
        block = {
            "type": "tool_result",
            "tool_use_id": self.call_id,
            "content": self.content,
        }
        if not self.success:
            block["is_error"] = True
        return block

    def to_openai_message(self) -> dict:
        """Return an OpenAI `tool` role message."""
        return {
            "role": "tool",
            "tool_call_id": self.call_id,
            "content": self.content,
        }
