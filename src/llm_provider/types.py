"""
Normalized request/response shapes shared by every transport.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Role(str, Enum):
    """Message roles in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in a conversation."""

    role: Role
    content: str

    def to_dict(self) -> dict:
        """Convert to dictionary format for API requests."""
        return {"role": Role(self.role).value, "content": self.content}

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=Role.ASSISTANT, content=content)

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Build a message from a {"role", "content"} mapping."""
        return cls(role=Role(data["role"]), content=data["content"])


@dataclass(frozen=True)
class Request:
    """One provider call. Built per call and never mutated."""

    model: str
    messages: tuple[Message, ...]
    max_tokens: int
    stream: bool = False

    @classmethod
    def build(
        cls,
        model: str,
        messages: Iterable[Message | dict],
        max_tokens: int,
        stream: bool = False,
    ) -> "Request":
        normalized = tuple(
            m if isinstance(m, Message) else Message.from_dict(m) for m in messages
        )
        return cls(model=model, messages=normalized, max_tokens=max_tokens, stream=stream)


@dataclass(frozen=True)
class Response:
    """Result of a non-streaming call."""

    text: str
    id: str | None = None
    model: str | None = None
    stop_reason: str | None = None
    output_tokens: int | None = None


class StreamEventKind(str, Enum):
    DELTA = "delta"
    TERMINAL = "terminal"
    OTHER = "other"


@dataclass(frozen=True)
class StreamEvent:
    """One decoded streaming event; `text` is only set for deltas."""

    kind: StreamEventKind
    text: str = field(default="")

    @classmethod
    def delta(cls, text: str) -> "StreamEvent":
        return cls(kind=StreamEventKind.DELTA, text=text)

    @classmethod
    def terminal(cls) -> "StreamEvent":
        return cls(kind=StreamEventKind.TERMINAL)

    @classmethod
    def other(cls) -> "StreamEvent":
        return cls(kind=StreamEventKind.OTHER)
