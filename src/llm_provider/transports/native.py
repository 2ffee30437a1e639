"""
Native transport for the Anthropic Messages API.

The response carries a top-level `content` array; requests authenticate with
an `x-api-key` header plus a fixed protocol-version header.
"""

from enum import Enum
from typing import Any

from .base import ProviderTransport
from ..exceptions import DecodeError
from ..types import Request, Response, StreamEvent

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicModel(str, Enum):
    """Well-known model identifiers."""

    HAIKU = "claude-3-haiku-20240307"
    SONNET = "claude-3-5-sonnet-20241022"
    OPUS = "claude-3-opus-20240229"


class NativeTransport(ProviderTransport):
    """
    Transport for the Anthropic Messages API.

    Stream events of type `content_block_delta` carry text; `message_stop`
    ends the stream.
    """

    env_var = "ANTHROPIC_API_KEY"

    def __init__(self, api_key: str | None, api_url: str = ANTHROPIC_API_URL):
        """
        Initialize the transport.

        Args:
            api_key: Anthropic API key
            api_url: Messages endpoint (override for proxies and tests)
        """
        super().__init__(api_key)
        self.api_url = api_url

    @property
    def provider_name(self) -> str:
        return "Anthropic"

    @property
    def url(self) -> str:
        return self.api_url

    @property
    def probe_model(self) -> str:
        return AnthropicModel.HAIKU.value

    def _get_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _build_body(self, request: Request) -> dict[str, Any]:
        return {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": [m.to_dict() for m in request.messages],
            "stream": request.stream,
        }

    def decode_sync(self, body: bytes) -> Response:
        data = self._load_json(body)
        content = data.get("content")
        if not isinstance(content, list):
            raise DecodeError("decode response: missing content array", provider=self.provider_name)

        text = ""
        if content:
            first = content[0]
            if not isinstance(first, dict):
                raise DecodeError("decode response: malformed content item", provider=self.provider_name)
            text = first.get("text") or ""

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else {}
        return Response(
            text=text,
            id=data.get("id"),
            model=data.get("model"),
            stop_reason=data.get("stop_reason"),
            output_tokens=usage.get("output_tokens"),
        )

    def decode_stream_line(self, payload: str) -> StreamEvent:
        data = self._load_json(payload)
        event_type = data.get("type")

        if event_type == "error":
            self._raise_stream_error(data)
        if event_type == "message_stop":
            return StreamEvent.terminal()
        if event_type == "content_block_delta":
            delta = data.get("delta")
            if isinstance(delta, dict) and delta.get("text"):
                return StreamEvent.delta(delta["text"])
        return StreamEvent.other()
