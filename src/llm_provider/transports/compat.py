"""
OpenAI-compatible transport.

One wire shape (a `choices` array, bearer-token auth) shared by several
vendors that differ only in base URL.
"""

from enum import Enum
from typing import Any

from .base import ProviderTransport
from ..exceptions import ConfigurationError, DecodeError
from ..types import Request, Response, StreamEvent


class Vendor(str, Enum):
    """Backends reachable through the OpenAI-compatible protocol."""

    MOONSHOT = "moonshot"
    DEEPSEEK = "deepseek"
    OPENAI = "openai"

    @property
    def base_url(self) -> str:
        return _VENDOR_BASE_URLS[self]

    @property
    def env_var(self) -> str:
        return f"{self.name}_API_KEY"

    @property
    def probe_model(self) -> str:
        return _VENDOR_PROBE_MODELS[self]


_VENDOR_BASE_URLS = {
    Vendor.MOONSHOT: "https://api.moonshot.cn/v1",
    Vendor.DEEPSEEK: "https://api.deepseek.com/v1",
    Vendor.OPENAI: "https://api.openai.com/v1",
}

_VENDOR_PROBE_MODELS = {
    Vendor.MOONSHOT: "moonshot-v1-8k",
    Vendor.DEEPSEEK: "deepseek-chat",
    Vendor.OPENAI: "gpt-4o-mini",
}


class CompatModel(str, Enum):
    """Well-known model identifiers."""

    GLM4 = "glm-4"
    GLM4_PLUS = "glm-4-plus"
    GLM3_TURBO = "glm-3-turbo"
    DEEPSEEK_V3 = "deepseek-chat"
    DEEPSEEK_V3_REASONER = "deepseek-reasoner"


class CompatTransport(ProviderTransport):
    """
    Transport for OpenAI-style chat completion APIs.

    Features:
    - Vendor presets (Moonshot, DeepSeek, OpenAI) with default base URLs
    - Base URL override for self-hosted or proxied endpoints
    - Stream ends at the `[DONE]` sentinel line
    """

    def __init__(
        self,
        api_key: str | None,
        vendor: Vendor | str | None = Vendor.OPENAI,
        base_url: str | None = None,
    ):
        """
        Initialize the transport.

        Args:
            api_key: Bearer credential for the vendor
            vendor: Vendor preset; None for a custom endpoint
            base_url: Overrides the vendor's default base URL (required without vendor)

        Raises:
            ConfigurationError: Unknown vendor, or no base URL for a custom endpoint
            MissingCredentialError: If the credential is absent
        """
        if vendor is not None:
            try:
                vendor = Vendor(vendor)
            except ValueError:
                raise ConfigurationError(f"unsupported provider: {vendor}") from None
            self.env_var = vendor.env_var
        self.vendor = vendor

        base_url = base_url or (vendor.base_url if vendor else None)
        if not base_url:
            raise ConfigurationError("base URL cannot be empty")
        self.base_url = base_url.rstrip("/")

        super().__init__(api_key)

    @property
    def provider_name(self) -> str:
        if self.vendor is None:
            return "OpenAICompat"
        return f"OpenAICompat/{self.vendor.value}"

    @property
    def url(self) -> str:
        return f"{self.base_url}/chat/completions"

    @property
    def probe_model(self) -> str:
        if self.vendor is None:
            return CompatModel.GLM3_TURBO.value
        return self.vendor.probe_model

    def _get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _build_body(self, request: Request) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": request.model,
            "messages": [m.to_dict() for m in request.messages],
            "stream": request.stream,
        }
        if request.max_tokens > 0:
            body["max_tokens"] = request.max_tokens
        return body

    def _first_choice(self, data: dict[str, Any]) -> dict[str, Any] | None:
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise DecodeError("decode response: missing choices array", provider=self.provider_name)
        if not choices:
            return None
        if not isinstance(choices[0], dict):
            raise DecodeError("decode response: malformed choice", provider=self.provider_name)
        return choices[0]

    def decode_sync(self, body: bytes) -> Response:
        data = self._load_json(body)
        choice = self._first_choice(data)

        text = ""
        stop_reason = None
        if choice is not None:
            message = choice.get("message") if isinstance(choice.get("message"), dict) else {}
            text = message.get("content") or ""
            stop_reason = choice.get("finish_reason")

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else {}
        return Response(
            text=text,
            id=data.get("id"),
            model=data.get("model"),
            stop_reason=stop_reason,
            output_tokens=usage.get("completion_tokens"),
        )

    def decode_stream_line(self, payload: str) -> StreamEvent:
        data = self._load_json(payload)
        if "error" in data:
            self._raise_stream_error(data)

        choice = self._first_choice(data) if "choices" in data else None
        if choice is None:
            return StreamEvent.other()

        delta = choice.get("delta")
        if isinstance(delta, dict) and delta.get("content"):
            return StreamEvent.delta(delta["content"])
        return StreamEvent.other()
