"""
Base provider transport interface.

A transport knows one wire protocol: how to encode a normalized Request and
how to decode the provider's responses and stream events. It does no I/O;
the Client owns the HTTP pool, rate limiting and retries.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import DecodeError, MissingCredentialError, ServerError
from ..types import Request, Response, StreamEvent


class ProviderTransport(ABC):
    """
    Abstract base class for wire-protocol adapters.

    All provider transports must implement this interface.
    """

    #: Environment variable conventionally holding this transport's credential.
    env_var: str | None = None

    def __init__(self, api_key: str | None):
        """
        Initialize the transport.

        Args:
            api_key: Provider credential; must be non-empty

        Raises:
            MissingCredentialError: If the credential is absent
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError(env_var=self.env_var, provider=self.provider_name)
        self.api_key = api_key

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name for logging."""
        ...

    @property
    @abstractmethod
    def url(self) -> str:
        """Endpoint that completion requests are POSTed to."""
        ...

    @property
    @abstractmethod
    def probe_model(self) -> str:
        """Cheap model used by the liveness probe."""
        ...

    @abstractmethod
    def _get_headers(self) -> dict[str, str]:
        """Authentication and protocol headers."""
        ...

    @abstractmethod
    def _build_body(self, request: Request) -> dict[str, Any]:
        """Provider-specific JSON body for a request."""
        ...

    @abstractmethod
    def decode_sync(self, body: bytes) -> Response:
        """
        Decode a non-streaming response body.

        Raises:
            DecodeError: If the body does not match the provider schema
        """
        ...

    @abstractmethod
    def decode_stream_line(self, payload: str) -> StreamEvent:
        """
        Decode the JSON payload of one `data:` line.

        Raises:
            DecodeError: If the payload is malformed
        """
        ...

    def encode(self, request: Request) -> tuple[bytes, dict[str, str]]:
        """Encode a request as UTF-8 JSON plus headers."""
        body = json.dumps(self._build_body(request), ensure_ascii=False).encode("utf-8")
        headers = {"Content-Type": "application/json", **self._get_headers()}
        return body, headers

    def _load_json(self, raw: bytes | str) -> dict[str, Any]:
        """Parse a JSON object, raising DecodeError on anything else."""
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"decode response: {e}", provider=self.provider_name) from e
        if not isinstance(data, dict):
            raise DecodeError(
                f"decode response: expected object, got {type(data).__name__}",
                provider=self.provider_name,
            )
        return data

    def _raise_stream_error(self, data: dict[str, Any]) -> None:
        """Raise for an in-band error object sent on an open stream."""
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message") or error.get("type") or "stream error"
            raise ServerError(f"Stream error: {message}", provider=self.provider_name)
        if error:
            raise ServerError(f"Stream error: {error}", provider=self.provider_name)

    def __repr__(self) -> str:
        # Never include the credential.
        return f"{type(self).__name__}(url={self.url!r})"
