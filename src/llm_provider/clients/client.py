"""
Provider-agnostic LLM client.

Rate limiting, retries and cancellation live here once; everything that
differs between wire protocols is delegated to a ProviderTransport.
"""

import asyncio
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Awaitable, Callable, Iterable, Iterator, TypeVar

import httpx

from ..exceptions import (
    ConnectionError,
    InvalidRequestError,
    LLMClientError,
    RateLimitError,
    RetryExhaustedError,
    ValidationError,
    error_from_status,
)
from ..exceptions import TimeoutError as AttemptTimeoutError
from ..ratelimit import RateLimiter
from ..retry import RetryConfig, calculate_backoff, is_retryable
from ..streaming import FragmentCallback, StreamDecoder
from ..transports import CompatTransport, NativeTransport, ProviderTransport, Vendor
from ..types import Message, Request, Response

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_TOKENS = 4096
VALIDATE_TIMEOUT = 10.0
VALIDATE_MAX_TOKENS = 10


class Client:
    """
    Resilient completion client over a single provider transport.

    Features:
    - Per-client request budget shared by all concurrent callers
    - Bounded exponential backoff on retryable failures
    - Streaming with in-order fragment delivery
    - Cancellation at every suspension point (rate-limit wait, backoff, I/O)

    Every call runs the same attempt loop: wait for the rate limiter, send
    through the transport, then either return, back off and try again, or
    raise. Cancelling the calling task (or passing `deadline`) aborts the
    whole operation; cancellation is never retried or wrapped.

    An instance is bound to the event loop it is first used on, because its
    httpx.AsyncClient pool is. Create one client per loop.
    """

    def __init__(
        self,
        transport: ProviderTransport,
        *,
        default_model: str | None = None,
        retry_config: RetryConfig | None = None,
        requests_per_window: int = 50,
        rate_window: float = 60.0,
        timeout: float = 120.0,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Wire-protocol adapter (holds credential and endpoint)
            default_model: Model used when a call passes None
            retry_config: Retry configuration for failed attempts
            requests_per_window: Request budget per rate window
            rate_window: Rate window length in seconds
            timeout: Timeout in seconds for a single attempt
            max_tokens: Output token cap sent with every request
            http_client: Shared connection pool (default: one owned by the client)
            logger: Diagnostic sink (default: module logger)
        """
        self.transport = transport
        self.default_model = default_model or transport.probe_model
        self.retry_config = retry_config or RetryConfig()
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._logger = logger or globals()["logger"]
        self._rate_limiter = RateLimiter(
            requests_per_window, rate_window, logger=self._logger
        )
        self._decoder = StreamDecoder(
            transport.decode_stream_line,
            provider=transport.provider_name,
            logger=self._logger,
        )
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @classmethod
    def native(cls, api_key: str | None, **kwargs) -> "Client":
        """Create a client speaking the Anthropic Messages protocol."""
        api_url = kwargs.pop("api_url", None)
        transport = NativeTransport(api_key, api_url) if api_url else NativeTransport(api_key)
        return cls(transport, **kwargs)

    @classmethod
    def compat(
        cls,
        api_key: str | None,
        vendor: Vendor | str | None = Vendor.OPENAI,
        base_url: str | None = None,
        **kwargs,
    ) -> "Client":
        """Create a client speaking the OpenAI-compatible protocol."""
        return cls(CompatTransport(api_key, vendor, base_url), **kwargs)

    @property
    def provider_name(self) -> str:
        return self.transport.provider_name

    @property
    def total_requests(self) -> int:
        """Requests granted by this client's rate limiter so far."""
        return self._rate_limiter.total_requests

    async def aclose(self) -> None:
        """Release the connection pool if the client owns it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def complete(
        self,
        model: str | None,
        prompt: str,
        *,
        deadline: float | None = None,
    ) -> str:
        """Send a single-turn prompt and return the completion text."""
        return await self._complete("complete", model, [Message.user(prompt)], deadline)

    async def complete_with_history(
        self,
        model: str | None,
        messages: Iterable[Message | dict],
        *,
        deadline: float | None = None,
    ) -> str:
        """Send a conversation and return the completion text."""
        return await self._complete("complete_with_history", model, messages, deadline)

    async def stream(
        self,
        model: str | None,
        prompt: str,
        on_fragment: FragmentCallback,
        *,
        deadline: float | None = None,
    ) -> None:
        """Stream a single-turn completion, passing each text fragment to `on_fragment`."""
        await self._stream("stream", model, [Message.user(prompt)], on_fragment, deadline)

    async def stream_with_history(
        self,
        model: str | None,
        messages: Iterable[Message | dict],
        on_fragment: FragmentCallback,
        *,
        deadline: float | None = None,
    ) -> None:
        """Stream a conversation's completion, passing each text fragment to `on_fragment`."""
        await self._stream("stream_with_history", model, messages, on_fragment, deadline)

    async def validate(self) -> None:
        """
        Confirm the credential and endpoint with one tiny request.

        Single attempt, bounded by a fixed timeout; the reply is discarded.

        Raises:
            ValidationError: If the probe fails or times out
        """
        request = Request.build(
            self.transport.probe_model,
            [Message.user("Hi")],
            max_tokens=VALIDATE_MAX_TOKENS,
        )
        try:
            async with asyncio.timeout(VALIDATE_TIMEOUT):
                await self._rate_limiter.wait()
                await self._send_once(request)
        except LLMClientError as e:
            raise ValidationError(
                f"validation failed: {e.message}",
                provider=self.provider_name,
                status_code=e.status_code,
                operation="validate",
            ) from e
        except asyncio.TimeoutError as e:
            raise ValidationError(
                f"validation timed out after {VALIDATE_TIMEOUT}s",
                provider=self.provider_name,
                operation="validate",
            ) from e

    async def health_check(self) -> bool:
        """Check if the provider is reachable with the configured credential."""
        try:
            await self.validate()
            return True
        except ValidationError as e:
            self._logger.debug(f"[{self.provider_name}] Health check failed: {e}")
            return False

    # ------------------------------------------------------------------
    # Attempt loop
    # ------------------------------------------------------------------

    def _build_request(
        self,
        model: str | None,
        messages: Iterable[Message | dict],
        stream: bool,
    ) -> Request:
        model = model or self.default_model
        if isinstance(model, Enum):
            model = model.value
        request = Request.build(model, messages, max_tokens=self.max_tokens, stream=stream)
        if not request.messages:
            raise InvalidRequestError("messages cannot be empty", provider=self.provider_name)
        return request

    async def _complete(
        self,
        operation: str,
        model: str | None,
        messages: Iterable[Message | dict],
        deadline: float | None,
    ) -> str:
        request = self._build_request(model, messages, stream=False)
        async with asyncio.timeout(deadline):
            response = await self._run(operation, lambda: self._send_once(request))
        return response.text

    async def _stream(
        self,
        operation: str,
        model: str | None,
        messages: Iterable[Message | dict],
        on_fragment: FragmentCallback,
        deadline: float | None,
    ) -> None:
        request = self._build_request(model, messages, stream=True)
        async with asyncio.timeout(deadline):
            await self._run(operation, lambda: self._stream_once(request, on_fragment))

    def _retry_delay(self, attempt: int, error: LLMClientError) -> float:
        delay = calculate_backoff(attempt, self.retry_config)
        if isinstance(error, RateLimitError) and error.retry_after:
            delay = max(delay, min(error.retry_after, self.retry_config.max_delay))
        return delay

    async def _run(self, operation: str, send: Callable[[], Awaitable[T]]) -> T:
        """
        Run `send` under the rate limiter with retries.

        Raises:
            LLMClientError: A non-retryable failure, raised as-is
            RetryExhaustedError: Every attempt failed with a retryable error
        """
        config = self.retry_config
        last_error: LLMClientError | None = None

        for attempt in range(1, config.max_attempts + 1):
            if last_error is not None:
                delay = self._retry_delay(attempt, last_error)
                self._logger.info(
                    f"[{self.provider_name}] Retrying {operation} in {delay:.1f}s "
                    f"(attempt {attempt}/{config.max_attempts})"
                )
                await asyncio.sleep(delay)

            await self._rate_limiter.wait()

            try:
                return await send()
            except LLMClientError as e:
                if e.operation is None:
                    e.operation = operation
                last_error = e
                if not is_retryable(e, e.status_code, config):
                    raise
                self._logger.warning(
                    f"[{self.provider_name}] {operation} attempt "
                    f"{attempt}/{config.max_attempts} failed: {e.message}"
                    + (f" (status: {e.status_code})" if e.status_code else "")
                )

        self._logger.error(
            f"[{self.provider_name}] All {config.max_attempts} attempts of {operation} exhausted"
        )
        raise RetryExhaustedError(
            config.max_attempts, last_error, operation=operation
        ) from last_error

    # ------------------------------------------------------------------
    # Single attempts
    # ------------------------------------------------------------------

    @contextmanager
    def _transport_errors(self) -> Iterator[None]:
        """Convert httpx transport failures into retryable domain errors."""
        try:
            yield
        except httpx.TimeoutException as e:
            raise AttemptTimeoutError(
                f"Request timed out after {self.timeout}s",
                provider=self.provider_name,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                f"Failed to reach {self.transport.url}: {e}",
                provider=self.provider_name,
            ) from e

    def _status_error(self, response: httpx.Response) -> LLMClientError:
        return error_from_status(
            response.status_code,
            response.text,
            retryable_status_codes=self.retry_config.retryable_status_codes,
            provider=self.provider_name,
            headers=response.headers,
        )

    async def _send_once(self, request: Request) -> Response:
        body, headers = self.transport.encode(request)
        self._logger.debug(
            f"[{self.provider_name}] Request model={request.model} "
            f"messages={len(request.messages)}"
        )

        with self._transport_errors():
            response = await self._http.post(
                self.transport.url,
                content=body,
                headers=headers,
                timeout=self.timeout,
            )

        if not response.is_success:
            raise self._status_error(response)

        result = self.transport.decode_sync(response.content)
        self._logger.debug(
            f"[{self.provider_name}] Response id={result.id} tokens={result.output_tokens}"
        )
        return result

    async def _stream_once(self, request: Request, on_fragment: FragmentCallback) -> None:
        body, headers = self.transport.encode(request)
        self._logger.debug(
            f"[{self.provider_name}] Stream request model={request.model} "
            f"messages={len(request.messages)}"
        )

        delivered = 0

        def deliver(fragment: str):
            nonlocal delivered
            delivered += 1
            return on_fragment(fragment)

        try:
            with self._transport_errors():
                async with self._http.stream(
                    "POST",
                    self.transport.url,
                    content=body,
                    headers=headers,
                    timeout=self.timeout,
                ) as response:
                    if not response.is_success:
                        await response.aread()
                        raise self._status_error(response)
                    await self._decoder.decode(response.aiter_lines(), deliver)
        except LLMClientError as e:
            # Retrying would hand the caller the same fragments twice.
            if delivered:
                e.retryable = False
            raise
