"""
Incremental decoder for server-sent event streams.
"""

import inspect
import logging
from typing import AsyncGenerator, AsyncIterable, Awaitable, Callable

from ..exceptions import DecodeError, StreamTruncatedError
from ..types import StreamEvent, StreamEventKind

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"

logger = logging.getLogger(__name__)

FragmentCallback = Callable[[str], Awaitable[None] | None]


class StreamDecoder:
    """
    Turns a line-oriented event stream into text fragments.

    Lines without the `data:` prefix are ignored. The stream ends normally at
    the `[DONE]` sentinel or at an event the parser marks terminal; running
    out of lines before either is a truncated response. A payload the parser
    rejects is logged and skipped, so one bad frame does not end a healthy
    stream.
    """

    def __init__(
        self,
        parse_event: Callable[[str], StreamEvent],
        *,
        provider: str | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the decoder.

        Args:
            parse_event: Decodes one JSON payload; raises DecodeError when malformed
            provider: Provider name for log and error prefixes
            logger: Logger for skipped lines (default: module logger)
        """
        self._parse_event = parse_event
        self.provider = provider
        self._logger = logger or globals()["logger"]

    async def iter_fragments(self, lines: AsyncIterable[str]) -> AsyncGenerator[str, None]:
        """
        Yield non-empty text fragments in arrival order.

        Raises:
            StreamTruncatedError: If input ends before the terminal marker
        """
        async for line in lines:
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX):].strip()
            if payload == DONE_SENTINEL:
                return

            try:
                event = self._parse_event(payload)
            except DecodeError as e:
                self._logger.warning(
                    f"[{self.provider}] Skipping malformed stream event: {e.message} "
                    f"(data: {payload[:200]!r})"
                )
                continue

            if event.kind == StreamEventKind.TERMINAL:
                return
            if event.kind == StreamEventKind.DELTA and event.text:
                yield event.text

        raise StreamTruncatedError(provider=self.provider)

    async def decode(self, lines: AsyncIterable[str], on_fragment: FragmentCallback) -> int:
        """
        Deliver every fragment to `on_fragment`, one at a time.

        The callback runs before the next line is read; if it returns an
        awaitable, that is awaited first.

        Returns:
            Number of fragments delivered
        """
        delivered = 0
        async for fragment in self.iter_fragments(lines):
            result = on_fragment(fragment)
            if inspect.isawaitable(result):
                await result
            delivered += 1
        return delivered
