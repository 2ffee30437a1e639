"""
LLM Provider - Streaming.

Server-sent event decoding shared by both wire protocols.
"""

from .decoder import DATA_PREFIX, DONE_SENTINEL, FragmentCallback, StreamDecoder

__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "FragmentCallback",
    "StreamDecoder",
]
