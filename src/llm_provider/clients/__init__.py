"""
LLM Provider - Client.

One orchestration layer over interchangeable wire-protocol transports.
"""

from .client import DEFAULT_MAX_TOKENS, VALIDATE_TIMEOUT, Client

__all__ = [
    "Client",
    "DEFAULT_MAX_TOKENS",
    "VALIDATE_TIMEOUT",
]
