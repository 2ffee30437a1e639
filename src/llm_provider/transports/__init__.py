"""
LLM Provider - Transports.

Wire-protocol adapters selected once, at client construction.
"""

from .base import ProviderTransport
from .compat import CompatModel, CompatTransport, Vendor
from .native import ANTHROPIC_API_URL, ANTHROPIC_VERSION, AnthropicModel, NativeTransport

__all__ = [
    "ProviderTransport",
    "NativeTransport",
    "AnthropicModel",
    "ANTHROPIC_API_URL",
    "ANTHROPIC_VERSION",
    "CompatTransport",
    "CompatModel",
    "Vendor",
]
