"""
LLM Provider - Rate Limiting.

Per-client request budget shared by every call made through one client.
"""

from .limiter import RateLimiter

__all__ = ["RateLimiter"]
