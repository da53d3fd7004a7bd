"""
OpenAI-compatible client factory.

The AI gateway speaks the OpenAI chat-completions protocol, so the official
client is used with the gateway as base URL. Retries are disabled: rate-limit
and payment errors are passed straight back to the caller.
"""

from __future__ import annotations

from openai import OpenAI

from config import ServiceSettings


def get_client(settings: ServiceSettings) -> OpenAI:
    """Return an OpenAI client bound to the configured gateway."""
    return OpenAI(
        api_key=settings.ai_api_key,
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=0,
    )
