"""
AI extraction fallback.

Used when the file is a PDF or when direct tabular extraction found nothing.

Core responsibilities:
- Build the chat messages (text content truncated to the prompt cap; PDFs sent
  inline as a base64 data URL).
- Call the gateway and map its failures onto request-level errors.
- Parse model output into JSON reliably (including markdown-wrapped JSON).
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List

import openai

from config import DEFAULT_TEMPERATURE, MAX_AI_TEXT_CHARS, ServiceSettings
from domain.errors import (
    ParseFailure,
    UpstreamFailure,
    UpstreamPaymentRequired,
    UpstreamRateLimited,
    UpstreamTimeout,
)

from .prompts import EXTRACTION_SYSTEM_PROMPT, PDF_USER_INSTRUCTION, build_extraction_prompt

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required. Please add credits to your AI workspace."
AI_FAILURE_MESSAGE = "Failed to process file with AI"
AI_TIMEOUT_MESSAGE = "AI extraction timed out. Please try again with a smaller file."
PARSE_FAILURE_MESSAGE = (
    "Failed to extract product data. Please ensure the file contains product information."
)

_LEADING_FENCE = re.compile(r"^\s*```(?:json|JSON)?\s*")
_TRAILING_FENCE = re.compile(r"\s*```\s*$")
_ARRAY_SPAN = re.compile(r"\[.*\]", flags=re.DOTALL)


def build_text_messages(content: str, file_type: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
        {"role": "user", "content": build_extraction_prompt(content, file_type, MAX_AI_TEXT_CHARS)},
    ]


def build_document_messages(data_url: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": PDF_USER_INSTRUCTION},
                {"type": "image_url", "image_url": {"url": data_url}},
            ],
        },
    ]


def request_ai_extraction(
    messages: List[Dict[str, Any]],
    settings: ServiceSettings,
    client: openai.OpenAI,
) -> str:
    """Send the extraction request and return the raw model text."""
    try:
        response = client.chat.completions.create(
            model=settings.ai_model,
            messages=messages,
            temperature=DEFAULT_TEMPERATURE,
        )
    except openai.APITimeoutError as e:
        logger.error("AI gateway timed out after %ss", settings.ai_timeout_seconds)
        raise UpstreamTimeout(AI_TIMEOUT_MESSAGE) from e
    except openai.APIStatusError as e:
        if e.status_code == 429:
            raise UpstreamRateLimited(RATE_LIMIT_MESSAGE) from e
        if e.status_code == 402:
            raise UpstreamPaymentRequired(PAYMENT_REQUIRED_MESSAGE) from e
        logger.error("AI gateway error: %s %s", e.status_code, e.response.text)
        raise UpstreamFailure(AI_FAILURE_MESSAGE) from e
    except openai.APIError as e:
        logger.error("AI gateway request failed: %s", e)
        raise UpstreamFailure(AI_FAILURE_MESSAGE) from e

    raw_output = response.choices[0].message.content if response.choices else None
    if not raw_output:
        logger.error("AI gateway returned an empty response")
        raise ParseFailure(PARSE_FAILURE_MESSAGE)
    return raw_output


def strip_code_fences(raw_response: str) -> str:
    text = (raw_response or "").strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def parse_ai_response(raw_response: str) -> Any:
    """
    Parse model output into JSON.

    The first "[" ... last "]" span is parsed when present; otherwise the whole
    cleaned text. A {"products": [...]} wrapper is unwrapped.

    Raises:
        ParseFailure: If no valid JSON can be recovered
    """
    text = strip_code_fences(raw_response)
    match = _ARRAY_SPAN.search(text)
    candidate = match.group(0) if match else text

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response (%s): %s", e, raw_response[:500])
        raise ParseFailure(PARSE_FAILURE_MESSAGE) from e

    if isinstance(parsed, dict) and "products" in parsed:
        return parsed["products"]
    return parsed
