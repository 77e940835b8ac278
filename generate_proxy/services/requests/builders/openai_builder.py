# -*- coding: utf-8 -*-
"""
OpenAI-format request builder.

- Rewrites the endpoint base to the /v1 API version.
- Builds a non-streaming chat completion payload (system + user message).
"""

from __future__ import annotations

from typing import Any, Dict

from ....core.config import (
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    GEMINI_API_VERSION_SEGMENT,
    OPENAI_API_VERSION_SEGMENT,
    OPENAI_CHAT_COMPLETIONS_PATH,
)


def build_openai_url(base: str) -> str:
    if base.endswith(GEMINI_API_VERSION_SEGMENT):
        base = base[: -len(GEMINI_API_VERSION_SEGMENT)] + OPENAI_API_VERSION_SEGMENT
    elif not base.endswith(OPENAI_API_VERSION_SEGMENT):
        base = f"{base}{OPENAI_API_VERSION_SEGMENT}"
    return f"{base}{OPENAI_CHAT_COMPLETIONS_PATH}"


def build_openai_payload(model: str, system_instruction: str, user_prompt: str) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": system_instruction},
            {"role": "user", "content": user_prompt},
        ],
        "stream": False,
        "temperature": DEFAULT_TEMPERATURE,
        "top_p": DEFAULT_TOP_P,
    }


def extract_openai_text(data: Any) -> str:
    """Content of the first choice's message, or "" when the shape is off."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""
