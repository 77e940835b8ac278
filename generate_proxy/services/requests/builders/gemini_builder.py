# -*- coding: utf-8 -*-
"""
Gemini REST request builder.

Builds the generateContent URL and payload; native thinking is only
requested for models whose name advertises it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ....core.config import (
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    GEMINI_API_VERSION_SEGMENT,
    GEMINI_THINKING_BUDGET,
)

logger = logging.getLogger("GenerateProxy.Services.Requests.GeminiBuilder")


def build_gemini_url(base: str, model: str) -> str:
    if GEMINI_API_VERSION_SEGMENT not in base:
        base = f"{base}{GEMINI_API_VERSION_SEGMENT}"
    return f"{base}/models/{model}:generateContent"


def supports_thinking(model: str) -> bool:
    return "thinking" in model


def build_gemini_payload(
    model: str,
    system_instruction: str,
    user_prompt: str,
    enable_thinking: bool,
    request_id: str,
) -> Dict[str, Any]:
    generation_config: Dict[str, Any] = {
        "temperature": DEFAULT_TEMPERATURE,
        "topP": DEFAULT_TOP_P,
    }
    if enable_thinking and supports_thinking(model):
        generation_config["thinkingConfig"] = {
            "includeThoughts": True,
            "thinkingBudget": GEMINI_THINKING_BUDGET,
        }
        logger.info(f"RID-{request_id}: Enabling native thinking for '{model}' (budget={GEMINI_THINKING_BUDGET}).")
    elif enable_thinking:
        logger.debug(f"RID-{request_id}: Thinking requested but '{model}' is not a thinking model, ignoring.")

    return {
        "systemInstruction": {"parts": [{"text": system_instruction}]},
        "contents": [
            {"role": "user", "parts": [{"text": user_prompt}]},
        ],
        "generationConfig": generation_config,
    }


def extract_gemini_text(data: Any) -> str:
    """Concatenate the text of every part in the first candidate."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    texts = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        texts.append(text if isinstance(text, str) else "")
    return "".join(texts)
