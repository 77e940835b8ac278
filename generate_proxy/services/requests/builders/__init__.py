# -*- coding: utf-8 -*-
"""
Request builders package.

One focused builder per provider protocol (OpenAI-compatible chat
completions, Gemini REST generateContent).
"""
from .openai_builder import (
    build_openai_url,
    build_openai_payload,
    extract_openai_text,
)
from .gemini_builder import (
    build_gemini_url,
    build_gemini_payload,
    extract_gemini_text,
    supports_thinking,
)

__all__ = [
    "build_openai_url",
    "build_openai_payload",
    "extract_openai_text",
    "build_gemini_url",
    "build_gemini_payload",
    "extract_gemini_text",
    "supports_thinking",
]
