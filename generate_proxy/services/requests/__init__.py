"""
Requests building package.

Exports the URL, payload and header builders used by the provider handlers.
"""

from .builders import (
    build_openai_url,
    build_openai_payload,
    extract_openai_text,
    build_gemini_url,
    build_gemini_payload,
    extract_gemini_text,
)
from .headers import build_openai_headers, build_gemini_headers

__all__ = [
    "build_openai_url",
    "build_openai_payload",
    "extract_openai_text",
    "build_gemini_url",
    "build_gemini_payload",
    "extract_gemini_text",
    "build_openai_headers",
    "build_gemini_headers",
]
