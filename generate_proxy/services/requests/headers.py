"""
Header builders for upstream requests.

Both provider families send JSON and expect JSON back; they differ only in
how the caller's credential is presented.
"""

from __future__ import annotations

from typing import Dict

from ...core.config import GEMINI_API_HOST


def _base_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def build_openai_headers(credential: str) -> Dict[str, str]:
    """
    OpenAI-compatible endpoints:
      - Authorization: Bearer <credential>
      - X-API-Key: <credential>
    Aggregators differ in which one they read, so both are always sent.
    """
    headers = _base_headers()
    headers["Authorization"] = f"Bearer {credential}"
    headers["X-API-Key"] = credential
    return headers


def build_gemini_headers(credential: str, host: str) -> Dict[str, str]:
    """
    Gemini REST endpoints:
      - x-goog-api-key on the official Google host
      - Authorization + X-API-Key when Gemini is served behind a proxy
    """
    headers = _base_headers()
    if host == GEMINI_API_HOST:
        headers["x-goog-api-key"] = credential
    else:
        headers["Authorization"] = f"Bearer {credential}"
        headers["X-API-Key"] = credential
    return headers
