"""
Model identifier normalization and provider-family routing.

Callers send loose identifiers ("4o-mini", "gpt4o", "4.1"); everything
downstream works with the canonical form returned by normalize_model.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import List

_DOTTED_NUMERIC_PATTERN = re.compile(r"^\d+(?:\.\d+)*$")
_FOUR_O_PATTERN = re.compile(r"^4o(?:-.+)?$")

OPENAI_FAMILY_PREFIXES = ("gpt", "o1")


class ProviderFamily(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"


def normalize_model(raw_model: str) -> str:
    model = (raw_model or "").strip()
    if not model:
        return model

    if model.startswith("gpt-") or model.startswith("o1"):
        return model
    if model.startswith("gpt"):
        return f"gpt-{model[len('gpt'):]}"

    if _DOTTED_NUMERIC_PATTERN.match(model):
        return f"gpt-{model}"
    if _FOUR_O_PATTERN.match(model):
        return f"gpt-{model}"
    return model


def detect_provider_family(model: str) -> ProviderFamily:
    if model.startswith(OPENAI_FAMILY_PREFIXES):
        return ProviderFamily.OPENAI
    return ProviderFamily.GEMINI


def get_model_fallbacks(model: str) -> List[str]:
    """
    Ordered alternates to try when `model` is reported as unavailable.

    The original model never appears in the result and the order of first
    occurrence is preserved.
    """
    model = (model or "").strip()
    if not model:
        return []

    if model.startswith("gpt-4.1"):
        candidates = ["gpt-4o-mini", "gpt-4o", "gpt-4.1-mini"]
    elif model.startswith("gpt-4o"):
        candidates = ["gpt-4o-mini", "gpt-4o"]
    elif model.startswith("gpt-4"):
        candidates = ["gpt-4o-mini", "gpt-4o"]
    elif model.startswith("o1"):
        candidates = ["gpt-4o-mini", "gpt-4o"]
    elif "gemini-2.0-flash" in model:
        candidates = ["gemini-1.5-flash", "gemini-1.5-pro"]
    elif "gemini" in model:
        candidates = ["gemini-1.5-flash", "gemini-1.5-pro", "gemini-2.0-flash-exp"]
    else:
        candidates = []

    return list(dict.fromkeys(c for c in candidates if c and c != model))


def build_model_attempts(model: str) -> List[str]:
    return [model, *get_model_fallbacks(model)]
