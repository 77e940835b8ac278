"""
Upstream call and response mapping shared by both provider handlers.

Bodies are parsed on a best-effort basis: a non-JSON body never aborts the
request, it only limits the diagnostic detail handed back to the caller.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
import orjson

from ..core.config import (
    CONNECT_TIMEOUT,
    MAX_ERROR_DETAIL_CHARS,
    MAX_ERROR_MESSAGE_CHARS,
    UPSTREAM_ERROR_FALLBACK_MESSAGE,
    UPSTREAM_TIMEOUT,
)
from ..models.api_models import GenerationFailure

logger = logging.getLogger("GenerateProxy.Services.Upstream")

_MODEL_KEYWORD_PATTERN = re.compile(r"model|模型", re.IGNORECASE)
# Known provider phrasings for an unknown or disabled model, English and Chinese.
_MODEL_NOT_FOUND_PATTERN = re.compile(
    r"(not found|does not exist|不存在|未找到|未启用|尚未上线|未开放|No available channels)",
    re.IGNORECASE,
)


class UpstreamTimeoutError(Exception):
    """Raised when one upstream attempt does not complete within UPSTREAM_TIMEOUT."""


@dataclass
class UpstreamResult:
    status_code: int
    content_type: str
    raw_text: str
    json: Optional[Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def parse_json_best_effort(text: str) -> Optional[Any]:
    if not text:
        return None
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError:
        return None


def _message_from_json(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if data.get("message"):
        return str(data["message"])
    return ""


def extract_upstream_message(result: UpstreamResult, fallback: str = "") -> str:
    """
    Error message preference: error.message, then message, then the head of
    the raw body, then `fallback`.
    """
    message = _message_from_json(result.json)
    if message:
        return message
    if result.raw_text.strip():
        return result.raw_text[:MAX_ERROR_MESSAGE_CHARS]
    return fallback


def looks_like_model_not_found(result: UpstreamResult) -> bool:
    """
    Heuristic on provider error text; only a 404 mentioning a model together
    with a known not-found phrasing qualifies.
    """
    if result.status_code != 404:
        return False
    message = extract_upstream_message(result)
    return bool(_MODEL_KEYWORD_PATTERN.search(message) and _MODEL_NOT_FOUND_PATTERN.search(message))


def build_failure_body(result: UpstreamResult, tried_models: List[str]) -> Dict[str, Any]:
    failure = GenerationFailure(
        error=extract_upstream_message(result, UPSTREAM_ERROR_FALLBACK_MESSAGE),
        upstream_status=result.status_code,
        upstream_content_type=result.content_type,
        detail=result.json if result.json is not None else result.raw_text[:MAX_ERROR_DETAIL_CHARS],
        tried_models=list(tried_models),
    )
    return failure.model_dump(by_alias=True)


async def post_upstream(
    client: httpx.AsyncClient,
    url: str,
    headers: Dict[str, str],
    payload: Dict[str, Any],
    request_id: str,
) -> UpstreamResult:
    """
    Send one POST and read the whole body before returning.

    httpx timeouts apply per socket operation, so the attempt as a whole is
    also bounded by UPSTREAM_TIMEOUT; a slowly dripping body cannot hold
    the request open.
    """
    log_prefix = f"RID-{request_id}"
    logger.info(f"{log_prefix}: POST {url} (model={payload.get('model', '(in path)')})")

    try:
        response = await asyncio.wait_for(
            client.post(
                url,
                headers=headers,
                content=orjson.dumps(payload),
                timeout=httpx.Timeout(UPSTREAM_TIMEOUT, connect=CONNECT_TIMEOUT),
            ),
            timeout=UPSTREAM_TIMEOUT,
        )
    except asyncio.TimeoutError as e:
        logger.error(f"{log_prefix}: Upstream attempt exceeded {UPSTREAM_TIMEOUT}s, giving up.")
        raise UpstreamTimeoutError(f"Upstream request timed out after {UPSTREAM_TIMEOUT:g}s") from e

    raw_text = response.text
    result = UpstreamResult(
        status_code=response.status_code,
        content_type=response.headers.get("content-type", ""),
        raw_text=raw_text,
        json=parse_json_best_effort(raw_text),
    )

    if result.ok:
        logger.info(f"{log_prefix}: Upstream {result.status_code}, content-type={result.content_type}")
    else:
        logger.warning(
            f"{log_prefix}: Upstream {result.status_code}, content-type={result.content_type}, "
            f"preview={raw_text[:MAX_ERROR_MESSAGE_CHARS]}"
        )
    return result
