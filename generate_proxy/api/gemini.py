import logging

import httpx
from fastapi.responses import JSONResponse

from ..models.api_models import GenerationRequest, GenerationSuccess
from ..services.endpoint import get_endpoint_host
from ..services.model_names import build_model_attempts
from ..services.requests import (
    build_gemini_headers,
    build_gemini_payload,
    build_gemini_url,
    extract_gemini_text,
)
from ..services.upstream import build_failure_body, post_upstream

logger = logging.getLogger("GenerateProxy.Handlers.Gemini")


async def handle_gemini_request(
    generation_request: GenerationRequest,
    model: str,
    base_url: str,
    credential: str,
    http_client: httpx.AsyncClient,
    request_id: str,
) -> JSONResponse:
    log_prefix = f"RID-{request_id}"
    url = build_gemini_url(base_url, model)
    host = get_endpoint_host(url)
    headers = build_gemini_headers(credential, host)
    payload = build_gemini_payload(
        model,
        generation_request.system_instruction,
        generation_request.user_prompt,
        generation_request.enable_thinking,
        request_id,
    )
    logger.info(f"{log_prefix}: Gemini generateContent for '{model}' via host '{host}'")

    # Single attempt; the fallback list is only reported back for diagnostics
    result = await post_upstream(http_client, url, headers, payload, request_id)
    if not result.ok:
        return JSONResponse(
            status_code=result.status_code,
            content=build_failure_body(result, build_model_attempts(model)),
        )

    success = GenerationSuccess(text=extract_gemini_text(result.json), used_model=model)
    return JSONResponse(status_code=200, content=success.model_dump(by_alias=True))
