import logging

import httpx
from fastapi.responses import JSONResponse

from ..models.api_models import GenerationRequest, GenerationSuccess
from ..services.model_names import build_model_attempts
from ..services.requests import (
    build_openai_headers,
    build_openai_payload,
    build_openai_url,
    extract_openai_text,
)
from ..services.upstream import (
    UpstreamResult,
    build_failure_body,
    looks_like_model_not_found,
    post_upstream,
)

logger = logging.getLogger("GenerateProxy.Handlers.OpenAI")


async def handle_openai_request(
    generation_request: GenerationRequest,
    model: str,
    base_url: str,
    credential: str,
    http_client: httpx.AsyncClient,
    request_id: str,
) -> JSONResponse:
    """
    Call an OpenAI-compatible chat completion endpoint, walking the model
    fallback chain while the upstream reports the model as unavailable.

    Attempts are strictly sequential; the first success or the first failure
    that is not a model-not-found stops the walk.
    """
    log_prefix = f"RID-{request_id}"
    url = build_openai_url(base_url)
    headers = build_openai_headers(credential)
    tried_models = build_model_attempts(model)

    last_result: UpstreamResult = UpstreamResult(status_code=500, content_type="", raw_text="", json=None)
    for attempt_index, candidate in enumerate(tried_models, start=1):
        payload = build_openai_payload(
            candidate,
            generation_request.system_instruction,
            generation_request.user_prompt,
        )
        logger.info(f"{log_prefix}: OpenAI attempt {attempt_index}/{len(tried_models)} with model '{candidate}'")
        last_result = await post_upstream(http_client, url, headers, payload, request_id)

        if last_result.ok:
            success = GenerationSuccess(text=extract_openai_text(last_result.json), used_model=candidate)
            return JSONResponse(status_code=200, content=success.model_dump(by_alias=True))

        if not looks_like_model_not_found(last_result):
            logger.warning(f"{log_prefix}: Model '{candidate}' failed with {last_result.status_code}, not falling back.")
            break
        logger.info(f"{log_prefix}: Model '{candidate}' not available upstream, trying next candidate.")

    return JSONResponse(
        status_code=last_result.status_code,
        content=build_failure_body(last_result, tried_models),
    )
