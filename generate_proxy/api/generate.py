import logging
import uuid
from typing import Any, Dict, Optional

import httpx
import orjson
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.http_client import get_http_client
from ..models.api_models import GenerationRequest
from ..services.endpoint import ProxyEndpointError, resolve_upstream_base
from ..services.model_names import ProviderFamily, detect_provider_family, normalize_model
from ..services.upstream import UpstreamTimeoutError
from . import gemini, openai

logger = logging.getLogger("GenerateProxy.Routers.Generate")
router = APIRouter()

BEARER_PREFIX = "Bearer "
GENERATE_PATH = "/api/generate"
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def mask_api_key_for_log(api_key: Optional[str]) -> str:
    if not api_key:
        return "(empty)"
    head = api_key[:4]
    tail = api_key[-4:] if len(api_key) > 8 else "****"
    return f"{head}...{tail} (len={len(api_key)})"


def extract_credential(authorization: Optional[str]) -> str:
    token = authorization or ""
    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]
    return token.strip()


async def read_json_body(request: Request) -> Dict[str, Any]:
    """请求体解析失败时按空对象处理，由必填字段校验统一返回 400"""
    raw_body = await request.body()
    if not raw_body:
        return {}
    try:
        data = orjson.loads(raw_body)
    except orjson.JSONDecodeError:
        logger.warning("Request body is not valid JSON, treating as empty.")
        return {}
    return data if isinstance(data, dict) else {}


@router.api_route(
    GENERATE_PATH,
    methods=ROUTE_METHODS,
    summary="Text generation proxy (OpenAI-compatible / Gemini)",
    tags=["AI Proxy"],
)
async def generate_entrypoint(
    request: Request,
    http_client: Optional[httpx.AsyncClient] = Depends(get_http_client),
):
    request_id = str(uuid.uuid4())
    log_prefix = f"RID-{request_id}"

    if request.method != "POST":
        logger.info(f"{log_prefix}: Rejected {request.method} /api/generate")
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})

    credential = extract_credential(request.headers.get("authorization"))
    generation_request = GenerationRequest.model_validate(await read_json_body(request))
    model = normalize_model(generation_request.model)

    if not model or generation_request.missing_required_fields():
        logger.info(f"{log_prefix}: Missing required fields (model='{model}').")
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    if not credential:
        logger.info(f"{log_prefix}: Missing proxy token.")
        return JSONResponse(status_code=401, content={"error": "Missing Proxy Token"})

    try:
        base_url = resolve_upstream_base(generation_request.proxy_endpoint)
        # 所有请求校验通过后才检查共享客户端
        if http_client is None:
            return JSONResponse(
                status_code=503,
                content={"error": "Service unavailable: HTTP client not initialized or closed."},
            )

        family = detect_provider_family(model)
        logger.info(
            f"{log_prefix}: model '{generation_request.model}' -> '{model}', family={family.value}, "
            f"endpoint='{base_url}', thinking={generation_request.enable_thinking}, "
            f"token={mask_api_key_for_log(credential)}"
        )

        handler = openai.handle_openai_request if family is ProviderFamily.OPENAI else gemini.handle_gemini_request
        return await handler(generation_request, model, base_url, credential, http_client, request_id)

    except ProxyEndpointError as e:
        logger.warning(f"{log_prefix}: {e} (proxyEndpoint='{generation_request.proxy_endpoint}')")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except UpstreamTimeoutError as e:
        logger.error(f"{log_prefix}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except httpx.RequestError as e:
        message = str(e) or type(e).__name__
        logger.error(f"{log_prefix}: Upstream request error: {message}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": message})
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.error(f"{log_prefix}: Unexpected error: {message}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": message})
