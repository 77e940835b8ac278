"""
Shared HTTP client management.

One pooled httpx.AsyncClient is created in the application lifespan and
stored in app.state; route handlers receive it through get_http_client.
"""
import logging
from typing import Optional

import httpx
from fastapi import Request

from .config import CONNECT_TIMEOUT, MAX_CONNECTIONS, UPSTREAM_TIMEOUT

logger = logging.getLogger("GenerateProxy.Core.HTTPClient")


def create_http_client() -> httpx.AsyncClient:
    """
    Build the process-wide upstream client.

    - limits: pooled connections, kept alive between generation calls
    - timeout: explicit connect/read/write bounds so a hung upstream cannot
      block a request forever
    - http2: enabled when the upstream negotiates it
    - redirects: not followed; a 3xx is reported back as an upstream failure
    """
    logger.info(
        f"Initializing HTTP client. Connect timeout: {CONNECT_TIMEOUT}s, "
        f"upstream timeout: {UPSTREAM_TIMEOUT}s, max connections: {MAX_CONNECTIONS}"
    )
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=50,
            keepalive_expiry=120.0,
        ),
        timeout=httpx.Timeout(UPSTREAM_TIMEOUT, connect=CONNECT_TIMEOUT),
        # redirects could carry X-API-Key to a host outside the allow-list
        follow_redirects=False,
        http2=True,
        trust_env=True,
    )


async def close_http_client(client: Optional[httpx.AsyncClient]) -> None:
    if client is None:
        logger.warning("HTTP client not found, nothing to close.")
        return
    if client.is_closed:
        logger.info("HTTP client was already closed.")
        return
    await client.aclose()
    logger.info("HTTP client closed.")


async def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    """Shared client, or None when it is not initialized or already closed."""
    client = getattr(request.app.state, "http_client", None)
    if client is None or client.is_closed:
        logger.error("HTTP client not available or closed in app.state.")
        return None
    return client
