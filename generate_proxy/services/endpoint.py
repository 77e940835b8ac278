import logging
from urllib.parse import urlparse

from ..core.config import ALLOWED_UPSTREAM_HOSTS

logger = logging.getLogger("GenerateProxy.Services.Endpoint")


class ProxyEndpointError(ValueError):
    """Raised when the caller-supplied proxyEndpoint cannot be used."""


def resolve_upstream_base(endpoint: str) -> str:
    """
    Validate proxyEndpoint against the host allow-list.

    Returns the endpoint without trailing slashes; no network activity
    happens here.
    """
    try:
        parsed = urlparse(endpoint)
        hostname = parsed.hostname
    except ValueError as e:
        raise ProxyEndpointError("Invalid proxyEndpoint") from e

    if not parsed.scheme or not parsed.netloc or not hostname:
        raise ProxyEndpointError("Invalid proxyEndpoint")

    if hostname not in ALLOWED_UPSTREAM_HOSTS:
        logger.warning(f"Rejected proxyEndpoint host '{hostname}'")
        raise ProxyEndpointError("proxyEndpoint host not allowed")

    return endpoint.rstrip("/")


def get_endpoint_host(url: str) -> str:
    return urlparse(url).hostname or ""
