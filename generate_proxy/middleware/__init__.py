"""
中间件模块
"""
from .access_logging import AccessLogMiddleware

__all__ = [
    "AccessLogMiddleware",
]
