import os
from dotenv import load_dotenv

load_dotenv()

APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

LOG_LEVEL_FROM_ENV = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_PROXY_ENDPOINT = "https://api.vectorengine.ai"
DEFAULT_PROVIDER_HOST = "api.vectorengine.ai"
GEMINI_API_HOST = "generativelanguage.googleapis.com"

# 只允许转发到这两个上游域名，进程启动后不可变
ALLOWED_UPSTREAM_HOSTS = frozenset({
    DEFAULT_PROVIDER_HOST,
    GEMINI_API_HOST,
})

OPENAI_API_VERSION_SEGMENT = "/v1"
GEMINI_API_VERSION_SEGMENT = "/v1beta"
OPENAI_CHAT_COMPLETIONS_PATH = "/chat/completions"

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.95
GEMINI_THINKING_BUDGET = 16000

MAX_ERROR_MESSAGE_CHARS = 500
MAX_ERROR_DETAIL_CHARS = 2000
UPSTREAM_ERROR_FALLBACK_MESSAGE = "Upstream error"

# UPSTREAM_TIMEOUT bounds one whole attempt (connect, send, full body read)
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "120.0"))
CONNECT_TIMEOUT = float(os.getenv("CONNECT_TIMEOUT", "15.0"))
MAX_CONNECTIONS = int(os.getenv("MAX_CONNECTIONS", "200"))

CORS_ALLOW_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
]
