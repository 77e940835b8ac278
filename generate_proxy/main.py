import logging
import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .core.config import APP_VERSION, LOG_LEVEL_FROM_ENV, CORS_ALLOW_ORIGINS
from .core.http_client import create_http_client, close_http_client
from .api import generate as generate_router
from .middleware import AccessLogMiddleware

numeric_log_level = getattr(logging, LOG_LEVEL_FROM_ENV.upper(), logging.INFO)

root_logger = logging.getLogger()
root_logger.setLevel(numeric_log_level)

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(
    '%(asctime)s %(levelname)-8s [%(name)s:%(module)s:%(lineno)d] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
))
root_logger.addHandler(console_handler)

logger = logging.getLogger("GenerateProxy.Main")

for lib_logger_name in ["httpx", "httpcore", "hpack", "uvicorn.access", "watchfiles"]:
    logging.getLogger(lib_logger_name).setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    logger.info("Lifespan: 应用启动，初始化HTTP客户端...")
    app_instance.state.http_client = create_http_client()

    yield

    logger.info("Lifespan: 应用关闭，开始关闭HTTP客户端...")
    await close_http_client(getattr(app_instance.state, "http_client", None))
    app_instance.state.http_client = None
    logger.info("Lifespan: 应用关闭流程完成。")


app = FastAPI(
    title="Generate Proxy",
    description=f"文本生成转发服务，版本: {APP_VERSION}",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(AccessLogMiddleware)

# CORS 最后添加，最先执行，浏览器预检请求不会进入路由
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=CORS_ALLOW_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info(f"FastAPI Generate Proxy v{APP_VERSION} 初始化完成，已配置CORS。")

app.include_router(generate_router.router)
logger.info("生成路由已加载到路径 /api/generate")


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Methods the router never dispatches (TRACE, custom verbs) get the generate 405 body too"""
    if exc.status_code == 405 and request.url.path == generate_router.GENERATE_PATH:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})
    return await http_exception_handler(request, exc)


@app.get("/", status_code=200, include_in_schema=False, tags=["Utilities"])
async def root():
    """根路由，确认服务正常运行"""
    return {
        "message": "Generate Proxy API is running",
        "version": APP_VERSION,
        "status": "ok",
        "endpoints": {
            "generate": "/api/generate",
            "health": "/health",
            "docs": "/docs",
        }
    }


@app.get("/health", status_code=200, include_in_schema=False, tags=["Utilities"])
async def health_check(request: Request):
    client_from_state = getattr(request.app.state, "http_client", None)
    client_status = "ok"
    detail_message = "HTTP client initialized and seems operational."

    if client_from_state is None:
        client_status = "error"
        detail_message = "HTTP client not initialized in app.state."
    elif not isinstance(client_from_state, httpx.AsyncClient):
        client_status = "error"
        detail_message = f"Unexpected object type in app.state.http_client: {type(client_from_state)}"
    elif client_from_state.is_closed:
        client_status = "warning"
        detail_message = "HTTP client in app.state is closed."

    return {"status": client_status, "detail": detail_message, "app_version": APP_VERSION}
