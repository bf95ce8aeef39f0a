"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러 및 라우터 등록.

FastAPI application entry point — Middleware, exception handler and router
registration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.api import api_router
from bookstore.api.errors import register_exception_handlers
from bookstore.config import settings
from bookstore.middleware.axiom_logging import AxiomLoggingMiddleware
from bookstore.utils.logger import configure_logging

# 도메인 이벤트 리스너 등록 — Registers the default event listeners on import
import bookstore.events.listeners  # noqa: F401

configure_logging()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# API 요청 로깅 미들웨어 — Request logging (stdlib logger, Axiom when configured)
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
