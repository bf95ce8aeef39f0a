"""API 요청 로깅 미들웨어 (표준 로거 + Axiom).

API request logging middleware.
Every request is logged through the standard ``logging`` module with its
method, path, status code and duration. When Axiom is configured the same
structured event (plus masked body/params and the error code) is also
ingested into the Axiom dataset. Sensitive fields are masked.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookstore.config import settings

logger = logging.getLogger("bookstore.request")

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|access_token|refresh_token|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large values to prevent oversized logs."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


def _error_from_body(body: bytes) -> tuple[str | None, str | None]:
    """에러 응답에서 (코드, 메시지) 추출 — Pull (code, message) from an error body."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, body.decode("utf-8", errors="replace")[:500]
    if not isinstance(data, dict):
        return None, str(data)[:500]
    message = data.get("message", data.get("detail", str(data)))
    if isinstance(message, str) and len(message) > 500:
        message = message[:500] + "..."
    return data.get("code"), message


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request and, when configured, ships the
    structured event to Axiom.
    Captures: method, path, query params, request body, status code, error code/message.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()

        # 요청 데이터 수집 — Collect request data
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기 (Axiom 전송 시에만) — Read the body only when shipping to Axiom
        request_body: Any = None
        if self._client and method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = _truncate(_mask_dict(json.loads(body_bytes)))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        # 응답 처리 — Process response
        error_code: str | None = None
        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_code, error_detail = _error_from_body(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            self._log(method, path, status_code, duration_ms, error_code, error_detail)

            if self._client:
                # Axiom 로그 이벤트 구성 — Build Axiom log event
                log_event: dict[str, Any] = {
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                }
                if query_params:
                    log_event["query_params"] = _mask_dict(query_params)
                if request_body is not None:
                    log_event["request_body"] = request_body
                if error_code:
                    log_event["error_code"] = error_code
                if error_detail:
                    log_event["error"] = error_detail
                self._ingest(log_event)

        return response

    def _log(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        error_code: str | None,
        error_detail: str | None,
    ) -> None:
        if status_code >= 500:
            logger.error("%s %s -> %d (%.2fms) %s", method, path, status_code, duration_ms, error_detail or "")
        elif status_code >= 400:
            logger.warning("%s %s -> %d (%.2fms) [%s] %s", method, path, status_code, duration_ms, error_code, error_detail)
        else:
            logger.info("%s %s -> %d (%.2fms)", method, path, status_code, duration_ms)

    def _ingest(self, log_event: dict[str, Any]) -> None:
        # 로깅 실패가 요청 처리에 영향주지 않도록 — A failed ingest never fails the request
        try:
            self._client.ingest_events(self._dataset, [log_event])  # type: ignore[union-attr]
        except Exception as exc:
            logger.warning("Axiom ingest failed: %s", exc)
