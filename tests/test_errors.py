"""에러 응답 형식 및 요청 로깅 미들웨어 테스트.

Tests for the uniform error body, the global exception handlers and the
request logging middleware.
"""

import logging
from uuid import uuid4

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bookstore.api.errors import register_exception_handlers
from bookstore.middleware.axiom_logging import _error_from_body, _mask_dict
from bookstore.utils.exceptions import BusinessError, NotFoundError


class TestErrorResponse:
    async def test_not_found_shape(self, client: AsyncClient):
        """404 응답 — 표준 필드 포함, errors 생략."""
        missing = uuid4()
        res = await client.get(f"/api/members/{missing}")
        body = res.json()
        assert res.status_code == 404
        assert body["status"] == 404
        assert body["error"] == "Not Found"
        assert body["code"] == "ENTITY_NOT_FOUND"
        assert str(missing) in body["message"]
        assert body["path"] == f"/api/members/{missing}"
        assert "timestamp" in body
        assert "errors" not in body

    async def test_validation_shape(self, client: AsyncClient):
        """검증 실패 — 400, 필드별 에러 목록."""
        res = await client.post("/api/members", json={"name": "X", "email": "bad"})
        body = res.json()
        assert res.status_code == 400
        assert body["error"] == "Bad Request"
        assert {e["field"] for e in body["errors"]} == {"name", "email"}
        rejected = {e["field"]: e["rejected_value"] for e in body["errors"]}
        assert rejected["email"] == "bad"

    async def test_malformed_json(self, client: AsyncClient):
        res = await client.post(
            "/api/books",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400
        assert res.json()["code"] == "VALIDATION_FAILED"

    async def test_unknown_route(self, client: AsyncClient):
        """라우터 없는 경로 — HTTP 상태 이름을 코드로 사용."""
        res = await client.get("/api/nowhere")
        assert res.status_code == 404
        assert res.json()["code"] == "NOT_FOUND"

    async def test_method_not_allowed(self, client: AsyncClient):
        res = await client.delete("/api/orders")
        assert res.status_code == 405
        assert res.json()["code"] == "METHOD_NOT_ALLOWED"


class TestUnhandledError:
    async def test_unexpected_exception(self, caplog):
        """예상치 못한 예외 — 500 INTERNAL_ERROR, 내부 메시지 비노출."""
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("database password is hunter2")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with caplog.at_level(logging.ERROR, logger="bookstore.api.errors"):
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                res = await ac.get("/boom")

        assert res.status_code == 500
        body = res.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert "hunter2" not in body["message"]
        assert any("Unhandled error" in r.message for r in caplog.records)

    async def test_custom_business_error(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/teapot")
        async def teapot() -> None:
            raise BusinessError("short and stout", status_code=418, error_code="TEAPOT")

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            res = await ac.get("/teapot")

        assert res.status_code == 418
        assert res.json()["code"] == "TEAPOT"
        assert res.json()["message"] == "short and stout"


class TestExceptions:
    def test_not_found_message(self):
        assert NotFoundError("Book", "abc").detail == "Book not found: abc"
        assert NotFoundError("Nothing here").detail == "Nothing here not found"


class TestRequestLogging:
    async def test_success_logged_at_info(self, client: AsyncClient, caplog):
        """정상 요청 — INFO 로그."""
        with caplog.at_level(logging.INFO, logger="bookstore.request"):
            await client.get("/api/books")
        records = [r for r in caplog.records if r.name == "bookstore.request"]
        assert records[-1].levelno == logging.INFO
        assert "GET /api/books -> 200" in records[-1].getMessage()

    async def test_client_error_logged_with_code(self, client: AsyncClient, caplog):
        """4xx — WARNING 로그에 에러 코드 포함, 응답 본문 유지."""
        with caplog.at_level(logging.INFO, logger="bookstore.request"):
            res = await client.get(f"/api/books/{uuid4()}")
        assert res.json()["code"] == "ENTITY_NOT_FOUND"
        records = [r for r in caplog.records if r.name == "bookstore.request"]
        assert records[-1].levelno == logging.WARNING
        assert "[ENTITY_NOT_FOUND]" in records[-1].getMessage()

    async def test_health_not_logged(self, client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger="bookstore.request"):
            res = await client.get("/health")
        assert res.json() == {"status": "ok"}
        assert not [r for r in caplog.records if r.name == "bookstore.request"]

    def test_error_from_body(self):
        assert _error_from_body(b'{"code": "X", "message": "boom"}') == ("X", "boom")
        assert _error_from_body(b'{"detail": "plain"}') == (None, "plain")
        assert _error_from_body(b"not json") == (None, "not json")

    def test_mask_sensitive_fields(self):
        masked = _mask_dict({"email": "a@example.com", "password": "secret", "nested": {"token": "t"}})
        assert masked["email"] == "a@example.com"
        assert masked["password"] == "***"
        assert masked["nested"]["token"] == "***"
