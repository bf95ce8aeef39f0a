"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions: the uniform error body
returned by the global exception handler and a generic message response.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """필드 검증 에러 — One rejected request field.

    Attributes:
        field: 필드 경로 (Dotted field path, e.g. "body.price")
        rejected_value: 거부된 값 문자열 (Rejected value rendered as text)
        message: 에러 메시지 (Validation message)
    """

    field: str
    rejected_value: str | None = None
    message: str


class ErrorResponse(BaseModel):
    """API 표준 에러 응답 포맷.

    Uniform API error body.

    Attributes:
        timestamp: 발생 일시 (When the error was produced)
        status: HTTP 상태 코드 (HTTP status code)
        error: HTTP 상태 문구 (HTTP reason phrase)
        code: 비즈니스 에러 코드 (Business error code, e.g. DUPLICATE_EMAIL)
        message: 사용자 메시지 (Human-readable message)
        path: 요청 경로 (Request path)
        errors: 필드 검증 에러 목록, 없으면 생략 (Field errors, omitted when empty)
    """

    timestamp: datetime
    status: int
    error: str
    code: str
    message: str
    path: str
    errors: list[FieldError] | None = Field(default=None)


class MessageResponse(BaseModel):
    """단순 메시지 응답 — Generic message response."""

    message: str
