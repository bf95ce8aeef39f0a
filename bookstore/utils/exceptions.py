"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Every business error is an HTTPException carrying a stable ``error_code``
so the global handler can render a uniform error body without a lookup
table. Services raise these directly; routers never build responses for
errors.

Usage:
    from bookstore.utils.exceptions import NotFoundError, DuplicateEmailError
    raise NotFoundError("Member", member_id)
    raise DuplicateEmailError("a@b.com")
"""

from typing import Any

from fastapi import HTTPException, status


class BusinessError(HTTPException):
    """비즈니스 예외 기본 클래스.

    Base class for business rule violations.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        error_code: 비즈니스 에러 코드 (Machine-readable code, e.g. DUPLICATE_EMAIL)
        detail: 사용자 메시지 (Human-readable message)
    """

    error_code: str = "BUSINESS_ERROR"

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: str | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail)
        if error_code is not None:
            self.error_code = error_code


class NotFoundError(BusinessError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Accepts either an entity name plus identifier or a ready-made message.

    Args:
        entity: 엔티티 이름 또는 전체 메시지 (Entity name, or full message when identifier is None)
        identifier: 조회 키 (Lookup key, e.g. UUID or ISBN)
    """

    error_code = "ENTITY_NOT_FOUND"

    def __init__(self, entity: str = "Resource", identifier: Any = None) -> None:
        detail = f"{entity} not found" if identifier is None else f"{entity} not found: {identifier}"
        super().__init__(detail, status.HTTP_404_NOT_FOUND)


class DuplicateError(BusinessError):
    """409 Conflict 예외 — 고유 제약 위반 시 사용.

    409 Conflict exception for uniqueness violations.
    """

    error_code = "DUPLICATE_RESOURCE"

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(detail, status.HTTP_409_CONFLICT)


class DuplicateEmailError(DuplicateError):
    """이메일 중복 — Email already registered to another member."""

    error_code = "DUPLICATE_EMAIL"

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already in use: {email}")


class DuplicateIsbnError(DuplicateError):
    """ISBN 중복 — ISBN already assigned to another book."""

    error_code = "DUPLICATE_ISBN"

    def __init__(self, isbn: str) -> None:
        super().__init__(f"ISBN already exists: {isbn}")


class BadRequestError(BusinessError):
    """400 Bad Request 예외 — Pydantic 검증 이후의 비즈니스 검증 실패.

    400 Bad Request exception.
    Raised when request data is invalid beyond what Pydantic validation catches
    (e.g. invalid state transitions).
    """

    error_code = "BAD_REQUEST"

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(detail, status.HTTP_400_BAD_REQUEST)


class DeletedBookAccessError(BadRequestError):
    error_code = "DELETED_BOOK_ACCESS"

    def __init__(self, book_id: Any) -> None:
        super().__init__(f"Book is deleted: {book_id}")


class InvalidBookStateError(BadRequestError):
    error_code = "INVALID_BOOK_STATE"


class BookNotAvailableError(BadRequestError):
    error_code = "BOOK_NOT_AVAILABLE"

    def __init__(self, book_id: Any) -> None:
        super().__init__(f"Book is not available: {book_id}")


class InvalidPriceRangeError(BadRequestError):
    error_code = "INVALID_PRICE_RANGE"


class InvalidPeriodError(BadRequestError):
    error_code = "INVALID_PERIOD"


class MembershipUpgradeError(BadRequestError):
    """멤버십 업그레이드 불가 — Requested tier change is not allowed."""

    error_code = "MEMBERSHIP_UPGRADE_ERROR"

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Membership upgrade not allowed. current: {current}, target: {target}")


class InvalidOrderStateError(BadRequestError):
    error_code = "INVALID_ORDER_STATE"


class LoanLimitExceededError(BadRequestError):
    error_code = "LOAN_LIMIT_EXCEEDED"


class LoanAlreadyReturnedError(BadRequestError):
    error_code = "LOAN_ALREADY_RETURNED"

    def __init__(self, loan_id: Any) -> None:
        super().__init__(f"Loan already returned: {loan_id}")


class MemberHasActiveLoansError(BadRequestError):
    error_code = "MEMBER_HAS_ACTIVE_LOANS"

    def __init__(self, member_id: Any, count: int) -> None:
        super().__init__(f"Member {member_id} still has {count} active loan(s)")
