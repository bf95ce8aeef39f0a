"""도메인 이벤트 모델 정의.

Domain event models. Events are immutable pydantic models carrying plain
values (ids as strings) so listeners never touch ORM instances after the
publishing session moves on.
"""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """도메인 이벤트 기본 클래스 — Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    occurred_at: datetime = Field(default_factory=_utcnow)


class MemberRegistered(DomainEvent):
    """회원 가입 완료 — A new member was registered."""

    member_id: str
    name: str
    email: str


class MembershipUpgraded(DomainEvent):
    """멤버십 등급 변경 — A member's tier changed."""

    member_id: str
    previous_type: str
    new_type: str


class OrderPlaced(DomainEvent):
    """주문 생성 완료 — An order was created."""

    order_id: str
    total_amount: Decimal
    book_ids: tuple[str, ...] = ()
