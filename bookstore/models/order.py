"""주문 관련 SQLAlchemy ORM 모델 정의.

Order and OrderItem SQLAlchemy ORM model definitions.
Each order item captures the unit price at order time so later price
changes on the book do not alter historical totals.

Tables:
    - orders: 주문 (Orders with status and total amount)
    - order_items: 주문 항목 (Line items referencing books)
"""

import enum
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.database import Base


class OrderStatus(str, enum.Enum):
    """주문 상태 — Order lifecycle status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base):
    """주문 모델 — 주문 헤더 (총액, 상태, 주문 일시).

    Order model — Order header holding the total, status and order date.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        total_amount: 주문 총액 (Sum of item price * quantity)
        order_date: 주문 일시 UTC (Order timestamp)
        status: 주문 상태 문자열 (OrderStatus value)

    Relationships:
        items: 주문 항목 목록 (Line items, delete-orphan)
    """

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 주문 총액 — Order total
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    # 주문 일시 — Order timestamp (UTC)
    order_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    # 주문 상태 — "PENDING" | "CONFIRMED" | "SHIPPED" | "DELIVERED" | "CANCELLED"
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    def add_item(self, item: "OrderItem") -> None:
        """주문 항목 추가 — Attach a line item, keeping insertion order."""
        item.position = len(self.items)
        self.items.append(item)


class OrderItem(Base):
    """주문 항목 모델 — 주문에 포함된 도서 한 줄.

    Order item model — One book line within an order.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        order_id: 소속 주문 FK (Parent order)
        book_id: 주문 도서 FK (Ordered book)
        quantity: 수량 (Quantity, default 1)
        price: 주문 시점 단가 (Unit price captured at order time)
        position: 주문 내 순서 (Display order within the order)
    """

    __tablename__ = "order_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 주문 FK — CASCADE: 주문 삭제 시 항목도 삭제
    order_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    book_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("books.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # 관계 — Relationships
    order = relationship("Order", back_populates="items")
    book = relationship("Book")
