"""주문 관련 Pydantic 요청/응답 스키마 정의.

Order Pydantic request/response schema definitions, including the
statistics payloads.
"""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from bookstore.models.order import OrderStatus


class OrderCreate(BaseModel):
    """주문 생성/수정 요청 스키마.

    Order creation (and item replacement) request schema.
    Each book id becomes one order item with quantity 1.

    Attributes:
        book_ids: 주문할 도서 UUID 목록, 1개 이상 (Book UUIDs, at least one)
    """

    book_ids: list[UUID] = Field(min_length=1)


class OrderItemResponse(BaseModel):
    """주문 항목 응답 스키마 — Order line item."""

    id: str
    book_id: str
    book_title: str
    book_author: str
    quantity: int
    price: Decimal  # 주문 시점 단가 (Unit price at order time)


class OrderResponse(BaseModel):
    """주문 응답 스키마 — Order with its line items."""

    id: str  # 주문 UUID 문자열 (Order UUID as string)
    total_amount: Decimal
    order_date: dt.datetime
    status: OrderStatus
    items: list[OrderItemResponse]


class OrderStatistics(BaseModel):
    """주문 통계 응답 — Order counts per status and revenue figures.

    Revenue and average exclude cancelled orders.
    """

    total_orders: int
    pending_orders: int
    confirmed_orders: int
    shipped_orders: int
    delivered_orders: int
    cancelled_orders: int
    total_revenue: Decimal
    average_order_amount: Decimal


class DailyOrderStatistics(BaseModel):
    """일별 주문 통계 — Orders grouped by calendar day."""

    date: dt.date
    order_count: int
    total_amount: Decimal


class TopSellingBook(BaseModel):
    """상위 판매 도서 — Best-selling book aggregate."""

    book_id: str
    book_title: str
    book_author: str
    total_quantity: int
    total_revenue: Decimal
