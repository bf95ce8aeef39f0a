"""주문 레포지토리 — 주문 CRUD, 상세 조회 및 통계 쿼리.

Order Repository — CRUD, detail loading and statistics queries for orders.
Revenue figures (total, average, top sellers) exclude cancelled orders;
daily statistics count every order placed in the period.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookstore.models.book import Book
from bookstore.models.order import Order, OrderItem, OrderStatus
from bookstore.repositories.base import BaseRepository

# 정렬 허용 컬럼 — Sortable columns exposed to the API
SORTABLE_COLUMNS = {
    "order_date": Order.order_date,
    "total_amount": Order.total_amount,
}

_CENTS = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """집계 결과를 소수점 2자리 Decimal로 변환.

    Normalize an aggregate result (Decimal, float or None depending on the
    backend) to a two-place Decimal.
    """
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_CENTS)


class OrderRepository(BaseRepository[Order]):
    """주문 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the orders table.
    """

    def __init__(self) -> None:
        super().__init__(Order)

    def _with_items(self) -> Select:
        return select(Order).options(selectinload(Order.items).selectinload(OrderItem.book))

    async def get_detail(self, db: AsyncSession, order_id: UUID) -> Order | None:
        """주문 상세 정보를 항목/도서와 함께 조회합니다.

        Retrieve an order with its items and their books eagerly loaded.
        ``populate_existing`` refreshes instances already in the identity map,
        so a freshly flushed order comes back with its items attached.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            order_id: 주문 ID (Order UUID)

        Returns:
            Order | None: 항목이 로드된 주문 또는 None (Order with items, or None)
        """
        query: Select = (
            self._with_items()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return (await db.execute(query)).scalar_one_or_none()

    def list_query(
        self,
        sort: str = "order_date",
        direction: str = "desc",
        status: OrderStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Select:
        """주문 목록 쿼리 — 상태/기간 필터와 정렬 적용.

        Build the paginated order listing query with optional status and
        period filters (both bounds inclusive).
        """
        query: Select = self._with_items()
        if status is not None:
            query = query.where(Order.status == status.value)
        if start is not None:
            query = query.where(Order.order_date >= start)
        if end is not None:
            query = query.where(Order.order_date <= end)

        column = SORTABLE_COLUMNS.get(sort, Order.order_date)
        ordering = column.asc() if direction.lower() == "asc" else column.desc()
        return query.order_by(ordering, Order.id)

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        """상태별 주문 수 — Order count per status value (missing = 0)."""
        query: Select = select(Order.status, func.count()).group_by(Order.status)
        counts: dict[str, int] = {s.value: 0 for s in OrderStatus}
        for status_value, count in (await db.execute(query)).all():
            counts[status_value] = count
        return counts

    async def total_revenue(self, db: AsyncSession) -> Decimal:
        query: Select = (
            select(func.coalesce(func.sum(Order.total_amount), 0))
            .where(Order.status != OrderStatus.CANCELLED.value)
        )
        return to_money((await db.execute(query)).scalar())

    async def average_order_amount(self, db: AsyncSession) -> Decimal:
        query: Select = (
            select(func.coalesce(func.avg(Order.total_amount), 0))
            .where(Order.status != OrderStatus.CANCELLED.value)
        )
        return to_money((await db.execute(query)).scalar())

    async def daily_statistics(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> list[dict[str, Any]]:
        """일별 주문 통계 — Orders per calendar day within [start, end].

        Returns:
            list[dict]: ``date``, ``order_count``, ``total_amount`` 행 목록
                        (Rows ordered by date ascending)
        """
        day = func.date(Order.order_date).label("day")
        query: Select = (
            select(day, func.count(Order.id), func.sum(Order.total_amount))
            .where(Order.order_date.between(start, end))
            .group_by(day)
            .order_by(day)
        )
        return [
            {"date": row_day, "order_count": count, "total_amount": to_money(amount)}
            for row_day, count, amount in (await db.execute(query)).all()
        ]

    async def top_selling_books(self, db: AsyncSession, limit: int = 10) -> list[dict[str, Any]]:
        """상위 판매 도서 — Best sellers by total quantity, cancelled orders excluded."""
        total_quantity = func.sum(OrderItem.quantity).label("total_quantity")
        query: Select = (
            select(
                Book.id,
                Book.title,
                Book.author,
                total_quantity,
                func.sum(OrderItem.price * OrderItem.quantity),
            )
            .select_from(OrderItem)
            .join(Book, OrderItem.book_id == Book.id)
            .join(Order, OrderItem.order_id == Order.id)
            .where(Order.status != OrderStatus.CANCELLED.value)
            .group_by(Book.id, Book.title, Book.author)
            .order_by(total_quantity.desc(), Book.title)
            .limit(limit)
        )
        return [
            {
                "book_id": str(book_id),
                "book_title": title,
                "book_author": author,
                "total_quantity": int(quantity or 0),
                "total_revenue": to_money(revenue),
            }
            for book_id, title, author, quantity, revenue in (await db.execute(query)).all()
        ]


# 싱글턴 인스턴스 — Singleton instances
order_repository: OrderRepository = OrderRepository()
