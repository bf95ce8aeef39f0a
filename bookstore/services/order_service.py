"""주문 서비스 — 주문 생성/수정/취소 및 통계 비즈니스 로직.

Order Service — Business logic for orders.
Creation looks up every requested book, captures its current price on a
line item, totals the order, persists it, sends the confirmation email
and publishes ``OrderPlaced``. Collaborators (email, events) are passed
to the constructor.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.events.events import OrderPlaced
from bookstore.events.publisher import EventPublisher, publisher
from bookstore.models.book import Book
from bookstore.models.order import Order, OrderItem, OrderStatus
from bookstore.repositories.book_repository import book_repository
from bookstore.repositories.order_repository import order_repository
from bookstore.schemas.order import (
    DailyOrderStatistics,
    OrderCreate,
    OrderItemResponse,
    OrderResponse,
    OrderStatistics,
    TopSellingBook,
)
from bookstore.services.email_service import EmailService, email_service
from bookstore.utils.exceptions import (
    BookNotAvailableError,
    InvalidOrderStateError,
    InvalidPeriodError,
    NotFoundError,
)
from bookstore.utils.dates import as_utc, day_bounds
from bookstore.utils.logger import log_calls
from bookstore.utils.pagination import Page


@log_calls("SERVICE")
class OrderService:
    """주문 관련 비즈니스 로직을 처리하는 서비스.

    Service handling order business logic.

    Args:
        emails: 주문 메일 발송 서비스 (Order notification email service)
        events: 도메인 이벤트 발행기 (Domain event publisher)
    """

    def __init__(self, emails: EmailService, events: EventPublisher) -> None:
        self._emails = emails
        self._events = events

    def _to_response(self, order: Order) -> OrderResponse:
        """주문 모델을 응답 스키마로 변환 (items/book 로드 필요).

        Convert an Order with items and books loaded to an OrderResponse.
        """
        return OrderResponse(
            id=str(order.id),
            total_amount=order.total_amount,
            order_date=as_utc(order.order_date),
            status=OrderStatus(order.status),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    book_id=str(item.book_id),
                    book_title=item.book.title,
                    book_author=item.book.author,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
        )

    async def _get_detail_or_404(self, db: AsyncSession, order_id: UUID) -> Order:
        order: Order | None = await order_repository.get_detail(db, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    async def _resolve_books(self, db: AsyncSession, book_ids: list[UUID]) -> list[Book]:
        """요청 도서 확인 — 요청 순서대로 활성/재고 도서 목록 반환.

        Resolve the requested ids in request order. Duplicate ids resolve to
        the same book (one line item each).

        Raises:
            NotFoundError: 없는 도서 또는 삭제된 도서 (Missing or soft-deleted book)
            BookNotAvailableError: 재고 없는 도서 (Book flagged unavailable)
        """
        found: dict[UUID, Book] = await book_repository.get_active_by_ids(db, book_ids)
        books: list[Book] = []
        for book_id in book_ids:
            book = found.get(book_id)
            if book is None:
                raise NotFoundError("Book", book_id)
            if not book.available:
                raise BookNotAvailableError(book_id)
            books.append(book)
        return books

    def _fill_items(self, order: Order, books: list[Book]) -> None:
        total = Decimal("0")
        for book in books:
            item = OrderItem(book_id=book.id, quantity=1, price=book.price)
            order.add_item(item)
            total += item.price * item.quantity
        order.total_amount = total

    async def create_order(self, db: AsyncSession, data: OrderCreate) -> OrderResponse:
        """주문을 생성합니다.

        Create an order with one line item (quantity 1) per requested book.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 주문 도서 ID 목록 (Requested book ids)

        Returns:
            OrderResponse: 생성된 주문 응답, 상태 PENDING (Created order, PENDING)
        """
        books = await self._resolve_books(db, data.book_ids)

        order = Order(status=OrderStatus.PENDING.value, order_date=datetime.now(timezone.utc))
        self._fill_items(order, books)
        db.add(order)
        await db.flush()

        order = await self._get_detail_or_404(db, order.id)
        await self._emails.send_order_confirmation(order)
        await self._events.publish(
            OrderPlaced(
                order_id=str(order.id),
                total_amount=order.total_amount,
                book_ids=tuple(str(item.book_id) for item in order.items),
            )
        )
        return self._to_response(order)

    async def get_order(self, db: AsyncSession, order_id: UUID) -> OrderResponse:
        return self._to_response(await self._get_detail_or_404(db, order_id))

    async def list_orders(
        self,
        db: AsyncSession,
        page: int = 1,
        per_page: int = 10,
        sort: str = "order_date",
        direction: str = "desc",
        status: OrderStatus | None = None,
    ) -> Page[OrderResponse]:
        query = order_repository.list_query(sort, direction, status=status)
        orders, total = await order_repository.get_paginated(db, query, page, per_page)
        return Page[OrderResponse].build(orders, total, page, per_page, self._to_response)

    async def list_orders_by_period(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
        page: int = 1,
        per_page: int = 10,
    ) -> Page[OrderResponse]:
        """기간별 주문 조회 — Orders placed within [start, end].

        Raises:
            InvalidPeriodError: 시작이 종료보다 늦을 때 (start after end)
        """
        start, end = as_utc(start), as_utc(end)
        if start > end:
            raise InvalidPeriodError(f"Start ({start}) must not be after end ({end})")
        query = order_repository.list_query(start=start, end=end)
        orders, total = await order_repository.get_paginated(db, query, page, per_page)
        return Page[OrderResponse].build(orders, total, page, per_page, self._to_response)

    async def update_order(
        self,
        db: AsyncSession,
        order_id: UUID,
        data: OrderCreate,
    ) -> OrderResponse:
        """주문 항목 교체 — PENDING 상태에서만 가능.

        Replace the order's items and recompute the total.

        Raises:
            InvalidOrderStateError: PENDING이 아닌 주문 (Order is not PENDING)
        """
        order = await self._get_detail_or_404(db, order_id)
        if order.status != OrderStatus.PENDING.value:
            raise InvalidOrderStateError(f"Only PENDING orders can be modified: {order.id} is {order.status}")

        books = await self._resolve_books(db, data.book_ids)
        order.items.clear()
        await db.flush()
        self._fill_items(order, books)
        await db.flush()
        return self._to_response(await self._get_detail_or_404(db, order.id))

    async def update_status(
        self,
        db: AsyncSession,
        order_id: UUID,
        status: OrderStatus,
    ) -> OrderResponse:
        """주문 상태 변경 — SHIPPED로 변경 시 발송 메일 전송.

        Set the order status. Moving into SHIPPED sends the shipped email.
        """
        order = await self._get_detail_or_404(db, order_id)
        previous = order.status
        order.status = status.value
        await db.flush()

        if status == OrderStatus.SHIPPED and previous != OrderStatus.SHIPPED.value:
            await self._emails.send_order_shipped(order)
        return self._to_response(order)

    async def cancel_order(self, db: AsyncSession, order_id: UUID) -> OrderResponse:
        """주문 취소.

        Cancel an order.

        Raises:
            InvalidOrderStateError: 배송 완료 또는 이미 취소된 주문 (Delivered or already cancelled)
        """
        order = await self._get_detail_or_404(db, order_id)
        if order.status == OrderStatus.DELIVERED.value:
            raise InvalidOrderStateError(f"Delivered orders cannot be cancelled: {order.id}")
        if order.status == OrderStatus.CANCELLED.value:
            raise InvalidOrderStateError(f"Order is already cancelled: {order.id}")
        order.status = OrderStatus.CANCELLED.value
        await db.flush()
        return self._to_response(order)

    async def get_statistics(self, db: AsyncSession) -> OrderStatistics:
        counts = await order_repository.count_by_status(db)
        return OrderStatistics(
            total_orders=sum(counts.values()),
            pending_orders=counts[OrderStatus.PENDING.value],
            confirmed_orders=counts[OrderStatus.CONFIRMED.value],
            shipped_orders=counts[OrderStatus.SHIPPED.value],
            delivered_orders=counts[OrderStatus.DELIVERED.value],
            cancelled_orders=counts[OrderStatus.CANCELLED.value],
            total_revenue=await order_repository.total_revenue(db),
            average_order_amount=await order_repository.average_order_amount(db),
        )

    async def get_daily_statistics(
        self,
        db: AsyncSession,
        start_date: date,
        end_date: date,
    ) -> list[DailyOrderStatistics]:
        """일별 주문 통계 — Per-day order counts and totals, both dates inclusive."""
        if start_date > end_date:
            raise InvalidPeriodError(f"Start date ({start_date}) must not be after end date ({end_date})")
        start, end = day_bounds(start_date, end_date)
        rows = await order_repository.daily_statistics(db, start, end)
        return [DailyOrderStatistics(**row) for row in rows]

    async def get_top_selling_books(self, db: AsyncSession, limit: int = 10) -> list[TopSellingBook]:
        return [TopSellingBook(**row) for row in await order_repository.top_selling_books(db, limit)]


# 싱글턴 인스턴스 — Singleton instance
order_service: OrderService = OrderService(email_service, publisher)
