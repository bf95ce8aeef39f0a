"""객체 생성 방식 비교 — 직접 생성 vs 의존성 주입.

Object wiring comparison. ``TraditionalOrderService`` constructs its own
catalog, mailer and activity log, mixes logging and timing into the
business method and needs an explicit ``cleanup()``.
``WiredOrderService`` receives the same collaborators, keeps only the
business step and leaves timing to ``log_execution``. Both compute the
same order total.
"""

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal

from bookstore.utils.logger import log_execution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogBook:
    id: int
    title: str
    price: Decimal


@dataclass
class DraftOrder:
    book_ids: list[int]
    total_amount: Decimal


class BookCatalog:
    """메모리 도서 저장소 — In-memory stand-in for a book repository."""

    def __init__(self, books: list[CatalogBook] | None = None) -> None:
        default = [
            CatalogBook(1, "Clean Code", Decimal("33.00")),
            CatalogBook(2, "Refactoring", Decimal("41.50")),
        ]
        self._books = {b.id: b for b in (books if books is not None else default)}
        self.closed = False

    def find_by_id(self, book_id: int) -> CatalogBook | None:
        return self._books.get(book_id)

    def close(self) -> None:
        self.closed = True


@dataclass
class Mailer:
    sent: list[str] = field(default_factory=list)

    def send_order_confirmation(self, order: DraftOrder) -> None:
        self.sent.append(f"order total {order.total_amount}")


@dataclass
class ActivityLog:
    entries: list[str] = field(default_factory=list)

    def log(self, message: str) -> None:
        self.entries.append(message)
        logger.info(message)


def _build_order(catalog: BookCatalog, book_ids: list[int]) -> DraftOrder:
    total = Decimal("0")
    for book_id in book_ids:
        book = catalog.find_by_id(book_id)
        if book is None:
            raise LookupError(f"Unknown book: {book_id}")
        total += book.price
    return DraftOrder(book_ids=list(book_ids), total_amount=total)


class TraditionalOrderService:
    """협력 객체를 직접 생성하는 서비스 — Builds its own collaborators."""

    def __init__(self) -> None:
        # 구체 클래스에 직접 의존 — concrete classes chosen here, not by the caller
        self.catalog = BookCatalog()
        self.mailer = Mailer()
        self.activity = ActivityLog()

    def create_order(self, book_ids: list[int]) -> DraftOrder:
        self.activity.log(f"create_order start - book ids: {book_ids}")
        start = time.perf_counter()
        try:
            order = _build_order(self.catalog, book_ids)
            self.mailer.send_order_confirmation(order)
        except LookupError as exc:
            self.activity.log(f"create_order failed: {exc}")
            raise
        self.activity.log(f"create_order done - {(time.perf_counter() - start) * 1000:.1f}ms")
        return order

    def cleanup(self) -> None:
        """자원 정리 — 호출자가 직접 호출해야 함 (Caller must remember to call this)."""
        self.catalog.close()


class WiredOrderService:
    """협력 객체를 주입받는 서비스 — Collaborators passed in by the assembler."""

    def __init__(self, catalog: BookCatalog, mailer: Mailer) -> None:
        self._catalog = catalog
        self._mailer = mailer

    @log_execution("PATTERN")
    def create_order(self, book_ids: list[int]) -> DraftOrder:
        order = _build_order(self._catalog, book_ids)
        self._mailer.send_order_confirmation(order)
        return order
