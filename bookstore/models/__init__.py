"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    book: 도서 (Book, soft-deletable)
    member: 회원 및 멤버십 등급 (Member, MembershipType)
    loan: 대여 (Loan)
    order: 주문 및 주문 항목 (Order, OrderItem, OrderStatus)
"""

from bookstore.models.book import Book
from bookstore.models.member import Member, MembershipType
from bookstore.models.loan import Loan
from bookstore.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "Book",
    "Member", "MembershipType",
    "Loan",
    "Order", "OrderItem", "OrderStatus",
]
