"""API 라우터 패키지 — 모든 REST 엔드포인트 통합.

API Router package — Aggregates every REST endpoint into a single router
mounted under ``/api`` by the application.

Included routers:
    - books: 도서 관리 (Book catalogue, soft delete, search)
    - members: 회원 관리 (Members, membership tiers, loan limits)
    - orders: 주문 관리 (Orders and order statistics)
    - loans: 대여 관리 (Book loans and returns)
    - legacy: 레거시 주문 API (Deprecated order endpoints)
"""

from fastapi import APIRouter

from bookstore.api.books import router as books_router
from bookstore.api.legacy import router as legacy_router
from bookstore.api.loans import router as loans_router
from bookstore.api.members import router as members_router
from bookstore.api.orders import router as orders_router

api_router: APIRouter = APIRouter()

api_router.include_router(books_router, prefix="/books", tags=["Books"])
api_router.include_router(members_router, prefix="/members", tags=["Members"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
api_router.include_router(loans_router, prefix="/loans", tags=["Loans"])
api_router.include_router(legacy_router, prefix="/legacy", tags=["Legacy"])
