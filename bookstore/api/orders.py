"""주문 라우터 — 주문 생성/수정/취소, 상태 변경 및 통계 엔드포인트.

Order Router — Order lifecycle and statistics endpoints.
"""

from datetime import date, datetime
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.api.deps import Direction, Pagination, get_pagination
from bookstore.database import get_db
from bookstore.models.order import OrderStatus
from bookstore.schemas.order import (
    DailyOrderStatistics,
    OrderCreate,
    OrderResponse,
    OrderStatistics,
    TopSellingBook,
)
from bookstore.services.order_service import order_service
from bookstore.utils.pagination import Page

router: APIRouter = APIRouter()

OrderSort = Literal["order_date", "total_amount"]


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문 생성 — 도서 ID마다 수량 1의 항목 생성.

    Create an order with one item per requested book id.
    """
    result: OrderResponse = await order_service.create_order(db, data)
    await db.commit()
    return result


@router.get("", response_model=Page[OrderResponse])
async def list_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
    sort: OrderSort = "order_date",
    direction: Direction = "desc",
) -> Page[OrderResponse]:
    return await order_service.list_orders(db, paging.page, paging.per_page, sort, direction)


@router.get("/statistics", response_model=OrderStatistics)
async def get_order_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderStatistics:
    """주문 통계 (상태별 수, 매출, 평균 금액) — Revenue excludes cancelled orders."""
    return await order_service.get_statistics(db)


@router.get("/statistics/daily", response_model=list[DailyOrderStatistics])
async def get_daily_statistics(
    start_date: date,
    end_date: date,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[DailyOrderStatistics]:
    return await order_service.get_daily_statistics(db, start_date, end_date)


@router.get("/statistics/top-books", response_model=list[TopSellingBook])
async def get_top_selling_books(
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> list[TopSellingBook]:
    return await order_service.get_top_selling_books(db, limit)


@router.get("/status/{status}", response_model=Page[OrderResponse])
async def list_orders_by_status(
    status: OrderStatus,
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
) -> Page[OrderResponse]:
    return await order_service.list_orders(db, paging.page, paging.per_page, status=status)


@router.get("/period", response_model=Page[OrderResponse])
async def list_orders_by_period(
    start_date: datetime,
    end_date: datetime,
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
) -> Page[OrderResponse]:
    """기간별 주문 조회. 시작이 종료보다 늦으면 400.

    Orders placed within the period; start after end returns 400.
    """
    return await order_service.list_orders_by_period(
        db, start_date, end_date, paging.page, paging.per_page
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    return await order_service.get_order(db, order_id)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    data: OrderCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문 항목 교체 (PENDING 상태만) — Replace items of a PENDING order."""
    result: OrderResponse = await order_service.update_order(db, order_id, data)
    await db.commit()
    return result


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: UUID,
    status: OrderStatus,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    result: OrderResponse = await order_service.update_status(db, order_id, status)
    await db.commit()
    return result


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문 취소. 배송 완료/이미 취소된 주문은 400.

    Cancel an order; delivered or already cancelled orders return 400.
    """
    result: OrderResponse = await order_service.cancel_order(db, order_id)
    await db.commit()
    return result
