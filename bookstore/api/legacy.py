"""레거시 주문 라우터 (deprecated) — /api/orders 사용 권장.

Legacy order router, kept for old clients; use ``/api/orders`` instead.
Failures are answered with an empty body instead of the standard error
body: 400 for a failed creation (including an unreadable request body),
404 for a missing order.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.api.deps import Pagination, get_pagination
from bookstore.database import get_db
from bookstore.schemas.order import OrderCreate, OrderResponse
from bookstore.services.order_service import order_service
from bookstore.utils.exceptions import NotFoundError
from bookstore.utils.pagination import Page

logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(deprecated=True)

# 본문은 핸들러에서 직접 검증 — the body is parsed in the handler, so document it here
_ORDER_CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": OrderCreate.model_json_schema()}},
    }
}


@router.post("/orders", response_model=OrderResponse, openapi_extra=_ORDER_CREATE_BODY)
async def create_order(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse | Response:
    """주문 생성 (레거시) — 200 on success, empty 400 on any failure."""
    try:
        data = OrderCreate.model_validate(await request.json())
        logger.info("Legacy order request: %s", data)
        result: OrderResponse = await order_service.create_order(db, data)
    except Exception as exc:
        logger.error("Legacy order creation failed: %r", exc)
        await db.rollback()
        return Response(status_code=400)
    await db.commit()
    return result


@router.get("/orders", response_model=Page[OrderResponse])
async def list_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[Pagination, Depends(get_pagination)],
) -> Page[OrderResponse]:
    return await order_service.list_orders(db, paging.page, paging.per_page)


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse | Response:
    try:
        return await order_service.get_order(db, order_id)
    except NotFoundError:
        return Response(status_code=404)
