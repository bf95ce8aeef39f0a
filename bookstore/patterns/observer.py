"""옵저버 패턴 예제 — 주문 완료 이벤트 구독.

Observer example. ``PlacementService`` only publishes
``OrderPlacedEvent``; inventory, shipping and coupon services react to it
without the publisher knowing they exist.
"""

import logging

from bookstore.events.events import DomainEvent
from bookstore.events.publisher import EventPublisher

logger = logging.getLogger(__name__)


class OrderPlacedEvent(DomainEvent):
    product_id: str
    address: str
    order_id: str


class PlacementService:
    """이벤트 발행자 (주체) — Publishes an event once an order is placed."""

    def __init__(self, events: EventPublisher) -> None:
        self._events = events

    async def place_order(self, product_id: str, address: str, order_id: str) -> OrderPlacedEvent:
        logger.info("Order %s placed, publishing OrderPlacedEvent", order_id)
        event = OrderPlacedEvent(product_id=product_id, address=address, order_id=order_id)
        await self._events.publish(event)
        return event


class InventoryService:
    def __init__(self) -> None:
        self.reserved: list[str] = []

    async def on_order_placed(self, event: OrderPlacedEvent) -> None:
        logger.info("[inventory] decrementing stock of %s", event.product_id)
        self.reserved.append(event.product_id)


class ShippingService:
    def __init__(self) -> None:
        self.shipments: list[str] = []

    async def on_order_placed(self, event: OrderPlacedEvent) -> None:
        logger.info("[shipping] preparing delivery to %s", event.address)
        self.shipments.append(event.address)


class CouponService:
    def __init__(self) -> None:
        self.issued: list[str] = []

    async def on_order_placed(self, event: OrderPlacedEvent) -> None:
        logger.info("[coupon] issuing coupon for order %s", event.order_id)
        self.issued.append(event.order_id)


def wire_listeners(
    events: EventPublisher,
    *listeners: InventoryService | ShippingService | CouponService,
) -> None:
    """구독자 등록 — Register each listener's handler for OrderPlacedEvent."""
    for listener in listeners:
        events.register(listener.on_order_placed, OrderPlacedEvent)  # type: ignore[arg-type]
