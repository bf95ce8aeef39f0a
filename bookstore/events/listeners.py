"""기본 이벤트 리스너 — Default domain event listeners.

Registered on the shared publisher at import time (``bookstore.main``
imports this module).
"""

import logging

import aiosmtplib

from bookstore.events.events import MemberRegistered, MembershipUpgraded, OrderPlaced
from bookstore.events.publisher import publisher
from bookstore.services.email_service import email_service

logger = logging.getLogger(__name__)


@publisher.subscribe(MemberRegistered)
async def send_welcome_email(event: MemberRegistered) -> None:
    """가입 환영 메일 — Welcome mail; SMTP failures do not undo the registration."""
    try:
        await email_service.send_welcome(event)
    except aiosmtplib.SMTPException as exc:
        logger.warning("Welcome email to %s failed: %s", event.email, exc)


@publisher.subscribe(MembershipUpgraded)
async def log_membership_upgrade(event: MembershipUpgraded) -> None:
    logger.info(
        "Membership upgraded: member=%s %s -> %s",
        event.member_id,
        event.previous_type,
        event.new_type,
    )


@publisher.subscribe(OrderPlaced)
async def log_order_placed(event: OrderPlaced) -> None:
    logger.info(
        "Order placed: order=%s items=%d total=%s",
        event.order_id,
        len(event.book_ids),
        event.total_amount,
    )
