"""이메일 알림 서비스 — 주문/회원 관련 메일 발송.

Email notification service. ``EmailService`` is the interface the order
service and event listeners depend on; ``MockEmailService`` records and
logs messages (default, used in development and tests) while
``SmtpEmailService`` delivers them through ``bookstore.utils.email``.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from bookstore.config import settings
from bookstore.models.order import Order
from bookstore.utils.email import send_email

logger = logging.getLogger(__name__)


class Recipient(Protocol):
    """메일 수신 대상 — Anything with a name and an email (Member, MemberRegistered)."""

    name: str
    email: str


class EmailService(Protocol):
    """이메일 발송 인터페이스 — Email notification interface."""

    async def send_order_confirmation(self, order: Order) -> None: ...

    async def send_order_shipped(self, order: Order) -> None: ...

    async def send_welcome(self, member: Recipient) -> None: ...


@dataclass(frozen=True)
class SentEmail:
    to: str
    subject: str
    body: str


def _order_lines(order: Order) -> str:
    # items와 book이 로드된 주문만 전달됨 — callers pass orders with items/books loaded
    return "\n".join(
        f"- {item.book.title} x{item.quantity} @ {item.price}" for item in order.items
    )


def order_confirmation(order: Order) -> tuple[str, str]:
    """주문 확인 메일 제목/본문 — Subject and body for an order confirmation."""
    subject = f"[{settings.APP_NAME}] Order confirmed: {order.id}"
    body = (
        f"Order {order.id} has been received.\n"
        f"{_order_lines(order)}\n"
        f"Total: {order.total_amount}"
    )
    return subject, body


def order_shipped(order: Order) -> tuple[str, str]:
    subject = f"[{settings.APP_NAME}] Order shipped: {order.id}"
    body = f"Order {order.id} has shipped.\nTotal: {order.total_amount}"
    return subject, body


def welcome(member: Recipient) -> tuple[str, str]:
    subject = f"Welcome to {settings.APP_NAME}"
    body = f"Hello {member.name}, your membership is now active."
    return subject, body


class MockEmailService:
    """발송 대신 로그 기록 및 메모리 보관 — Logs messages and keeps them in ``sent``."""

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []

    async def _deliver(self, to: str, subject: str, body: str) -> None:
        logger.info("Mock email to=%s subject=%s", to, subject)
        self.sent.append(SentEmail(to=to, subject=subject, body=body))

    async def send_order_confirmation(self, order: Order) -> None:
        await self._deliver(settings.ORDER_NOTIFICATION_EMAIL, *order_confirmation(order))

    async def send_order_shipped(self, order: Order) -> None:
        await self._deliver(settings.ORDER_NOTIFICATION_EMAIL, *order_shipped(order))

    async def send_welcome(self, member: Recipient) -> None:
        await self._deliver(member.email, *welcome(member))


class SmtpEmailService:
    """SMTP 실제 발송 — Delivers messages over SMTP (aiosmtplib)."""

    async def _deliver(self, to: str, subject: str, body: str) -> None:
        if not to:
            logger.warning("Email skipped, no recipient configured: %s", subject)
            return
        html = "<br>".join(body.splitlines())
        await send_email(to, subject, html, body)
        logger.info("Email sent to=%s subject=%s", to, subject)

    async def send_order_confirmation(self, order: Order) -> None:
        await self._deliver(settings.ORDER_NOTIFICATION_EMAIL, *order_confirmation(order))

    async def send_order_shipped(self, order: Order) -> None:
        await self._deliver(settings.ORDER_NOTIFICATION_EMAIL, *order_shipped(order))

    async def send_welcome(self, member: Recipient) -> None:
        await self._deliver(member.email, *welcome(member))


def get_email_service() -> EmailService:
    """설정에 따라 구현 선택 — SMTP when EMAIL_SMTP_ENABLED, mock otherwise."""
    if settings.EMAIL_SMTP_ENABLED:
        return SmtpEmailService()
    return MockEmailService()


# 싱글턴 인스턴스 — Singleton instance
email_service: EmailService = get_email_service()
