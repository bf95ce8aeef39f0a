"""이벤트 발행기 및 기본 리스너 테스트.

Tests for the in-process event publisher and the default listeners.
"""

import logging

import aiosmtplib
import pytest

from bookstore.events import listeners
from bookstore.events.events import DomainEvent, MemberRegistered, MembershipUpgraded, OrderPlaced
from bookstore.events.publisher import EventPublisher


def _registered() -> MemberRegistered:
    return MemberRegistered(member_id="m-1", name="Kim Minsu", email="minsu@example.com")


class TestEventPublisher:
    async def test_register_and_publish(self):
        """등록 순서대로 리스너 호출."""
        events = EventPublisher()
        calls: list[str] = []

        async def first(event: DomainEvent) -> None:
            calls.append("first")

        async def second(event: DomainEvent) -> None:
            calls.append("second")

        events.register(first, MemberRegistered)
        events.register(second, MemberRegistered)
        await events.publish(_registered())
        assert calls == ["first", "second"]

    async def test_other_event_types_ignored(self):
        events = EventPublisher()
        calls: list[DomainEvent] = []

        @events.subscribe(OrderPlaced)
        async def on_order(event: OrderPlaced) -> None:
            calls.append(event)

        await events.publish(_registered())
        assert calls == []

    async def test_base_class_listener_receives_subclasses(self):
        """상위 타입 구독 — 모든 하위 이벤트 수신."""
        events = EventPublisher()
        seen: list[str] = []

        @events.subscribe(DomainEvent)
        async def audit(event: DomainEvent) -> None:
            seen.append(type(event).__name__)

        await events.publish(_registered())
        await events.publish(MembershipUpgraded(member_id="m-1", previous_type="REGULAR", new_type="PREMIUM"))
        assert seen == ["MemberRegistered", "MembershipUpgraded"]

    async def test_register_twice_and_remove(self):
        events = EventPublisher()
        calls: list[int] = []

        async def listener(event: DomainEvent) -> None:
            calls.append(1)

        events.register(listener, MemberRegistered)
        events.register(listener, MemberRegistered)
        await events.publish(_registered())
        assert calls == [1]

        events.remove(listener, MemberRegistered)
        await events.publish(_registered())
        assert calls == [1]

    async def test_listener_error_propagates(self):
        events = EventPublisher()

        @events.subscribe(MemberRegistered)
        async def broken(event: MemberRegistered) -> None:
            raise ValueError("no")

        with pytest.raises(ValueError):
            await events.publish(_registered())

    def test_events_are_immutable(self):
        event = _registered()
        with pytest.raises(ValueError):
            event.name = "changed"  # type: ignore[misc]
        assert event.occurred_at.tzinfo is not None


class FailingEmailService:
    async def send_welcome(self, member) -> None:
        raise aiosmtplib.SMTPException("relay refused")


class TestDefaultListeners:
    async def test_welcome_email_failure_is_logged(self, monkeypatch, caplog):
        """환영 메일 SMTP 실패 — 경고 로그만 남기고 계속."""
        monkeypatch.setattr(listeners, "email_service", FailingEmailService())
        with caplog.at_level(logging.WARNING, logger="bookstore.events.listeners"):
            await listeners.send_welcome_email(_registered())
        assert "relay refused" in caplog.text

    async def test_order_placed_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="bookstore.events.listeners"):
            await listeners.log_order_placed(OrderPlaced(order_id="o-1", total_amount="12.50", book_ids=("b-1",)))
        assert "order=o-1 items=1 total=12.50" in caplog.text
