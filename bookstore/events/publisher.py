"""인프로세스 이벤트 발행기.

In-process event publisher. Listeners are registered per event class and
receive every event of that class or of its subclasses, in registration
order. The publisher knows nothing about concrete listeners.
"""

import logging
from collections.abc import Awaitable, Callable, Iterator
from itertools import chain
from typing import TypeVar

from bookstore.events.events import DomainEvent

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=DomainEvent)
Listener = Callable[[DomainEvent], Awaitable[None]]


class EventPublisher:
    """이벤트 타입별 리스너 레지스트리 + 발행.

    Type-keyed listener registry. ``publish`` awaits each matching listener
    in turn; an exception raised by a listener propagates to the caller.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[DomainEvent], list[Listener]] = {}

    def __getitem__(self, event_type: type[DomainEvent]) -> Iterator[Listener]:
        return chain(
            *(
                listeners
                for registered_to, listeners in self._listeners.items()
                if issubclass(event_type, registered_to)
            )
        )

    def register(self, listener: Listener, to: type[DomainEvent]) -> None:
        registered = self._listeners.setdefault(to, [])
        if listener not in registered:
            registered.append(listener)

    def remove(self, listener: Listener, to: type[DomainEvent]) -> None:
        if to in self._listeners and listener in self._listeners[to]:
            self._listeners[to].remove(listener)

    def subscribe(self, event_type: type[E]) -> Callable[[Callable[[E], Awaitable[None]]], Callable[[E], Awaitable[None]]]:
        """리스너 등록 데코레이터.

        Decorator form of ``register``::

            @publisher.subscribe(OrderPlaced)
            async def on_order_placed(event: OrderPlaced) -> None: ...
        """

        def decorator(listener: Callable[[E], Awaitable[None]]) -> Callable[[E], Awaitable[None]]:
            self.register(listener, event_type)  # type: ignore[arg-type]
            return listener

        return decorator

    async def publish(self, event: DomainEvent) -> None:
        listeners = list(self[type(event)])
        logger.debug("Publishing %s to %d listener(s)", type(event).__name__, len(listeners))
        for listener in listeners:
            await listener(event)


# 애플리케이션 공용 발행기 — Shared application publisher
publisher: EventPublisher = EventPublisher()
