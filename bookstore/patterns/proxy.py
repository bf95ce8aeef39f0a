"""프록시/AOP 예제 — 실행 시간 측정의 분리.

Proxy / AOP example. ``MixedConcernEventService`` measures its own
execution time inline; ``EventService`` holds only the business step and
gets timing from the ``log_execution`` decorator wrapped around it.
"""

import logging
import time

from bookstore.utils.logger import log_execution

logger = logging.getLogger(__name__)


def _handle(event_name: str, work_seconds: float) -> str:
    logger.info("Processing event: %s", event_name)
    if work_seconds:
        time.sleep(work_seconds)
    return f"processed:{event_name}"


class MixedConcernEventService:
    """부가 기능이 섞인 서비스 — Business step and timing code side by side."""

    def __init__(self) -> None:
        self.last_elapsed_ms: float = 0.0

    def process_event(self, event_name: str, work_seconds: float = 0.0) -> str:
        start = time.perf_counter()  # 부가 기능
        result = _handle(event_name, work_seconds)
        self.last_elapsed_ms = (time.perf_counter() - start) * 1000  # 부가 기능
        logger.info("== elapsed: %.1fms ==", self.last_elapsed_ms)
        return result


class EventService:
    """핵심 로직만 남긴 서비스 — Timing supplied by the decorator."""

    @log_execution("PATTERN")
    def process_event(self, event_name: str, work_seconds: float = 0.0) -> str:
        return _handle(event_name, work_seconds)
