"""어댑터 패턴 예제 — 외부 JSON 파서를 표준 인터페이스에 맞춤.

Adapter example. The system speaks ``DataProcessor``; the third-party
``JsonParserLibrary`` has its own method name and signature, so
``JsonParserAdapter`` translates between the two.
"""

import json
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class DataProcessor(Protocol):
    """시스템 표준 인터페이스 — Standard processing interface."""

    def process_data(self) -> str: ...


class XmlDataProcessor:
    """기존 XML 처리기 — Existing processor already implementing the interface."""

    def process_data(self) -> str:
        logger.info("Processing XML data the existing way")
        return "xml"


class JsonParserLibrary:
    """외부 라이브러리 (수정 불가) — Third-party parser with an incompatible API."""

    def parse_json(self, raw: str) -> dict[str, Any]:
        return json.loads(raw)


class JsonParserAdapter:
    """JsonParserLibrary를 DataProcessor로 감싸는 어댑터.

    Adapter exposing ``JsonParserLibrary`` through ``DataProcessor``.
    """

    def __init__(self, library: JsonParserLibrary, raw: str) -> None:
        self._library = library
        self._raw = raw

    def process_data(self) -> str:
        parsed = self._library.parse_json(self._raw)
        logger.info("Processing JSON data through the adapter (%d keys)", len(parsed))
        return "json:" + ",".join(sorted(parsed))


def run_all(processors: list[DataProcessor]) -> list[str]:
    """인터페이스만으로 처리 — Callers depend only on DataProcessor."""
    return [p.process_data() for p in processors]
