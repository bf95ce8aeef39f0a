"""템플릿 메서드 패턴 예제 — 데이터 내보내기.

Template Method example. ``AbstractDataProcessor.process`` fixes the
flow (select → transform → save); subclasses supply only the
transformation and the output file name.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# 공통 조회 결과 — Rows every processor starts from
SOURCE_ROWS = "id,name,role"


@dataclass(frozen=True)
class SavedFile:
    name: str
    content: str


class AbstractDataProcessor(ABC):
    """데이터 처리 템플릿 — Template for select → transform → save."""

    def process(self) -> SavedFile:
        """템플릿 메서드 — 전체 흐름 제어 (Subclasses do not override this)."""
        logger.info("--- %s run ---", type(self).__name__)
        data = self._select_data()
        return self._save_data(self.transform_data(data))

    def _select_data(self) -> str:
        logger.info("[common] selecting rows from the database")
        return SOURCE_ROWS

    def _save_data(self, data: str) -> SavedFile:
        saved = SavedFile(name=self.file_name(), content=data)
        logger.info("[save] %s written (%d chars)", saved.name, len(data))
        return saved

    @abstractmethod
    def transform_data(self, data: str) -> str: ...

    @abstractmethod
    def file_name(self) -> str: ...


class CsvDataProcessor(AbstractDataProcessor):
    def transform_data(self, data: str) -> str:
        return data

    def file_name(self) -> str:
        return "data.csv"


class JsonDataProcessor(AbstractDataProcessor):
    def transform_data(self, data: str) -> str:
        return json.dumps({"columns": data.split(",")})

    def file_name(self) -> str:
        return "data.json"
