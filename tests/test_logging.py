"""실행 로깅 데코레이터 테스트 — log_execution, log_calls.

Tests for the execution logging decorators.
"""

import logging

import pytest

from bookstore.utils.logger import format_parameters, log_calls, log_execution

LOGGER = "bookstore.execution"


@log_calls("SERVICE")
class SampleService:
    def greet(self, name: str) -> str:
        return f"hello {name}"

    async def fail(self) -> None:
        raise LookupError("missing")

    def _helper(self) -> str:
        return "untouched"


class TestLogExecution:
    def test_sync_start_and_done(self, caplog):
        """시작/완료 로그 — 파라미터와 소요 시간 포함."""
        with caplog.at_level(logging.INFO, logger=LOGGER):
            assert SampleService().greet("Minsu") == "hello Minsu"
        messages = [r.getMessage() for r in caplog.records if r.name == LOGGER]
        assert messages[0] == '[SERVICE] SampleService.greet start - params: ["Minsu"]'
        assert messages[1].startswith("[SERVICE] SampleService.greet done - ")
        assert messages[1].endswith("ms")

    async def test_async_failure_reraised(self, caplog):
        """실패 로그 후 예외 그대로 전파."""
        with caplog.at_level(logging.INFO, logger=LOGGER):
            with pytest.raises(LookupError, match="missing"):
                await SampleService().fail()
        errors = [r for r in caplog.records if r.name == LOGGER and r.levelno == logging.ERROR]
        assert "SampleService.fail failed" in errors[0].getMessage()
        assert "error: missing" in errors[0].getMessage()

    def test_private_methods_not_wrapped(self, caplog):
        with caplog.at_level(logging.INFO, logger=LOGGER):
            SampleService()._helper()
        assert not [r for r in caplog.records if r.name == LOGGER]

    def test_plain_function_with_custom_name(self, caplog):
        @log_execution("JOB", name="nightly")
        def run(count: int) -> int:
            return count * 2

        with caplog.at_level(logging.INFO, logger=LOGGER):
            assert run(3) == 6
        assert "[JOB] nightly start - params: [3]" in caplog.text


class TestFormatParameters:
    def test_long_values_truncated(self):
        rendered = format_parameters(("x" * 500,), {})
        assert rendered.endswith("...]")
        assert len(rendered) < 260

    def test_keyword_and_none(self):
        assert format_parameters((None,), {"limit": 5}) == "[None, limit=5]"
