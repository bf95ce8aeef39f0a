"""로깅 설정 및 AOP 스타일 실행 로깅 데코레이터.

Logging configuration and AOP-style execution logging decorators.
``log_execution`` wraps a single callable; ``log_calls`` applies it to every
public method of a class, so service classes get start/finish/failure logs
without mixing logging code into business logic.

Usage:
    @log_calls("SERVICE")
    class BookService: ...
"""

import functools
import inspect
import logging
import time
from typing import Any, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.config import settings

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

logger = logging.getLogger("bookstore.execution")

_LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_MAX_PARAM_LENGTH = 200


def configure_logging(level: str | None = None) -> None:
    """루트 로거 설정 — Configure the root logger once at application start.

    Args:
        level: 로깅 레벨 이름, None이면 settings.LOG_LEVEL (Level name, defaults to settings)
    """
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=_LOG_FORMAT)


def _format_param(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        text = f'"{value}"'
    else:
        text = repr(value)
    if len(text) > _MAX_PARAM_LENGTH:
        text = text[:_MAX_PARAM_LENGTH] + "..."
    return text


def format_parameters(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """호출 인자 문자열화 — Render call arguments, skipping DB sessions."""
    parts = [_format_param(a) for a in args if not isinstance(a, AsyncSession)]
    parts += [f"{k}={_format_param(v)}" for k, v in kwargs.items() if not isinstance(v, AsyncSession)]
    return "[" + ", ".join(parts) + "]"


def log_execution(layer: str = "SERVICE", name: str | None = None) -> Callable[[F], F]:
    """실행 시간/결과 로깅 데코레이터.

    Decorator logging start (with parameters), completion (with elapsed ms)
    and failure (with the error message) of the wrapped callable. Exceptions
    are always re-raised unchanged. Works for both sync and async callables.

    Args:
        layer: 로그 접두어 (Log prefix, e.g. "SERVICE", "CONTROLLER")
        name: 표시 이름, None이면 __qualname__ (Display name override)
    """

    def decorator(func: F) -> F:
        label = name or func.__qualname__
        skip_self = _takes_self(func)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                logger.info("[%s] %s start - params: %s", layer, label, format_parameters(args[1:] if skip_self else args, kwargs))
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    logger.error("[%s] %s failed - %.1fms, error: %s", layer, label, _elapsed_ms(start), exc)
                    raise
                logger.info("[%s] %s done - %.1fms", layer, label, _elapsed_ms(start))
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.info("[%s] %s start - params: %s", layer, label, format_parameters(args[1:] if skip_self else args, kwargs))
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.error("[%s] %s failed - %.1fms, error: %s", layer, label, _elapsed_ms(start), exc)
                raise
            logger.info("[%s] %s done - %.1fms", layer, label, _elapsed_ms(start))
            return result

        return sync_wrapper  # type: ignore[return-value]

    return decorator


def log_calls(layer: str = "SERVICE") -> Callable[[C], C]:
    """클래스 데코레이터 — 모든 public 메서드에 log_execution 적용.

    Class decorator applying ``log_execution`` to every public function
    defined directly on the class. Private helpers (leading underscore),
    properties and static/class methods are left untouched.
    """

    def decorator(cls: C) -> C:
        for attr_name, attr in list(vars(cls).items()):
            if attr_name.startswith("_") or not inspect.isfunction(attr):
                continue
            setattr(cls, attr_name, log_execution(layer, f"{cls.__name__}.{attr_name}")(attr))
        return cls

    return decorator


def _takes_self(func: Callable[..., Any]) -> bool:
    # 첫 인자가 self인 경우 파라미터 로그에서 제외 — drop "self" from the log
    params = list(inspect.signature(func).parameters)
    return bool(params) and params[0] == "self"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
