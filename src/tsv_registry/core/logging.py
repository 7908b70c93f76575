from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, runtime_checkable

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

_CONFIGURED = False

# Server loggers that should flow into the root handler instead of their own.
_PROPAGATED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


@runtime_checkable
class ILogger(Protocol):
    def debug(self, event: str, **kw: Any) -> Any: ...
    def info(self, event: str, **kw: Any) -> Any: ...
    def warning(self, event: str, **kw: Any) -> Any: ...
    def error(self, event: str, **kw: Any) -> Any: ...
    def exception(self, event: str, **kw: Any) -> Any: ...
    def bind(self, **kw: Any) -> "ILogger": ...


def _shared_processors() -> list[Any]:
    return [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _make_handler(fmt: str) -> tuple[logging.Handler, Any]:
    """
    Return the root handler and the final structlog renderer for `fmt`.

    Both write to stderr; stdout is reserved for command output.
    """
    if fmt == "json":
        return logging.StreamHandler(stream=sys.stderr), structlog.processors.JSONRenderer()

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    return handler, structlog.processors.KeyValueRenderer(sort_keys=True)


def configure_logging(*, level: str = "INFO", fmt: str = "console") -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = level.upper()
    handler, renderer = _make_handler(fmt)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level_name)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level_name)
    root.addHandler(handler)

    for name in _PROPAGATED_LOGGERS:
        lib = logging.getLogger(name)
        lib.handlers.clear()
        lib.propagate = True

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True


def get_logger(name: str = "tsv_registry") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind(**values: Any) -> None:
    bind_contextvars(**values)


def clear_bindings() -> None:
    clear_contextvars()
