"""Structured logging setup shared by the client library and the CLI.

The library itself only emits events through :func:`get_logger`; it never
installs handlers. Applications (including the bundled CLI) call
:func:`configure_logging` once to choose the level and renderer.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, Sequence
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Final, cast

import structlog
from structlog.contextvars import (
    bind_contextvars,
    get_contextvars,
    unbind_contextvars,
)
from structlog.exceptions import DropEvent
from structlog.stdlib import BoundLogger

__all__ = [
    "LogFormat",
    "LogConfig",
    "DEFAULT_LOG_LEVEL",
    "configure_logging",
    "get_logger",
    "UnifiedLogger",
]


class LogFormat(str, Enum):
    """Supported output formats for the renderer."""

    JSON = "json"
    KEY_VALUE = "key_value"


DEFAULT_LOG_LEVEL = logging.WARNING
"""Default log level; retry diagnostics are emitted at DEBUG."""

_DEFAULT_LOGGER_NAME: Final[str] = "portal_db_client"
_LOG_METHOD_TO_LEVEL: Mapping[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "exception": logging.ERROR,
    "fatal": logging.CRITICAL,
}

_KEY_ORDER: Sequence[str] = (
    "timestamp",
    "level",
    "component",
    "method",
    "endpoint",
    "attempt",
    "status_code",
    "message",
)


@dataclass(frozen=True, slots=True)
class LogConfig:
    """User configurable logging parameters."""

    level: int | str = DEFAULT_LOG_LEVEL
    format: LogFormat = LogFormat.JSON
    redact_fields: Sequence[str] = ("api_key", "authorization", "Authorization")


def _coerce_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    mapped_level = logging.getLevelNamesMapping().get(level.upper())
    if isinstance(mapped_level, int):
        return mapped_level
    raise ValueError(f"Unsupported log level: {level}")


def _redact_sensitive_values(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
    *,
    redact_fields: Iterable[str],
) -> MutableMapping[str, Any]:
    for field in redact_fields:
        if field in event_dict:
            event_dict[field] = "***REDACTED***"
    return event_dict


def _shared_processors(config: LogConfig) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.EventRenamer("message"),
        partial(
            _redact_sensitive_values,
            redact_fields=config.redact_fields,
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer_for(format: LogFormat) -> Any:
    if format is LogFormat.KEY_VALUE:
        return structlog.processors.KeyValueRenderer(
            key_order=_KEY_ORDER,
            sort_keys=False,
            drop_missing=True,
        )
    return structlog.processors.JSONRenderer(sort_keys=True, ensure_ascii=False)


def _safe_filter_by_level(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Drop events that do not satisfy the active logging level."""

    effective_logger = logger or logging.getLogger(_DEFAULT_LOGGER_NAME)
    level = _LOG_METHOD_TO_LEVEL.get(method_name.lower(), logging.INFO)
    if effective_logger.isEnabledFor(level):
        return event_dict
    raise DropEvent


def configure_logging(config: LogConfig | None = None) -> None:
    """Initialise logging based on the supplied configuration."""

    cfg = config or LogConfig()
    shared_processors = _shared_processors(cfg)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared_processors, _safe_filter_by_level],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer_for(cfg.format),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logging.basicConfig(handlers=[handler], level=_coerce_log_level(cfg.level), force=True)

    structlog.configure(
        processors=[
            *shared_processors,
            _safe_filter_by_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = _DEFAULT_LOGGER_NAME) -> BoundLogger:
    """Return a bound logger for ``name`` backed by the stdlib logger of that name.

    Until :func:`configure_logging` runs, events reach stdlib logging only and
    are subject to its levels and handlers.
    """

    return cast(
        BoundLogger,
        structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger),
    )


class UnifiedLogger:
    """Facade over the module level helpers."""

    @staticmethod
    def configure(config: LogConfig | None = None) -> None:
        configure_logging(config)

    @staticmethod
    def get(name: str | None = None) -> BoundLogger:
        return get_logger(name or _DEFAULT_LOGGER_NAME)

    @staticmethod
    def scoped(**context: Any) -> AbstractContextManager[None]:
        """Return a context manager that temporarily overrides bound context."""

        @contextmanager
        def _scope() -> Iterator[None]:
            existing = get_contextvars()
            previous = {key: existing[key] for key in context if key in existing}
            bind_contextvars(**context)
            try:
                yield None
            finally:
                unbind_contextvars(*context.keys())
                if previous:
                    bind_contextvars(**previous)

        return _scope()
