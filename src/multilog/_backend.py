"""Loguru backend - internal implementation detail.

This module is NOT part of the public API beyond the names re-exported from
``multilog``. Facade code talks to the BackendLogger protocol; only this file
knows about loguru.
"""
from __future__ import annotations

import inspect
import os
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from loguru import logger as _loguru
from multilog._template import parse_message_template
from multilog.record import Lazy, LogLevel, LogRecord

__all__ = [
    'BackendLogger',
    'CategoryLogger',
    'add_sink',
    'complete',
    'get_backend',
    'get_category_logger',
    'remove_sink',
    ]

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep

Properties = Mapping[str, Any] | Callable[[], Mapping[str, Any]]


@runtime_checkable
class BackendLogger(Protocol):
    """What the facade needs from a named backend."""
    category: tuple[str, ...]

    def log(self, level: LogLevel, message: str, properties: Properties,
            bypass_sinks: Iterable[Any] | None = None) -> None: ...

    def emit(self, record: LogRecord,
             bypass_sinks: Iterable[Any] | None = None) -> None: ...


class CategoryLogger:
    """Backend logger for one category, writing through loguru.

    Records travel in ``extra['record']`` and the message text is passed
    as a lazy loguru argument, so nothing is rendered unless some sink's
    level accepts the record.
    """

    def __init__(self, category: Iterable[str]) -> None:
        self.category = tuple(category)

    @property
    def name(self) -> str:
        return '.'.join(self.category)

    def log(self, level: LogLevel, message: str, properties: Properties,
            bypass_sinks: Iterable[Any] | None = None) -> None:
        """Log a ``{placeholder}`` message against its properties."""
        props = Lazy(properties) if callable(properties) else Lazy.resolved(properties)

        def render() -> Any:
            if not isinstance(message, str):
                return message
            return parse_message_template(message, props.force())

        self.emit(LogRecord.lazy(self.category, level, render, props), bypass_sinks)

    def emit(self, record: LogRecord,
             bypass_sinks: Iterable[Any] | None = None) -> None:
        """Hand a full record to loguru."""
        # Find the first frame outside this package for correct caller info
        frame, depth = inspect.currentframe(), 0
        while frame and frame.f_code.co_filename.startswith(_PACKAGE_DIR):
            frame = frame.f_back
            depth += 1

        _loguru.bind(
            category=self.name,
            record=record,
            bypass_sinks=tuple(bypass_sinks or ()),
        ).opt(depth=depth, lazy=True).log(record.level.loguru_name, '{}', record.render)

    def __repr__(self) -> str:
        return f'CategoryLogger({self.name!r})'


_category_loggers: dict[tuple[str, ...], CategoryLogger] = {}


def get_category_logger(*category: str) -> CategoryLogger:
    """Get the backend logger for a category, one instance per category.

    >>> get_category_logger('app', 'db') is get_category_logger('app', 'db')
    True
    """
    if category not in _category_loggers:
        _category_loggers[category] = CategoryLogger(category)
    return _category_loggers[category]


def _same_sink(given: Any, sink: Any) -> bool:
    """Identity, or equality for sinks given as paths and similar values.

    >>> _same_sink('app.log', ''.join(['app', '.log']))
    True
    """
    if given is sink:
        return True
    try:
        return bool(given == sink)
    except Exception:
        return False


def _bypass_filter(sink: Any, user_filter: Any) -> Callable[[dict], bool]:
    """Wrap a sink filter so records bypassing ``sink`` are dropped."""
    if isinstance(user_filter, dict):
        raise TypeError('dict filters are not supported, pass a callable')
    if isinstance(user_filter, str):
        prefix = user_filter

        def user_filter(record: dict) -> bool:  # loguru's module-name filter
            name = record['name'] or ''
            return not prefix or name == prefix or name.startswith(prefix + '.')

    def _filter(record: dict) -> bool:
        if any(_same_sink(s, sink) for s in record['extra'].get('bypass_sinks', ())):
            return False
        return user_filter is None or user_filter(record)
    return _filter


class LoguruBackend:
    """Loguru sink management."""

    def __init__(self):
        self._sink_ids: list[int] = []
        self._configure_colors()

    def _configure_colors(self) -> None:
        """Configure level colors."""
        # DEBUG: purple/magenta, INFO: green, WARNING: yellow, ERROR/CRITICAL: red
        _loguru.level('DEBUG', color='<magenta>')
        _loguru.level('INFO', color='<green>')
        _loguru.level('WARNING', color='<yellow>')
        _loguru.level('ERROR', color='<red>')
        _loguru.level('CRITICAL', color='<red><bold>')

    def reset(self) -> None:
        """Remove all sinks and start fresh."""
        _loguru.remove()
        self._sink_ids.clear()
        self._configure_colors()  # Reapply colors after reset

    def add_sink(self, sink: Any, **kwargs) -> int:
        """Add a sink and return its ID.

        The sink object itself is what callers put in ``bypass_sinks``.
        """
        kwargs['filter'] = _bypass_filter(sink, kwargs.get('filter'))
        sink_id = _loguru.add(sink, **kwargs)
        self._sink_ids.append(sink_id)
        return sink_id

    def remove_sink(self, sink_id: int) -> None:
        """Remove a sink by ID."""
        _loguru.remove(sink_id)
        if sink_id in self._sink_ids:
            self._sink_ids.remove(sink_id)

    def configure(self, **kwargs) -> None:
        """Configure the logger (patchers, etc.)."""
        _loguru.configure(**kwargs)

    def complete(self) -> None:
        """Wait for all async sinks to complete."""
        _loguru.complete()


# Singleton backend instance
_backend: LoguruBackend | None = None


def get_backend() -> LoguruBackend:
    """Get the singleton backend instance."""
    global _backend
    if _backend is None:
        _backend = LoguruBackend()
    return _backend


# Module-level convenience functions for public API
def add_sink(sink: Any, **kwargs) -> int:
    """Add a sink. Returns sink ID for later removal."""
    return get_backend().add_sink(sink, **kwargs)


def remove_sink(sink_id: int) -> None:
    """Remove a sink by its ID."""
    get_backend().remove_sink(sink_id)


def complete() -> None:
    """Wait for all async sinks to complete. Call on shutdown."""
    get_backend().complete()
