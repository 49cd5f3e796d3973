"""Log records with lazily computed message and properties.
"""
from __future__ import annotations

import datetime
import threading
from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any, Generic, TypeVar

from multilog._template import format_message

T = TypeVar('T')

__all__ = ['Lazy', 'LazyState', 'LogLevel', 'LogRecord']


class LogLevel(StrEnum):
    """Severity levels, lowest first."""
    DEBUG = 'debug'
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'
    FATAL = 'fatal'

    @property
    def loguru_name(self) -> str:
        return _LOGURU_NAMES[self]

    @classmethod
    def from_loguru(cls, name: str) -> LogLevel:
        """Map a loguru level name back, unknown names count as INFO."""
        return _FROM_LOGURU.get(name, cls.INFO)


_LOGURU_NAMES = {
    LogLevel.DEBUG: 'DEBUG',
    LogLevel.INFO: 'INFO',
    LogLevel.WARNING: 'WARNING',
    LogLevel.ERROR: 'ERROR',
    LogLevel.FATAL: 'CRITICAL',
}
_FROM_LOGURU = {v: k for k, v in _LOGURU_NAMES.items()} | {'TRACE': LogLevel.DEBUG}


class LazyState(StrEnum):
    PENDING = 'pending'
    RESOLVED = 'resolved'
    FAILED = 'failed'


class Lazy(Generic[T]):
    """Memoized value produced by a zero-argument callable.

    The producer runs at most once, under a per-cell lock, so readers on
    other threads wait for the first evaluation. A failing producer leaves
    the cell FAILED and every later force() re-raises the same exception.
    A BaseException (KeyboardInterrupt, SystemExit) is not cached: the
    cell stays PENDING and the next force() calls the producer again.

    >>> calls = []
    >>> cell = Lazy(lambda: calls.append(1) or 'done')
    >>> cell.force(), cell.force(), len(calls)
    ('done', 'done', 1)
    """
    __slots__ = ('_state', '_value', '_producer', '_lock')

    def __init__(self, producer: Callable[[], T]) -> None:
        self._state = LazyState.PENDING
        self._value: Any = None
        self._producer: Callable[[], T] | None = producer
        self._lock = threading.Lock()

    @classmethod
    def resolved(cls, value: T) -> Lazy[T]:
        cell = cls.__new__(cls)
        cell._state = LazyState.RESOLVED
        cell._value = value
        cell._producer = None
        cell._lock = None
        return cell

    @classmethod
    def of(cls, value: T | Lazy[T]) -> Lazy[T]:
        """Wrap a plain value, pass an existing cell through."""
        if isinstance(value, Lazy):
            return value
        return cls.resolved(value)

    @property
    def state(self) -> LazyState:
        return self._state

    def force(self) -> T:
        if self._state is LazyState.PENDING:
            with self._lock:
                if self._state is LazyState.PENDING:
                    self._evaluate()
        if self._state is LazyState.FAILED:
            raise self._value
        return self._value

    def _evaluate(self) -> None:
        # Caller holds the lock; the producer is dropped only once settled
        try:
            value = self._producer()
        except Exception as exc:
            self._value, self._state = exc, LazyState.FAILED
        else:
            self._value, self._state = value, LazyState.RESOLVED
        self._producer = None

    def __repr__(self) -> str:
        if self._state is LazyState.PENDING:
            return '<Lazy pending>'
        return f'<Lazy {self._state.value} {self._value!r}>'


Properties = dict[str, Any] | Callable[[], dict[str, Any]] | Lazy[dict[str, Any]]


class LogRecord:
    """One emission handed to a backend.

    ``message`` and ``properties`` read like plain attributes but are
    backed by Lazy cells, so a sink reading them twice sees one value.
    """
    __slots__ = ('category', 'level', 'timestamp', '_message', '_properties')

    def __init__(
        self,
        category: Iterable[str],
        level: LogLevel | str,
        message: Any,
        properties: Properties | None = None,
        timestamp: datetime.datetime | None = None,
    ) -> None:
        self.category = tuple(category)
        self.level = LogLevel(level)
        self.timestamp = timestamp or datetime.datetime.now(datetime.UTC)
        self._message = Lazy.of(message)
        if properties is None:
            properties = {}
        elif callable(properties) and not isinstance(properties, Lazy):
            properties = Lazy(properties)
        self._properties = Lazy.of(properties)

    @classmethod
    def lazy(
        cls,
        category: Iterable[str],
        level: LogLevel | str,
        message_producer: Callable[[], Any],
        properties: Properties | None = None,
    ) -> LogRecord:
        """Record whose message is built on first read."""
        return cls(category, level, Lazy(message_producer), properties)

    @property
    def message(self) -> Any:
        return self._message.force()

    @property
    def properties(self) -> dict[str, Any]:
        return self._properties.force()

    def render(self) -> str:
        return format_message(self.message)

    def __repr__(self) -> str:
        return (f'LogRecord(category={self.category!r}, level={self.level.value!r}, '
                f'message={self._message!r}, properties={self._properties!r})')


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
