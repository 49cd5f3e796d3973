"""Loguru sinks that receive LogRecord objects instead of text.

Each sink is a callable that receives a loguru Message object. Records
emitted by a CategoryLogger are passed through untouched, so their lazy
message and properties are only computed if the sink reads them.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from multilog.record import LogLevel, LogRecord

if TYPE_CHECKING:
    from loguru import Message

__all__ = ['MemorySink', 'RecordSink']


def _to_log_record(record: dict) -> LogRecord:
    """Build a LogRecord for something logged with loguru directly."""
    extra = dict(record['extra'])
    extra.pop('bypass_sinks', None)
    category = extra.pop('category', None) or record['name'] or ''
    return LogRecord(
        category=category.split('.'),
        level=LogLevel.from_loguru(record['level'].name),
        message=record['message'],
        properties=extra,
        timestamp=record['time'],
    )


class RecordSink:
    """Call ``fn`` with the LogRecord behind each loguru message.

    >>> add_sink(RecordSink(lambda record: print(record.category, record.message)))  # doctest: +SKIP
    """

    def __init__(self, fn: Callable[[LogRecord], Any]):
        self.fn = fn

    def __call__(self, message: Message) -> None:
        record = message.record
        log_record = record['extra'].get('record')
        if not isinstance(log_record, LogRecord):
            log_record = _to_log_record(record)
        self.fn(log_record)


class MemorySink(RecordSink):
    """Keep every record in a list, for tests and buffering.

    Loguru serializes writes to the sink, but ``records`` is also read
    and cleared by other threads while logging threads append, so every
    access goes through a lock.
    """

    def __init__(self):
        super().__init__(self._append)
        self.records: list[LogRecord] = []
        self._lock = threading.Lock()

    def _append(self, record: LogRecord) -> None:
        with self._lock:
            self.records.append(record)

    def clear(self) -> None:
        with self._lock:
            self.records.clear()

    def messages(self) -> list[str]:
        """Rendered text of every record, forcing lazy messages."""
        with self._lock:
            records = list(self.records)
        return [record.render() for record in records]
