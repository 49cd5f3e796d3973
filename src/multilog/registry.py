"""Named backend loggers for one facade.
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from multilog import config as config_log
from multilog._backend import BackendLogger, get_category_logger
from multilog.errors import UnregisteredLoggerError

__all__ = ['GENERAL', 'LoggerRegistry']

GENERAL = 'general'


class LoggerRegistry(Mapping[str, BackendLogger]):
    """Read-only mapping of name to backend logger.

    ``general`` is always present. It maps to the process-wide default
    backend unless one is supplied explicitly.
    """

    def __init__(self, backends: Mapping[str, BackendLogger] | None = None,
                 general: BackendLogger | None = None) -> None:
        if general is None:
            general = get_category_logger(config_log.log.category, GENERAL)
        entries: dict[str, BackendLogger] = {GENERAL: general}
        entries.update(backends or {})
        self._backends = MappingProxyType(entries)

    def register(self, name: str, backend: BackendLogger) -> LoggerRegistry:
        """Return a new registry with ``name`` added or replaced."""
        return LoggerRegistry({**self._backends, name: backend},
                              general=self._backends[GENERAL])

    def resolve(self, name: str) -> BackendLogger:
        try:
            return self._backends[name]
        except KeyError:
            raise UnregisteredLoggerError(name) from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._backends)

    def __getitem__(self, name: str) -> BackendLogger:
        return self._backends[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._backends)

    def __len__(self) -> int:
        return len(self._backends)

    def __repr__(self) -> str:
        return f'LoggerRegistry({dict(self._backends)!r})'
