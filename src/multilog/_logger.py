"""Logger facade - one fluent object in front of named backend loggers.

Users interact with this module, never with loguru directly.
"""
from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from multilog._backend import BackendLogger
from multilog._template import is_template, render_message
from multilog.record import Lazy, LogLevel, LogRecord
from multilog.registry import GENERAL, LoggerRegistry

__all__ = ['Logger', 'LoggerOptions', 'create_logger']

Properties = Mapping[str, Any] | Callable[[dict[str, Any]], Mapping[str, Any]] | None


@dataclass(frozen=True)
class LoggerOptions:
    """Construction options for a Logger."""
    selected_logger: str | None = None
    template: Any = None
    context: Mapping[str, Any] | None = None
    backends: Mapping[str, BackendLogger] | None = None


def _prefix(strings: Iterable[str], *values: Any) -> list[Any]:
    """Render function handed to message callbacks."""
    return render_message(list(strings), values)


def _deferred_properties(context: dict[str, Any], properties: Properties) -> dict[str, Any] | Lazy:
    if callable(properties):
        return Lazy(lambda: {**context, **(properties(context) or {})})
    if properties:
        context.update(properties)
    return context


class Logger:
    """Logging facade over a registry of named backends.

    A Logger is an immutable view: selecting a backend, merging context or
    setting a template returns a new Logger and leaves the original alone,
    so one instance can be shared between threads.

    >>> log = Logger(backends={'db': get_category_logger('app', 'db')})  # doctest: +SKIP
    >>> log.db.context({'query': 'q1'}).info('Query {query} done')  # doctest: +SKIP
    """
    __slots__ = ('_registry', '_selected', '_template', '_context')

    def __init__(self, options: LoggerOptions | None = None, /, **kwargs: Any) -> None:
        if options is None:
            options = LoggerOptions(**kwargs)
        elif kwargs:
            options = dataclasses.replace(options, **kwargs)
        registry = LoggerRegistry(options.backends)
        selected = options.selected_logger or GENERAL
        registry.resolve(selected)
        self._registry = registry
        self._selected = selected
        self._template = options.template
        self._context = dict(options.context or {})

    def _evolve(self, **changes: Any) -> Logger:
        view = object.__new__(type(self))
        view._registry = self._registry
        view._selected = changes.get('selected', self._selected)
        view._template = changes.get('template', self._template)
        view._context = changes.get('context', self._context)
        return view

    @property
    def registry(self) -> LoggerRegistry:
        return self._registry

    @property
    def selected_logger(self) -> str:
        return self._selected

    @property
    def template(self) -> Any:
        return self._template

    @property
    def backend(self) -> BackendLogger:
        """The currently selected backend logger."""
        return self._registry.resolve(self._selected)

    def select(self, name: str) -> Logger:
        """Return a view writing to backend ``name``.

        Raises UnregisteredLoggerError if ``name`` was never registered.
        """
        self._registry.resolve(name)
        return self._evolve(selected=name)

    @property
    def general(self) -> Logger:
        return self.select(GENERAL)

    def __getattr__(self, name: str) -> Logger:
        # Only reached for names that are not real attributes
        if name.startswith('_'):
            raise AttributeError(name)
        return self.select(name)

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._registry})

    def with_(self, *, selected_logger: str | None = None, template: Any = None,
              context: Mapping[str, Any] | None = None) -> Logger:
        """Return a view with a new selection, template and/or extra context.

        The selection is validated first; on failure nothing changes.
        """
        selected = self._selected
        if selected_logger is not None:
            self._registry.resolve(selected_logger)
            selected = selected_logger
        return self._evolve(
            selected=selected,
            template=self._template if template is None else template,
            context={**self._context, **context} if context else self._context,
        )

    def context(self, context: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Logger:
        """Return a view with additional context."""
        return self._evolve(context={**self._context, **(context or {}), **kwargs})

    def bind(self, **kwargs: Any) -> Logger:
        """Return a new logger with additional context."""
        return self.context(kwargs)

    def message(self, message: Any) -> Logger:
        """Return a view with a new default message template."""
        return self._evolve(template=message)

    def debug(self, message: Any = None, properties: Properties = None,
              bypass_sinks: Iterable[Any] | None = None) -> Logger:
        self._log(LogLevel.DEBUG, message, properties, bypass_sinks)
        return self

    def info(self, message: Any = None, properties: Properties = None,
             bypass_sinks: Iterable[Any] | None = None) -> Logger:
        self._log(LogLevel.INFO, message, properties, bypass_sinks)
        return self

    def warning(self, message: Any = None, properties: Properties = None,
                bypass_sinks: Iterable[Any] | None = None) -> Logger:
        self._log(LogLevel.WARNING, message, properties, bypass_sinks)
        return self

    def error(self, message: Any = None, properties: Properties = None,
              bypass_sinks: Iterable[Any] | None = None) -> Logger:
        self._log(LogLevel.ERROR, message, properties, bypass_sinks)
        return self

    def fatal(self, message: Any = None, properties: Properties = None,
              bypass_sinks: Iterable[Any] | None = None) -> Logger:
        self._log(LogLevel.FATAL, message, properties, bypass_sinks)
        return self

    # Aliases
    warn = warning
    critical = fatal

    def _log(self, level: LogLevel, message: Any, properties: Properties,
             bypass_sinks: Iterable[Any] | None) -> None:
        """Build the emission for one call shape and hand it to the backend.

        - str: literal message, properties merged now, backend.log()
        - Template (or t-string): rendered now, backend.emit()
        - callable: called with a render prefix on first read, backend.emit()
        - mapping: merged as properties, message from the template
        - anything else: sent as the record message, backend.emit()
        """
        backend = self.backend
        context = copy.deepcopy(self._context)

        if isinstance(message, Mapping):
            context.update(message)
            message = None
        if message is None:
            message = '' if self._template is None else self._template

        if isinstance(message, str):
            extra = properties(context) if callable(properties) else properties
            if extra:
                context.update(extra)
            backend.log(level, message, context, bypass_sinks)
            return

        props = _deferred_properties(context, properties)
        if is_template(message):
            rendered = render_message(list(message.strings), list(message.values))
            record = LogRecord(backend.category, level, rendered, props)
        elif callable(message):
            callback = message
            record = LogRecord.lazy(backend.category, level, lambda: callback(_prefix), props)
        else:
            record = LogRecord(backend.category, level, message, props)
        backend.emit(record, bypass_sinks)

    def __repr__(self) -> str:
        return f'Logger(selected_logger={self._selected!r}, backends={list(self._registry)!r})'


def create_logger(options: LoggerOptions | None = None, /, **kwargs: Any) -> Logger:
    """Create a facade, optionally with named backends.

    Args:
        options: LoggerOptions, or pass its fields as keywords
        **kwargs: selected_logger, template, context, backends

    Returns
        Logger instance

    Examples
        >>> log = create_logger(context={'user': 'john'})
        >>> log.info('Processing request')  # doctest: +SKIP

        >>> log = create_logger(backends={'init': get_category_logger('app', 'init')})  # doctest: +SKIP
        >>> log.init.error('Initialization failed')  # doctest: +SKIP
    """
    return Logger(options, **kwargs)
