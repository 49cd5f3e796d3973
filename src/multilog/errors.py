"""Exceptions raised by the logger facade.
"""
from __future__ import annotations

__all__ = [
    'MultilogError',
    'ConfigurationError',
    'UnregisteredLoggerError',
    ]


class MultilogError(Exception):
    """Base class for facade errors.
    """


class ConfigurationError(MultilogError):
    """Facade was asked for something it was never configured with.
    """


class UnregisteredLoggerError(ConfigurationError, AttributeError):
    """Selecting a backend name that is not in the registry.

    Also an AttributeError, so ``getattr(logger, name, default)`` and
    ``hasattr`` behave for the per-name accessors.
    """

    def __init__(self, logger_name: str) -> None:
        self.logger_name = logger_name
        super().__init__(f'Logger "{logger_name}" is not registered.')
