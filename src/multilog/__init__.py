"""Logging facade over named backend loggers, with a loguru backend.

Public API - users should only import from this module.

Usage:
    import multilog

    # Console output
    multilog.configure_logging(level='DEBUG')

    # Module-level logging through the 'general' backend
    multilog.info('Application started')
    multilog.error('Something failed')

    # Named backends, persistent context and templates
    log = multilog.create_logger(
        backends={'db': multilog.get_category_logger('app', 'db')},
        context={'user': 'john'},
    )
    log.db.info('Query {query} by {user}', {'query': 'q1'})

    # Template literals and deferred messages
    log.info(multilog.Template.of(['Loaded ', ' rows'], 42))
    log.debug(lambda t: t(['Expensive ', ''], compute()))

    # Record-level sinks
    sink = multilog.MemorySink()
    multilog.add_sink(sink, level='INFO')
"""
from multilog._backend import BackendLogger, CategoryLogger, add_sink, complete
from multilog._backend import get_category_logger, remove_sink
from multilog._logger import Logger, LoggerOptions, create_logger
from multilog._template import Template, format_message, parse_message_template
from multilog._template import render_message
from multilog.errors import ConfigurationError, MultilogError
from multilog.errors import UnregisteredLoggerError
from multilog.record import Lazy, LazyState, LogLevel, LogRecord
from multilog.registry import GENERAL, LoggerRegistry
from multilog.setup import configure_logging, set_level
from multilog.sinks import MemorySink, RecordSink

# Module-level logger instance
_module_logger: Logger | None = None


def _get_module_logger() -> Logger:
    """Get the module-level logger instance."""
    global _module_logger
    if _module_logger is None:
        _module_logger = Logger()
    return _module_logger


# Module-level convenience functions
def debug(message=None, properties=None, bypass_sinks=None) -> None:
    """Log a debug message."""
    _get_module_logger().debug(message, properties, bypass_sinks)


def info(message=None, properties=None, bypass_sinks=None) -> None:
    """Log an info message."""
    _get_module_logger().info(message, properties, bypass_sinks)


def warning(message=None, properties=None, bypass_sinks=None) -> None:
    """Log a warning message."""
    _get_module_logger().warning(message, properties, bypass_sinks)


def error(message=None, properties=None, bypass_sinks=None) -> None:
    """Log an error message."""
    _get_module_logger().error(message, properties, bypass_sinks)


def fatal(message=None, properties=None, bypass_sinks=None) -> None:
    """Log a fatal message."""
    _get_module_logger().fatal(message, properties, bypass_sinks)


# Aliases
warn = warning
critical = fatal


__all__ = [
    # Configuration
    'configure_logging',
    'set_level',
    # Facade
    'create_logger',
    'Logger',
    'LoggerOptions',
    'LoggerRegistry',
    'GENERAL',
    # Backends
    'BackendLogger',
    'CategoryLogger',
    'get_category_logger',
    # Records and templates
    'Lazy',
    'LazyState',
    'LogLevel',
    'LogRecord',
    'Template',
    'format_message',
    'parse_message_template',
    'render_message',
    # Logging methods
    'debug',
    'info',
    'warning',
    'warn',
    'error',
    'fatal',
    'critical',
    # Sink management
    'add_sink',
    'remove_sink',
    'complete',
    'MemorySink',
    'RecordSink',
    # Errors
    'MultilogError',
    'ConfigurationError',
    'UnregisteredLoggerError',
]
