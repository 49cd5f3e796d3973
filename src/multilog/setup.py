"""Logging configuration - loguru console sink for the default backend.
"""
from __future__ import annotations

import sys
from typing import Any

from multilog import config as config_log
from multilog._backend import get_backend

__all__ = ['FMT', 'configure_logging', 'set_level']

# <level> tags apply the level's color to the entire line
# {extra[category]} is the dotted category of the backend logger
FMT = '<level>{level.name:<8} {time:YYYY-MM-DD HH:mm:ss,SSS} {extra[category]} {message}</level>'

_LEVEL_ALIASES = {'WARN': 'WARNING', 'FATAL': 'CRITICAL'}

# Console sink currently installed by configure_logging
_console_kwargs: dict[str, Any] = {}
_console_id: int | None = None


def _normalize_level(levelname: str) -> str:
    levelname = levelname.upper()
    return _LEVEL_ALIASES.get(levelname, levelname)


def _category_patcher(record: dict) -> None:
    """Records logged through loguru directly still get a category."""
    record['extra'].setdefault('category', record['name'] or '')


def configure_logging(
    level: str | None = None,
    sink: Any = None,
    fmt: str = FMT,
    serialize: bool = False,
    colorize: bool | None = None,
) -> int:
    """Reset loguru and install one console sink.

    Args:
        level: Sink threshold (defaults to MULTILOG_LEVEL)
        sink: Where to write (defaults to sys.stderr)
        fmt: loguru format string
        serialize: Write JSON lines instead of text
        colorize: Force colors on/off, None auto-detects

    Returns
        Sink ID of the console sink
    """
    backend = get_backend()
    backend.reset()
    backend.configure(patcher=_category_patcher)

    _console_kwargs.clear()
    _console_kwargs.update(
        sink=sys.stderr if sink is None else sink,
        format=fmt,
        serialize=serialize,
        colorize=config_log.log.colorize if colorize is None else colorize,
        backtrace=False,
        diagnose=config_log.log.enable_diagnose,
    )
    return _add_console(_normalize_level(level or config_log.log.level))


def _add_console(level: str) -> int:
    global _console_id
    kwargs = dict(_console_kwargs)
    sink = kwargs.pop('sink')
    _console_id = get_backend().add_sink(sink, level=level, **kwargs)
    return _console_id


def set_level(levelname: str) -> int:
    """Change the console sink level.

    Configures logging first if it has not been configured.
    """
    global _console_id
    if _console_id is None:
        return configure_logging(level=levelname)
    get_backend().remove_sink(_console_id)
    _console_id = None
    return _add_console(_normalize_level(levelname))
