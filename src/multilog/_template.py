"""Message templates - rendering, placeholder parsing and display text.

A rendered message is a flat list alternating literal text and values:
``['Hello ', 5, '']``. Even indexes are always literal strings.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

__all__ = [
    'Template',
    'format_message',
    'is_template',
    'parse_message_template',
    'render_message',
    ]


@dataclass(frozen=True)
class Template:
    """Literal segments with the values that go between them.

    >>> Template.of(['Hello ', ''], 5).render()
    ['Hello ', 5, '']
    """
    strings: tuple[str, ...]
    values: tuple[Any, ...] = ()

    @classmethod
    def of(cls, strings: Sequence[str], *values: Any) -> Template:
        return cls(tuple(strings), values)

    def render(self) -> list[Any]:
        return render_message(self.strings, self.values)


def is_template(obj: Any) -> bool:
    """True for Template and anything shaped like one (PEP 750 t-strings).
    """
    if isinstance(obj, Template):
        return True
    if isinstance(obj, (str, bytes, Mapping)):
        return False
    return hasattr(obj, 'strings') and hasattr(obj, 'values')


def render_message(strings: Sequence[str], values: Sequence[Any]) -> list[Any]:
    """Interleave literal segments with values.

    Output stops after the segment following the last supplied value;
    values beyond the last segment are dropped.

    >>> render_message(['a', 'b', 'c'], [1, 2])
    ['a', 1, 'b', 2, 'c']
    >>> render_message(['a', 'b', 'c'], [1])
    ['a', 1, 'b']
    >>> render_message(['a'], [])
    ['a']
    """
    rendered: list[Any] = []
    for i, segment in enumerate(strings):
        if i > len(values):
            break
        rendered.append(segment)
        if i < len(values):
            rendered.append(values[i])
    return rendered


def parse_message_template(template: str, properties: Mapping[str, Any],
                           default: Any = None) -> list[Any]:
    """Split a ``{name}`` template into literals and property values.

    ``{{`` and ``}}`` are escapes. Names missing from ``properties``
    resolve to ``default``.

    >>> parse_message_template('{a}', {'a': 7})
    ['', 7, '']
    >>> parse_message_template('{{x}}', {})
    ['{x}']
    >>> parse_message_template('user {name} left', {})
    ['user ', None, ' left']
    """
    message: list[Any] = []
    part = ''
    i = 0
    while i < len(template):
        char = template[i]
        next_char = template[i + 1] if i + 1 < len(template) else ''
        if char in '{}' and next_char == char:
            part += char
            i += 2
            continue
        if char == '{':
            message.append(part)
            part = ''
        elif char == '}':
            message.append(properties.get(part, default))
            part = ''
        else:
            part += char
        i += 1
    message.append(part)
    return message


def format_message(message: Any) -> str:
    """Display text for a message: literals as-is, values with repr().

    >>> format_message(['Hello ', 'world', '!'])
    "Hello 'world'!"
    >>> format_message('plain')
    'plain'
    """
    if isinstance(message, str):
        return message
    if not isinstance(message, (list, tuple)):
        return str(message)
    return ''.join(str(part) if i % 2 == 0 else repr(part)
                   for i, part in enumerate(message))


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
