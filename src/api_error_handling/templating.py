"""Positional message templates.

Templates use ``{0}``, ``{1}``... placeholders. A single quote starts a
literal span in which braces are not interpreted, and two consecutive single
quotes render one quote character. Literal text that is going to be used as a
template therefore has to go through :func:`escape_single_quotes` first.
"""

from __future__ import annotations

from typing import Any, Sequence

QUOTE = "'"


def escape_single_quotes(text: str) -> str:
    return text.replace(QUOTE, QUOTE * 2)


def render_argument(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def format_message(pattern: str, arguments: Sequence[Any]) -> str:
    """Substitute ``arguments`` into ``pattern``.

    A placeholder may carry a format suffix (``{0,number}``), which is
    ignored. Placeholders whose index is out of range or not a number are
    kept verbatim.
    """

    result: list[str] = []
    length = len(pattern)
    index = 0
    in_quote = False
    while index < length:
        char = pattern[index]
        if char == QUOTE:
            if index + 1 < length and pattern[index + 1] == QUOTE:
                result.append(QUOTE)
                index += 2
                continue
            in_quote = not in_quote
            index += 1
            continue
        if char == "{" and not in_quote:
            end = _closing_brace(pattern, index)
            if end == -1:
                result.append(pattern[index:])
                break
            result.append(_substitute(pattern[index : end + 1], arguments))
            index = end + 1
            continue
        result.append(char)
        index += 1
    return "".join(result)


def _closing_brace(pattern: str, start: int) -> int:
    depth = 0
    for position in range(start, len(pattern)):
        if pattern[position] == "{":
            depth += 1
        elif pattern[position] == "}":
            depth -= 1
            if depth == 0:
                return position
    return -1


def _substitute(placeholder: str, arguments: Sequence[Any]) -> str:
    index_text = placeholder[1:-1].split(",", 1)[0].strip()
    if not (index_text.isascii() and index_text.isdigit()):
        return placeholder
    position = int(index_text)
    if position >= len(arguments):
        return placeholder
    return render_argument(arguments[position])


__all__ = ["escape_single_quotes", "format_message", "render_argument"]
