"""JSON text output in the compact and tab-indented styles, and minification."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterator, Mapping
from typing import Any

from nanoedge.cjson_tree import JsonObject

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
_MAX_NUMBER_LENGTH = 25
_END = object()


def _numbers_equal(a: float, b: float) -> bool:
    largest = max(abs(a), abs(b))
    return abs(a - b) <= largest * sys.float_info.epsilon


def format_number(value: int | float) -> str:
    """Render a number as JSON text.

    Fifteen significant digits are used when they read back as the same
    value, seventeen otherwise. NaN and infinities come out as ``null``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"not a number: {value!r}")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        return "null"
    text = "%1.15g" % number
    if not _numbers_equal(float(text), number):
        text = "%1.17g" % number
    if len(text) > _MAX_NUMBER_LENGTH:
        raise ValueError(f"number {value!r} does not fit the output format")
    return text


def _quote(text: str) -> str:
    # Strings end at an embedded NUL, as a C string would.
    text = text.split("\0", 1)[0]
    parts = ['"']
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ord(ch) < 32:
            parts.append("\\u%04x" % ord(ch))
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


def _scalar(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return _quote(value)
    raise TypeError(f"value of type {type(value).__name__} is not JSON")


class _Frame:
    __slots__ = ("container", "entries", "is_object", "first")

    def __init__(self, container: Any, entries: Iterator[Any], is_object: bool) -> None:
        self.container = container
        self.entries = entries
        self.is_object = is_object
        self.first = True


def _object_pairs(value: Any) -> Iterator[tuple[str, Any]]:
    pairs = value.items()
    for key, item in pairs:
        if not isinstance(key, str):
            raise TypeError("JSON object keys must be strings")
        yield key, item


def dumps(value: Any, formatted: bool = True) -> str:
    """Render a JSON value as text.

    Formatted output puts each object entry on its own line, indented by
    tabs, with a tab after the colon; array elements are separated by
    ``", "``. Unformatted output has no whitespace. Objects may be
    JsonObject or any mapping with string keys. Raises TypeError for a
    value that is not JSON and ValueError for a container that holds
    itself.
    """
    out: list[str] = []
    stack: list[_Frame] = []
    active: set[int] = set()
    current = value
    while True:
        if isinstance(current, (JsonObject, Mapping)):
            if id(current) in active:
                raise ValueError("a container cannot hold itself")
            active.add(id(current))
            out.append("{\n" if formatted else "{")
            stack.append(_Frame(current, _object_pairs(current), True))
        elif isinstance(current, (list, tuple)):
            if id(current) in active:
                raise ValueError("a container cannot hold itself")
            active.add(id(current))
            out.append("[")
            stack.append(_Frame(current, iter(current), False))
        else:
            out.append(_scalar(current))

        while stack:
            frame = stack[-1]
            depth = len(stack)
            entry = next(frame.entries, _END)
            if entry is _END:
                if frame.is_object:
                    if formatted:
                        if not frame.first:
                            out.append("\n")
                        out.append("\t" * (depth - 1))
                    out.append("}")
                else:
                    out.append("]")
                active.discard(id(frame.container))
                stack.pop()
                continue
            if frame.is_object:
                if not frame.first:
                    out.append(",\n" if formatted else ",")
                key, current = entry
                if formatted:
                    out.append("\t" * depth)
                out.append(_quote(key))
                out.append(":\t" if formatted else ":")
            else:
                if not frame.first:
                    out.append(", " if formatted else ",")
                current = entry
            frame.first = False
            break
        else:
            return "".join(out)


def _copy_string(text: str, start: int, out: list[str]) -> int:
    out.append(text[start])
    position = start + 1
    length = len(text)
    while position < length:
        ch = text[position]
        out.append(ch)
        if ch == '"':
            return position + 1
        if ch == "\\" and text[position + 1 : position + 2] == '"':
            out.append('"')
            position += 1
        position += 1
    return position


def minify(text: str) -> str:
    """Strip whitespace and ``//`` and ``/* */`` comments outside strings.

    A ``/`` that starts no comment is dropped. The text ends at an
    embedded NUL.
    """
    text = text.split("\0", 1)[0]
    out: list[str] = []
    position = 0
    length = len(text)
    while position < length:
        ch = text[position]
        if ch in " \t\r\n":
            position += 1
        elif ch == "/":
            following = text[position + 1 : position + 2]
            if following == "/":
                end = text.find("\n", position + 2)
                position = length if end < 0 else end + 1
            elif following == "*":
                end = text.find("*/", position + 2)
                position = length if end < 0 else end + 2
            else:
                position += 1
        elif ch == '"':
            position = _copy_string(text, position, out)
        else:
            out.append(ch)
            position += 1
    return "".join(out)