"""A lenient JSON parser that keeps duplicate keys and reports where it stopped."""

from __future__ import annotations

import re
from typing import Any

from nanoedge.cjson_tree import JsonObject

NESTING_LIMIT = 1000

_NUMBER_CHARS = frozenset("0123456789+-eE.")
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
    "/": "/",
}
_MAX_NUMBER_LENGTH = 63


class JsonParseError(ValueError):
    """The text is not valid JSON; ``position`` is where parsing failed."""

    def __init__(self, position: int) -> None:
        super().__init__(f"invalid JSON at position {position}")
        self.position = position


class _Failure(Exception):
    pass


def _hex4(digits: str) -> int:
    # A malformed digit makes the whole sequence count as zero.
    if len(digits) != 4 or any(ch not in _HEX_DIGITS for ch in digits):
        return 0
    return int(digits, 16)


class _Parser:
    def __init__(self, text: str) -> None:
        # Parsing stops at an embedded NUL; the NUL terminator is kept.
        self.content = text.split("\0", 1)[0] + "\0"
        self.length = len(self.content)
        self.offset = 0
        self.depth = 0

    def can_access(self, index: int) -> bool:
        return self.offset + index < self.length

    def can_read(self, size: int) -> bool:
        return self.offset + size <= self.length

    def char(self) -> str:
        return self.content[self.offset]

    def at(self, expected: str) -> bool:
        return self.can_access(0) and self.char() == expected

    def skip_whitespace(self) -> None:
        if not self.can_access(0):
            return
        while self.can_access(0) and ord(self.char()) <= 32:
            self.offset += 1
        if self.offset == self.length:
            self.offset -= 1

    def skip_bom(self) -> None:
        if self.content.startswith("\ufeff") and self.length > 2:
            self.offset += 1

    def startswith(self, word: str) -> bool:
        return self.can_read(len(word)) and self.content.startswith(word, self.offset)

    def number(self) -> int | float:
        collected = []
        for ch in self.content[self.offset : self.offset + _MAX_NUMBER_LENGTH]:
            if ch not in _NUMBER_CHARS:
                break
            collected.append(ch)
        match = _NUMBER_PREFIX.match("".join(collected))
        if match is None:
            raise _Failure
        literal = match.group(0)
        self.offset += len(literal)
        if "." in literal or "e" in literal or "E" in literal:
            return float(literal)
        return int(literal)

    def _utf16(self, start: int, end: int) -> tuple[str, int]:
        content = self.content
        if end - start < 6:
            raise _Failure
        first = _hex4(content[start + 2 : start + 6])
        if 0xDC00 <= first <= 0xDFFF:
            raise _Failure
        if 0xD800 <= first <= 0xDBFF:
            second_start = start + 6
            if end - second_start < 6:
                raise _Failure
            if content[second_start : second_start + 2] != "\\u":
                raise _Failure
            second = _hex4(content[second_start + 2 : second_start + 6])
            if not 0xDC00 <= second <= 0xDFFF:
                raise _Failure
            codepoint = 0x10000 + (((first & 0x3FF) << 10) | (second & 0x3FF))
            return chr(codepoint), 12
        return chr(first), 6

    def string(self) -> str:
        content = self.content
        start = self.offset
        if content[start] != '"':
            self.offset = start + 1
            raise _Failure

        end = start + 1
        while end < self.length and content[end] != '"':
            if content[end] == "\\":
                if end + 1 >= self.length:
                    self.offset = start + 1
                    raise _Failure
                end += 1
            end += 1
        if end >= self.length or content[end] != '"':
            self.offset = start + 1
            raise _Failure

        out: list[str] = []
        pointer = start + 1
        while pointer < end:
            ch = content[pointer]
            if ch != "\\":
                out.append(ch)
                pointer += 1
                continue
            escape = content[pointer + 1]
            if escape in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[escape])
                pointer += 2
            elif escape == "u":
                try:
                    decoded, consumed = self._utf16(pointer, end)
                except _Failure:
                    self.offset = pointer
                    raise
                out.append(decoded)
                pointer += consumed
            else:
                self.offset = pointer
                raise _Failure

        self.offset = end + 1
        return "".join(out)

    def _begin_element(self, frame: list[Any]) -> None:
        self.offset += 1
        self.skip_whitespace()
        if isinstance(frame[0], JsonObject):
            key = self.string()
            self.skip_whitespace()
            if not self.at(":"):
                raise _Failure
            self.offset += 1
            self.skip_whitespace()
            frame[1] = key

    def value(self) -> Any:
        stack: list[list[Any]] = []
        while True:
            if self.startswith("null"):
                self.offset += 4
                value: Any = None
            elif self.startswith("false"):
                self.offset += 5
                value = False
            elif self.startswith("true"):
                self.offset += 4
                value = True
            elif self.at('"'):
                value = self.string()
            elif self.can_access(0) and (self.char() == "-" or "0" <= self.char() <= "9"):
                value = self.number()
            elif self.at("[") or self.at("{"):
                if self.depth >= NESTING_LIMIT:
                    raise _Failure
                self.depth += 1
                is_array = self.char() == "["
                closing = "]" if is_array else "}"
                self.offset += 1
                self.skip_whitespace()
                if self.at(closing):
                    self.depth -= 1
                    self.offset += 1
                    value = [] if is_array else JsonObject()
                else:
                    if not self.can_access(0):
                        self.offset -= 1
                        raise _Failure
                    self.offset -= 1
                    frame = [[] if is_array else JsonObject(), None]
                    stack.append(frame)
                    self._begin_element(frame)
                    continue
            else:
                raise _Failure

            while True:
                if not stack:
                    return value
                frame = stack[-1]
                container = frame[0]
                if isinstance(container, JsonObject):
                    container.add(frame[1], value)
                    closing = "}"
                else:
                    container.append(value)
                    closing = "]"
                self.skip_whitespace()
                if self.at(","):
                    self._begin_element(frame)
                    break
                if not self.at(closing):
                    raise _Failure
                self.depth -= 1
                self.offset += 1
                stack.pop()
                value = container

    def error_position(self) -> int:
        if self.offset < self.length:
            return self.offset
        return self.length - 1


def parse_with_end(
    text: str | bytes, require_null_terminated: bool = False
) -> tuple[Any, int]:
    """Parse one JSON value from the start of ``text``.

    Returns the value and the index where parsing stopped. Text after the
    value is allowed unless ``require_null_terminated`` is set, in which
    case only whitespace may follow. Objects come back as JsonObject,
    arrays as lists, integer literals as int and other numbers as float.
    Raises JsonParseError with the position of the failure.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        text = bytes(text).decode("utf-8")
    parser = _Parser(text)
    try:
        parser.skip_bom()
        parser.skip_whitespace()
        value = parser.value()
        if require_null_terminated:
            parser.skip_whitespace()
            if parser.offset >= parser.length or parser.char() != "\0":
                raise _Failure
    except _Failure:
        raise JsonParseError(parser.error_position()) from None
    return value, parser.offset


def parse(text: str | bytes, require_null_terminated: bool = False) -> Any:
    """Parse a JSON value from ``text``; see parse_with_end."""
    return parse_with_end(text, require_null_terminated)[0]