"""An ordered JSON object with duplicate keys, and structural comparison."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

_MISSING = object()
_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_FOLD = str.maketrans(_UPPER, _LOWER)


def _fold(text: str) -> str:
    # Only ASCII letters are folded, as with tolower() in the C locale.
    return text.translate(_FOLD)


def _keys_match(wanted: str, actual: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return wanted == actual
    return _fold(wanted) == _fold(actual)


class JsonObject:
    """A JSON object that keeps insertion order and allows repeated keys.

    Lookups find the first entry whose key matches. Unless asked
    otherwise, keys are matched without regard to ASCII letter case.
    """

    def __init__(
        self, pairs: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None
    ) -> None:
        self._pairs: list[tuple[str, Any]] = []
        if pairs is None:
            return
        source = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in source:
            self.add(key, value)

    def _index(self, key: str, case_sensitive: bool) -> int:
        for position, (name, _value) in enumerate(self._pairs):
            if _keys_match(key, name, case_sensitive):
                return position
        raise KeyError(key)

    def get(self, key: str, case_sensitive: bool = False) -> Any:
        """Return the value of the first entry named ``key``.

        Raises KeyError when there is none.
        """
        return self._pairs[self._index(key, case_sensitive)][1]

    def add(self, key: str, value: Any) -> None:
        """Append an entry; an existing entry with the same key is kept."""
        if not isinstance(key, str):
            raise TypeError("JSON object keys must be strings")
        if value is self:
            raise ValueError("an object cannot contain itself")
        self._pairs.append((key, value))

    def remove(self, key: str, case_sensitive: bool = False) -> Any:
        """Remove the first entry named ``key`` and return its value.

        Raises KeyError when there is none.
        """
        return self._pairs.pop(self._index(key, case_sensitive))[1]

    def replace(self, key: str, value: Any, case_sensitive: bool = False) -> None:
        """Replace the first entry named ``key``; it takes ``key`` as its name.

        Raises KeyError when there is none.
        """
        position = self._index(key, case_sensitive)
        self._pairs[position] = (key, value)

    def items(self) -> list[tuple[str, Any]]:
        """Return the entries as ``(key, value)`` pairs in order."""
        return list(self._pairs)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            self._index(key, False)
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _value in self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"JsonObject({self._pairs!r})"


def _kind(value: Any) -> str | None:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, JsonObject):
        return "object"
    return None


def _numbers_equal(a: float, b: float) -> bool:
    a, b = float(a), float(b)
    largest = max(abs(a), abs(b))
    return abs(a - b) <= largest * sys.float_info.epsilon


def _lookup(obj: JsonObject, key: str, case_sensitive: bool) -> Any:
    try:
        return obj.get(key, case_sensitive)
    except KeyError:
        return _MISSING


def compare(a: Any, b: Any, case_sensitive: bool = True) -> bool:
    """Tell whether two JSON values are structurally equal.

    Numbers are equal when they differ by at most the machine epsilon
    relative to the larger one. Objects are equal when every key of each
    is found in the other with an equal value. Values that are not JSON
    are never equal.
    """
    kind = _kind(a)
    if kind is None or kind != _kind(b):
        return False
    if a is b:
        return True
    if kind in ("null", "true", "false"):
        return True
    if kind == "number":
        return _numbers_equal(a, b)
    if kind == "string":
        return a == b
    if kind == "array":
        if len(a) != len(b):
            return False
        return all(compare(x, y, case_sensitive) for x, y in zip(a, b))

    for first, second in ((a, b), (b, a)):
        for key, value in first.items():
            other = _lookup(second, key, case_sensitive)
            if other is _MISSING or not compare(value, other, case_sensitive):
                return False
    return True