"""Base64 encoding and a lenient decoder that stops at the first pad."""

from __future__ import annotations

import base64 as _stdlib_base64

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_DECODE_TABLE = {ch: index for index, ch in enumerate(_ALPHABET)}
_PAD = "="


def encode(data: bytes | bytearray | memoryview) -> str:
    """Encode bytes as standard padded Base64 text."""
    return _stdlib_base64.b64encode(bytes(data)).decode("ascii")


def decode(text: str | bytes) -> bytes:
    """Decode Base64 text.

    The length must be a multiple of four. Decoding stops at the first
    pad character; anything after it is ignored. Raises ValueError on a
    bad length or a character outside the alphabet.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        text = bytes(text).decode("latin-1")
    if len(text) & 0x3:
        raise ValueError("base64 input length must be a multiple of 4")

    out = bytearray()
    pending = 0
    for position, ch in enumerate(text):
        if ch == _PAD:
            break
        value = _DECODE_TABLE.get(ch)
        if value is None:
            raise ValueError(f"invalid base64 character {ch!r} at {position}")
        phase = position & 0x3
        if phase == 0:
            pending = (value << 2) & 0xFF
        elif phase == 1:
            out.append(pending | ((value >> 4) & 0x3))
            pending = (value & 0xF) << 4
        elif phase == 2:
            out.append(pending | ((value >> 2) & 0xF))
            pending = (value & 0x3) << 6
        else:
            out.append(pending | value)
    return bytes(out)


def encoded_size(length: int) -> int:
    """Buffer size for encoding ``length`` bytes, counting a trailing NUL."""
    return ((length + 2) // 3) * 4 + 1


def decoded_size(length: int) -> int:
    """Upper bound on the bytes produced by decoding ``length`` characters."""
    return (length // 4) * 3