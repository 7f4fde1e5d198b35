"""Polynomial string hashes used for stable identifiers and roster digests.

Both hashes iterate over UTF-16 code units, so every client hashing the same
string arrives at the same identifier.
"""

from __future__ import annotations

from typing import Iterator

_U32 = 0xFFFFFFFF


def utf16_code_units(text: str) -> Iterator[int]:
    """Yield UTF-16 code units of ``text``.

    >>> list(utf16_code_units("ab"))
    [97, 98]
    >>> list(utf16_code_units("\\U0001F600"))
    [55357, 56832]
    """

    encoded = text.encode("utf-16-le", "surrogatepass")
    for index in range(0, len(encoded), 2):
        yield encoded[index] | (encoded[index + 1] << 8)


def rolling_hash_u32(text: str) -> int:
    """Return ``hash * 31 + unit`` folded to an unsigned 32-bit value.

    >>> rolling_hash_u32("")
    0
    >>> rolling_hash_u32("a")
    97
    >>> rolling_hash_u32("ab")
    3105
    """

    value = 0
    for unit in utf16_code_units(text):
        value = (value * 31 + unit) & _U32
    return value


def rolling_hash_i32(text: str) -> int:
    """Same polynomial as :func:`rolling_hash_u32` read as a signed 32-bit value.

    >>> rolling_hash_i32("ab")
    3105
    """

    value = rolling_hash_u32(text)
    return value - (1 << 32) if value >= (1 << 31) else value


__all__ = ["rolling_hash_i32", "rolling_hash_u32", "utf16_code_units"]
