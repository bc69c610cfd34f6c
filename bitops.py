"""Word-level helpers shared by every compression function.

All byte-order handling lives here: blocks are read as big-endian words
through `load_word` / `load_words`, whatever the host byte order and
whatever offset the block starts at inside the caller's buffer.
"""

from __future__ import annotations

import struct
from typing import List


MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

_WORD_FORMATS = {4: "I", 8: "Q"}


def _word_format(word_size: int) -> str:
    try:
        return _WORD_FORMATS[word_size]
    except KeyError:
        raise ValueError(f"Unsupported word size {word_size}, expected 4 or 8") from None


def load_word(data, index: int, word_size: int = 4) -> int:
    """Return word `index` of `data`, read big-endian.

    The word occupies bytes ``[index * word_size, (index + 1) * word_size)``.
    `data` may be any bytes-like object.
    """
    code = _word_format(word_size)
    start = index * word_size
    if index < 0 or start + word_size > len(data):
        raise ValueError(
            f"Word {index} of size {word_size} is outside a {len(data)}-byte buffer"
        )
    return struct.unpack_from(">" + code, data, start)[0]


def load_words(data, word_size: int = 4, count: int = 16, offset: int = 0) -> List[int]:
    """Read `count` consecutive big-endian words starting at byte `offset`.

    The caller's buffer is read in place, so a compression function can work
    directly on a slice of a larger input.
    """
    code = _word_format(word_size)
    if offset < 0 or offset + count * word_size > len(data):
        raise ValueError(
            f"Cannot read {count} words of size {word_size} at offset {offset} "
            f"from a {len(data)}-byte buffer"
        )
    return list(struct.unpack_from(f">{count}{code}", data, offset))


def rotr(x: int, n: int, width: int = 32) -> int:
    """Right-rotate the `width`-bit word `x` by `n` bits."""
    mask = (1 << width) - 1
    x &= mask
    n %= width
    if n == 0:
        return x
    return ((x >> n) | (x << (width - n))) & mask


def rotl(x: int, n: int, width: int = 32) -> int:
    """Left-rotate the `width`-bit word `x` by `n` bits."""
    mask = (1 << width) - 1
    x &= mask
    n %= width
    if n == 0:
        return x
    return ((x << n) | (x >> (width - n))) & mask


def shr(x: int, n: int, width: int = 32) -> int:
    """Logical right shift of a `width`-bit word."""
    return (x & ((1 << width) - 1)) >> n
