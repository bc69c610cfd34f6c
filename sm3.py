"""SM3 hash function (GB/T 32905-2016) built on the streaming engine.

SM3 pads exactly like SHA-256 (64-byte blocks, 0x80 marker, 64-bit
big-endian bit length), so only the initial value and the compression
function differ.
"""

from __future__ import annotations

from typing import Optional

from compress_sm3 import compress_block
from engine import StreamingHash, one_shot


class SM3(StreamingHash):
    name = "sm3"
    block_size = 64
    word_size = 4
    digest_size = 32
    length_field_size = 8
    initial_state = (
        0x7380166F, 0x4914B2B9, 0x172442D7, 0xDA8A0600,
        0xA96F30BC, 0x163138AA, 0xE38DEE4D, 0xB0FB0E4E,
    )
    compress = staticmethod(compress_block)


def sm3(data: Optional[bytes] = None) -> bytes:
    """Compute the SM3 digest of `data`."""
    return one_shot(SM3, data)
