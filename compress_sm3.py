"""SM3 block compression (GB/T 32905-2016, draft-sca-cfrg-sm3).

The structure follows the SHA-2 compressions but differs in three places:

- the schedule has 68 words W[0..67], built with the permutation P1, plus
  64 derived words W'[j] = W[j] ^ W[j+4];
- each round uses FF/GG boolean functions that switch from plain XOR to
  majority/choice at round 16, and rotates the round constant T_j by
  (j mod 32) bits, which is a rotation by zero at rounds 0 and 32;
- the working registers are XORed into the chaining value instead of added.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from bitops import MASK32, load_words, rotl


State = Tuple[int, int, int, int, int, int, int, int]

ROUNDS = 64

_T_LOW = 0x79CC4519
_T_HIGH = 0x7A879D8A

T_VALUES: Tuple[int, ...] = tuple(
    rotl(_T_LOW if j < 16 else _T_HIGH, j % 32) for j in range(ROUNDS)
)


def p0(x: int) -> int:
    return x ^ rotl(x, 9) ^ rotl(x, 17)


def p1(x: int) -> int:
    return x ^ rotl(x, 15) ^ rotl(x, 23)


def expand_message_schedule(words: Sequence[int]) -> List[int]:
    """Expand W[0..15] into W[0..67]."""
    if len(words) < 16:
        raise ValueError(f"Message schedule must contain at least 16 words, got {len(words)}")

    w = list(words[:16])
    for j in range(16, 68):
        w.append(
            p1(w[j - 16] ^ w[j - 9] ^ rotl(w[j - 3], 15)) ^ rotl(w[j - 13], 7) ^ w[j - 6]
        )
    return w


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    w_prime: int,
    j: int,
) -> State:
    """Perform SM3 round `j` with schedule words W[j] and W'[j]."""
    a12 = rotl(a, 12)
    ss1 = rotl((a12 + e + T_VALUES[j]) & MASK32, 7)
    ss2 = ss1 ^ a12

    if j < 16:
        ff = a ^ b ^ c
        gg = e ^ f ^ g
    else:
        ff = (a & b) | (a & c) | (b & c)
        gg = (e & f) | (~e & g)

    tt1 = (ff + d + ss2 + w_prime) & MASK32
    tt2 = (gg + h + ss1 + w) & MASK32

    return tt1, a, rotl(b, 9), c, p0(tt2), e, rotl(f, 19), g


def compress64(state: Sequence[int], ws: Sequence[int]) -> State:
    """Run the 64 rounds over a 68-word expanded schedule."""
    if len(ws) != 68:
        raise ValueError(f"SM3 expects 68 expanded message words, got {len(ws)}")

    a, b, c, d, e, f, g, h = state
    for j in range(ROUNDS):
        a, b, c, d, e, f, g, h = compression(
            a, b, c, d, e, f, g, h, ws[j], ws[j] ^ ws[j + 4], j
        )
    return a, b, c, d, e, f, g, h


def compress_block(state: Sequence[int], block, offset: int = 0) -> State:
    """Compress the 64-byte block at `offset` of `block` into `state` (V ^= ABCDEFGH)."""
    ws = expand_message_schedule(load_words(block, 4, 16, offset))
    working = compress64(state, ws)
    return tuple(s ^ w for s, w in zip(state, working))
