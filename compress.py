"""SHA-256 block compression (FIPS 180-4, section 6.2.2).

One 64-byte block is processed in three stages:

1. The 16 big-endian message words are expanded into the 64-word schedule

       w[i] = σ1(w[i-2]) + w[i-7] + σ0(w[i-15]) + w[i-16]

2. 64 rounds update the working registers `(a, b, c, d, e, f, g, h)`:

       S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
       ch    = (e & f) ^ (~e & g)
       temp1 = h + S1 + ch + k + w

       S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
       maj   = (a & b) ^ (a & c) ^ (b & c)
       temp2 = S0 + maj

       a' = temp1 + temp2
       e' = d + temp1

   and every other register moves one place down (b' = a, c' = b, ...).

3. The working registers are added back into the chaining value.

All additions are performed modulo 2**32. SHA-224 uses the same
compression with a different initial value.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from bitops import MASK32, load_words, rotr


State = Tuple[int, int, int, int, int, int, int, int]

ROUNDS = 64

# First 32 bits of the fractional parts of the cube roots of the first 64 primes.
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def _small_sigma0(x: int) -> int:
    """σ0 used in the message schedule."""
    return rotr(x, 7) ^ rotr(x, 18) ^ (x >> 3)


def _small_sigma1(x: int) -> int:
    """σ1 used in the message schedule."""
    return rotr(x, 17) ^ rotr(x, 19) ^ (x >> 10)


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
    k: int,
) -> State:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit words representing the current working state.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a_new, b_new, c_new, d_new, e_new, f_new, g_new, h_new) : tuple[int, ...]
        Working state after the round. The register rotation is expressed by
        the order of the returned tuple.
    """
    S1 = rotr(e, 6) ^ rotr(e, 11) ^ rotr(e, 25)
    ch = (e & f) ^ (~e & g)
    temp1 = (h + S1 + ch + k + w) & MASK32

    S0 = rotr(a, 2) ^ rotr(a, 13) ^ rotr(a, 22)
    maj = (a & b) ^ (a & c) ^ (b & c)
    temp2 = (S0 + maj) & MASK32

    return (temp1 + temp2) & MASK32, a, b, c, (d + temp1) & MASK32, e, f, g


def expand_message_schedule(words: Sequence[int], rounds: int = ROUNDS) -> List[int]:
    """Expand the 16 block words W[0..15] to W[0..(rounds-1)]."""
    if len(words) < 16:
        raise ValueError(f"Message schedule must contain at least 16 words, got {len(words)}")

    schedule = list(words[:16])
    for i in range(16, rounds):
        s0 = _small_sigma0(schedule[i - 15])
        s1 = _small_sigma1(schedule[i - 2])
        schedule.append((schedule[i - 16] + s0 + schedule[i - 7] + s1) & MASK32)
    return schedule


def compress64(state: Sequence[int], ws: Sequence[int]) -> State:
    """Run the full 64-round loop for one block.

    Parameters
    ----------
    state : Sequence[int]
        Initial working state words (the current chaining value).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working registers after 64 rounds (not yet added to the state).
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects 64 message schedule words, got {len(ws)}")

    a, b, c, d, e, f, g, h = state
    for i in range(ROUNDS):
        a, b, c, d, e, f, g, h = compression(a, b, c, d, e, f, g, h, ws[i], K_VALUES[i])
    return a, b, c, d, e, f, g, h


def compress_block(state: Sequence[int], block, offset: int = 0) -> State:
    """Compress the 64-byte block at `offset` of `block` into `state`.

    H_{i+1}[j] = (H_i[j] + working[j]) mod 2**32, for j = 0..7.
    """
    ws = expand_message_schedule(load_words(block, 4, 16, offset))
    working = compress64(state, ws)
    return tuple((s + w) & MASK32 for s, w in zip(state, working))
