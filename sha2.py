"""SHA-2 hash functions (FIPS 180-4) built on the streaming engine.

This module provides:

- `SHA2_256` and `SHA2_224`: 64-byte blocks, 32-bit words, 64-bit length
  field, compression from `compress.py`.
- `SHA2_512`, `SHA2_384`, `SHA2_512_224` and `SHA2_512_256`: 128-byte
  blocks, 64-bit words, 128-bit length field, compression from
  `compress512.py`.
- One-shot helpers such as `sha256(data: bytes) -> bytes`.

The truncated variants emit the leading bytes of the big-endian serialized
state. SHA-512/224 therefore outputs state words 0-2 in full followed by the
four high-order bytes of word 3.
"""

from __future__ import annotations

from typing import Optional

from compress import compress_block as _compress256
from compress512 import compress_block as _compress512
from counters import Counter128
from engine import StreamingHash, one_shot


class _SHA2_32(StreamingHash):
    block_size = 64
    word_size = 4
    length_field_size = 8
    compress = staticmethod(_compress256)


class _SHA2_64(StreamingHash):
    block_size = 128
    word_size = 8
    length_field_size = 16
    counter_type = Counter128
    compress = staticmethod(_compress512)


class SHA2_256(_SHA2_32):
    name = "sha256"
    digest_size = 32
    # First 32 bits of the fractional parts of the square roots of the first 8 primes.
    initial_state = (
        0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
        0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
    )


class SHA2_224(_SHA2_32):
    name = "sha224"
    digest_size = 28
    initial_state = (
        0xC1059ED8, 0x367CD507, 0x3070DD17, 0xF70E5939,
        0xFFC00B31, 0x68581511, 0x64F98FA7, 0xBEFA4FA4,
    )


class SHA2_512(_SHA2_64):
    name = "sha512"
    digest_size = 64
    initial_state = (
        0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
        0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
    )


class SHA2_384(_SHA2_64):
    name = "sha384"
    digest_size = 48
    initial_state = (
        0xCBBB9D5DC1059ED8, 0x629A292A367CD507, 0x9159015A3070DD17, 0x152FECD8F70E5939,
        0x67332667FFC00B31, 0x8EB44A8768581511, 0xDB0C2E0D64F98FA7, 0x47B5481DBEFA4FA4,
    )


class SHA2_512_224(_SHA2_64):
    name = "sha512_224"
    digest_size = 28
    # Generated by the SHA-512/t IV generation function with t = 224.
    initial_state = (
        0x8C3D37C819544DA2, 0x73E1996689DCD4D6, 0x1DFAB7AE32FF9C82, 0x679DD514582F9FCF,
        0x0F6D2B697BD44DA8, 0x77E36F7304C48942, 0x3F9D85A86A1D36C8, 0x1112E6AD91D692A1,
    )


class SHA2_512_256(_SHA2_64):
    name = "sha512_256"
    digest_size = 32
    initial_state = (
        0x22312194FC2BF72C, 0x9F555FA3C84C64C2, 0x2393B86B6F53B151, 0x963877195940EABD,
        0x96283EE2A88EFFE3, 0xBE5E1E2553863992, 0x2B0199FC2C85B8AA, 0x0EB72DDC81C52CA2,
    )


def sha224(data: Optional[bytes] = None) -> bytes:
    return one_shot(SHA2_224, data)


def sha256(data: Optional[bytes] = None) -> bytes:
    """Compute the SHA-256 digest of `data`."""
    return one_shot(SHA2_256, data)


def sha384(data: Optional[bytes] = None) -> bytes:
    return one_shot(SHA2_384, data)


def sha512(data: Optional[bytes] = None) -> bytes:
    return one_shot(SHA2_512, data)


def sha512_224(data: Optional[bytes] = None) -> bytes:
    """Compute the SHA-512/224 digest of `data`."""
    return one_shot(SHA2_512_224, data)


def sha512_256(data: Optional[bytes] = None) -> bytes:
    return one_shot(SHA2_512_256, data)
