"""TupleHash (NIST SP 800-185, section 5) over an external cSHAKE primitive.

TupleHash hashes a sequence of byte strings so that the element boundaries
are part of the input: every element is prefixed with `left_encode` of its
length in bits, and the requested output length is appended with
`right_encode` before the XOF is read. ``("ab", "c")``, ``("a", "bc")``
and ``("abc",)`` therefore produce unrelated digests.

The extendable-output function itself comes from pycryptodome
(`Crypto.Hash.cSHAKE128` / `Crypto.Hash.cSHAKE256`); `CShake` adapts it to
the reset / update / finalize / digest lifecycle used across this project.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from Crypto.Hash import cSHAKE128, cSHAKE256

from engine import HashStateError


logger = logging.getLogger(__name__)

FUNCTION_NAME = b"TupleHash"

Customization = Union[bytes, str]


def left_encode(value: int) -> bytes:
    """Encode `value` as ``len(x) || x`` with `x` its minimal big-endian bytes.

    Zero encodes to ``b"\\x01\\x00"``; the encoding is never shorter than
    one length byte plus one value byte.
    """
    if value < 0:
        raise ValueError(f"left_encode expects a non-negative integer, got {value}")
    length = max(1, (value.bit_length() + 7) // 8)
    if length > 255:
        raise ValueError(f"Value needs {length} bytes, left_encode supports at most 255")
    return bytes((length,)) + value.to_bytes(length, byteorder="big")


def right_encode(value: int) -> bytes:
    """Encode `value` as ``x || len(x)``, the mirror image of `left_encode`."""
    encoded = left_encode(value)
    return encoded[1:] + encoded[:1]


def _as_bytes(customization: Customization) -> bytes:
    if isinstance(customization, str):
        return customization.encode("utf-8")
    return bytes(customization)


class CShake:
    """cSHAKE instance with a fixed function name, customization and output length."""

    def __init__(self, xof_module, digest_size: int, function_name: bytes, customization: bytes) -> None:
        self._xof_module = xof_module
        self.digest_size = digest_size
        self._function_name = function_name
        self._customization = customization
        self.reset()

    def reset(self) -> None:
        # Private pycryptodome API; its own TupleHash128/256 build cSHAKE the same way.
        self._xof = self._xof_module._new(b"", self._customization, self._function_name)
        self._digest: Optional[bytes] = None

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    def update(self, data) -> "CShake":
        if self._digest is not None:
            raise HashStateError("cSHAKE: update() after finalize(); call reset() first")
        self._xof.update(data)
        return self

    def finalize(self) -> "CShake":
        if self._digest is not None:
            raise HashStateError("cSHAKE: finalize() called twice; call reset() first")
        self._digest = self._xof.read(self.digest_size)
        return self

    def digest(self) -> bytes:
        if self._digest is None:
            raise HashStateError("cSHAKE: digest is only available after finalize()")
        return self._digest

    def hexdigest(self) -> str:
        return self.digest().hex()


class TupleHash:
    """Tuple-aware hash with a caller-chosen output length.

    Parameters
    ----------
    digest_size : int
        Output length in bytes.
    customization : bytes or str
        Optional customization string `S`; `str` values are UTF-8 encoded.
    """

    name = "tuplehash"
    xof_module = None

    def __init__(self, digest_size: int, customization: Customization = b"") -> None:
        if digest_size <= 0:
            raise ValueError(f"digest_size must be a positive number of bytes, got {digest_size}")
        self.digest_size = digest_size
        self.customization = _as_bytes(customization)
        self._xof = CShake(self.xof_module, digest_size, FUNCTION_NAME, self.customization)
        self._elements = 0

    def reset(self) -> None:
        self._xof.reset()
        self._elements = 0

    @property
    def finalized(self) -> bool:
        return self._xof.finalized

    def next_data(self, element) -> "TupleHash":
        """Append the next tuple element. Order of calls is significant."""
        view = memoryview(element).cast("B")
        self._xof.update(left_encode(len(view) * 8))
        self._xof.update(view.tobytes())
        self._elements += 1
        return self

    def finalize(self) -> "TupleHash":
        if self.finalized:
            raise HashStateError(f"{self.name}: finalize() called twice; call reset() first")
        self._xof.update(right_encode(self.digest_size * 8))
        self._xof.finalize()
        logger.debug(
            "%s finalized over %d element(s), %d-byte output",
            self.name,
            self._elements,
            self.digest_size,
        )
        return self

    def digest(self) -> bytes:
        return self._xof.digest()

    def hexdigest(self) -> str:
        return self._xof.hexdigest()


class TupleHash128(TupleHash):
    name = "tuplehash128"
    xof_module = cSHAKE128


class TupleHash256(TupleHash):
    name = "tuplehash256"
    xof_module = cSHAKE256


def _tuple_hash(cls, elements: Iterable[bytes], digest_size: int, customization: Customization) -> bytes:
    h = cls(digest_size, customization)
    for element in elements:
        h.next_data(element)
    return h.finalize().digest()


def tuple_hash128(elements: Iterable[bytes], digest_size: int = 32, customization: Customization = b"") -> bytes:
    """TupleHash128 of `elements` in one call."""
    return _tuple_hash(TupleHash128, elements, digest_size, customization)


def tuple_hash256(elements: Iterable[bytes], digest_size: int = 64, customization: Customization = b"") -> bytes:
    """TupleHash256 of `elements` in one call."""
    return _tuple_hash(TupleHash256, elements, digest_size, customization)
