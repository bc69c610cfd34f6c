"""Generic Merkle-Damgard streaming engine.

Every block hash in this project (the SHA-2 family and SM3) is a
configuration of `StreamingHash`: the subclass fixes the block size, the
word size, the digest size, the width of the length field, the counter type,
the initial chaining value and the pure block compression function. The
buffering, length counting, padding and digest serialization below are
shared.

Lifecycle::

    h = SHA2_256()            # fresh
    h.update(b"...")          # accepting, any number of calls
    h.finalize()              # terminal
    h.hexdigest()
    h.reset()                 # fresh again
"""

from __future__ import annotations

import copy
import logging
from typing import Callable, ClassVar, Optional, Sequence, Tuple, Type, Union

from counters import Counter64, Counter128


logger = logging.getLogger(__name__)

CompressFunction = Callable[[Sequence[int], object, int], Tuple[int, ...]]


class HashStateError(RuntimeError):
    """An operation was called in a lifecycle state that does not allow it."""


class StreamingHash:
    """Incremental hash over an algorithm-specific compression function."""

    name: ClassVar[str] = ""
    block_size: ClassVar[int] = 64
    word_size: ClassVar[int] = 4
    digest_size: ClassVar[int] = 32
    length_field_size: ClassVar[int] = 8
    counter_type: ClassVar[Type[Union[Counter64, Counter128]]] = Counter64
    initial_state: ClassVar[Tuple[int, ...]] = ()
    compress: ClassVar[CompressFunction]

    def __init__(self, data=None) -> None:
        if not self.initial_state or getattr(type(self), "compress", None) is None:
            raise TypeError(
                f"{type(self).__name__} is not a concrete hash: "
                "a subclass must define initial_state and compress"
            )
        self._buffer = bytearray()
        self.reset()
        if data is not None:
            self.update(data)

    def reset(self) -> None:
        """Discard all input and return to the just-constructed state."""
        self._buffer.clear()
        self._counter = self.counter_type()
        self._state: Tuple[int, ...] = tuple(self.initial_state)
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def message_length(self) -> int:
        """Number of bytes fed through update() so far."""
        return int(self._counter)

    def update(self, data) -> "StreamingHash":
        """Feed a chunk of input. Accepts any bytes-like object.

        Whole blocks are compressed straight from the caller's buffer; only a
        leftover tail shorter than one block is copied and kept for the next
        call.
        """
        if self._finalized:
            raise HashStateError(f"{self.name}: update() after finalize(); call reset() first")

        view = memoryview(data).cast("B")
        if not view:
            return self
        self._counter.add(len(view))

        if self._buffer:
            take = min(self.block_size - len(self._buffer), len(view))
            self._buffer += view[:take]
            if len(self._buffer) < self.block_size:
                return self
            self._consume(self._buffer)
            self._buffer.clear()
            view = view[take:]

        aligned = len(view) - (len(view) % self.block_size)
        if aligned:
            self._consume(view[:aligned])
        if aligned < len(view):
            self._buffer += view[aligned:]
        return self

    def finalize(self) -> "StreamingHash":
        """Pad the buffered tail, compress it and make the digest available."""
        if self._finalized:
            raise HashStateError(f"{self.name}: finalize() called twice; call reset() first")

        tail = self._pad()
        self._consume(tail)
        self._buffer.clear()
        self._finalized = True
        logger.debug(
            "%s finalized after %d bytes (%d padding block(s))",
            self.name,
            self.message_length,
            len(tail) // self.block_size,
        )
        return self

    def digest(self) -> bytes:
        """Return the digest, big-endian word by word, truncated to `digest_size`."""
        if not self._finalized:
            raise HashStateError(f"{self.name}: digest is only available after finalize()")
        out = b"".join(word.to_bytes(self.word_size, byteorder="big") for word in self._state)
        return out[: self.digest_size]

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "StreamingHash":
        """Return an independent clone of this computation."""
        return copy.deepcopy(self)

    def _pad(self) -> bytearray:
        """Build the final block(s): tail || 0x80 || zeros || bit length.

        One length computation covers both the single block case and the
        case where the marker and length field spill into a second block.
        """
        padded = bytearray(self._buffer)
        padded.append(0x80)
        zeros = (self.block_size - self.length_field_size - len(padded)) % self.block_size
        padded.extend(bytes(zeros))
        padded.extend(self._counter.bit_length_bytes())
        return padded

    def _consume(self, data) -> None:
        if len(data) % self.block_size != 0:
            raise ValueError(
                f"{self.name}: expected a multiple of {self.block_size} bytes, got {len(data)}"
            )
        state = self._state
        for offset in range(0, len(data), self.block_size):
            state = self.compress(state, data, offset)
        self._state = state

    def __repr__(self) -> str:
        status = "finalized" if self._finalized else f"{self.message_length} bytes"
        return f"<{type(self).__name__} {status}>"


def one_shot(hash_type: Type[StreamingHash], data: Optional[bytes]) -> bytes:
    """Hash `data` in a single call and return the digest bytes."""
    return hash_type(data).finalize().digest()
