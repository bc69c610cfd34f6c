"""Message length counters used by the padding step.

Both counters hold a byte count. The padding appends the count in bits, so
`bit_length_bytes` multiplies by 8 (a left shift by 3) and serializes the
result big-endian into the length field.
"""

from __future__ import annotations

from bitops import MASK64


class Counter64:
    """Byte counter for algorithms with an 8-byte length field."""

    __slots__ = ("value",)

    field_size = 8

    def __init__(self, value: int = 0) -> None:
        if not 0 <= value <= MASK64:
            raise ValueError(f"Counter64 value out of range: {value}")
        self.value = value

    def add(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"Cannot add a negative byte count: {n}")
        total = self.value + n
        if total > MASK64:
            raise OverflowError("Message longer than 2**64 - 1 bytes")
        self.value = total

    def bit_length_bytes(self) -> bytes:
        # Bits beyond the 64-bit field are dropped, as the standards require.
        return ((self.value << 3) & MASK64).to_bytes(8, byteorder="big")

    def copy(self) -> "Counter64":
        return Counter64(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Counter64({self.value})"


class Counter128:
    """Byte counter stored as two 64-bit halves.

    SHA-512 and its truncated variants encode the message length in a
    128-bit field. A byte count of ``2**61`` or more already needs the high
    half once it is converted to bits, so the conversion is a real 128-bit
    shift that carries the top bits of `low` into `high`.
    """

    __slots__ = ("low", "high")

    field_size = 16

    def __init__(self, low: int = 0, high: int = 0) -> None:
        if not 0 <= low <= MASK64:
            raise ValueError(f"Counter128 low half out of range: {low}")
        if not 0 <= high <= MASK64:
            raise ValueError(f"Counter128 high half out of range: {high}")
        self.low = low
        self.high = high

    @property
    def value(self) -> int:
        return (self.high << 64) | self.low

    def add(self, n: int) -> None:
        """Add `n` bytes, carrying from the low half into the high half."""
        if not 0 <= n <= MASK64:
            raise ValueError(f"Counter128.add expects 0 <= n < 2**64, got {n}")
        low = self.low + n
        carry = low >> 64
        if carry and self.high == MASK64:
            raise OverflowError("Message longer than 2**128 - 1 bytes")
        self.low = low & MASK64
        self.high += carry

    def shifted_left(self, bits: int) -> "Counter128":
        """Return a new counter holding this value shifted left by `bits`.

        Bits shifted past position 127 are discarded.
        """
        if not 0 <= bits < 128:
            raise ValueError(f"Shift amount must be in [0, 128), got {bits}")
        if bits == 0:
            return Counter128(self.low, self.high)
        if bits >= 64:
            return Counter128(0, (self.low << (bits - 64)) & MASK64)
        high = ((self.high << bits) | (self.low >> (64 - bits))) & MASK64
        low = (self.low << bits) & MASK64
        return Counter128(low, high)

    def bit_length_bytes(self) -> bytes:
        bits = self.shifted_left(3)
        return bits.high.to_bytes(8, byteorder="big") + bits.low.to_bytes(8, byteorder="big")

    def copy(self) -> "Counter128":
        return Counter128(self.low, self.high)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Counter128(low=0x{self.low:016x}, high=0x{self.high:016x})"
