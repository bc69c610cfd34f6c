import pytest

from bitops import MASK64
from counters import Counter64, Counter128


MASK128 = (1 << 128) - 1


def test_counter64_bit_length_field():
    c = Counter64()
    c.add(3)
    c.add(0)
    assert int(c) == 3
    assert c.bit_length_bytes() == (24).to_bytes(8, "big")


def test_counter64_rejects_misuse():
    c = Counter64(MASK64)
    with pytest.raises(OverflowError):
        c.add(1)
    with pytest.raises(ValueError):
        Counter64().add(-1)


def test_counter128_add_carries_into_high_half():
    c = Counter128(low=MASK64)
    c.add(1)
    assert (c.low, c.high) == (0, 1)
    c.add(MASK64)
    assert (c.low, c.high) == (MASK64, 1)
    assert int(c) == (1 << 64) + MASK64


def test_counter128_add_rejects_out_of_range_amounts():
    with pytest.raises(ValueError):
        Counter128().add(-1)
    with pytest.raises(ValueError):
        Counter128().add(1 << 64)
    with pytest.raises(OverflowError):
        Counter128(low=MASK64, high=MASK64).add(1)


def test_counter128_bit_length_near_2_pow_61_bytes():
    """2**61 bytes is exactly 2**64 bits: the bit count lives entirely in the high half."""
    c = Counter128(low=1 << 61)
    assert c.bit_length_bytes() == (1).to_bytes(8, "big") + bytes(8)

    c = Counter128(low=(1 << 61) + 5)
    assert c.bit_length_bytes() == (((1 << 61) + 5) * 8).to_bytes(16, "big")

    c = Counter128(low=MASK64)
    assert c.bit_length_bytes() == (MASK64 * 8).to_bytes(16, "big")


@pytest.mark.parametrize("bits", [0, 1, 3, 31, 63, 64, 65, 100, 127])
@pytest.mark.parametrize(
    "low,high",
    [(0, 0), (1, 0), (MASK64, 0), (0x8000000000000001, 0x7), (MASK64, MASK64)],
)
def test_counter128_shift_matches_integer_arithmetic(low, high, bits):
    c = Counter128(low, high)
    shifted = c.shifted_left(bits)
    assert int(shifted) == (int(c) << bits) & MASK128
    # shifted_left returns a new counter.
    assert (c.low, c.high) == (low, high)


@pytest.mark.parametrize("bits", [-1, 128, 200])
def test_counter128_shift_rejects_bad_amounts(bits):
    with pytest.raises(ValueError):
        Counter128(1).shifted_left(bits)
