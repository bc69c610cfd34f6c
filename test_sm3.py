import hashlib

import pytest

from sm3 import SM3, sm3


# GB/T 32905-2016 appendix A examples, plus the empty message.
KNOWN_ANSWERS = [
    (b"", "1ab21d8355cfa17f8e61194831e81a8f22bec8c728fefb747ed035eb5082aa2b"),
    (b"abc", "66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0"),
    (b"abcd" * 16, "debe9ff92275b8a138604889c18e5a4d6fdb70e5387e5765293dcba39c0c5732"),
    # b"a" * n at bs - 1, bs, bs + 1, 2 * bs - 9 and 3 * bs + 7.
    (b"a" * 63, "587308543551881ebd70d27ad358ff5dcdf24ac54822e2f7b7c3edce0985d21b"),
    (b"a" * 64, "616ec433c359e7c2b19f360e2b8f2a1b6e9ed76b8dc1a7d207b31a5341c611e9"),
    (b"a" * 65, "3d1d94afa238ec3e2bbc20ad504702b24c16f2889c94973f2f8da3526c44e4bc"),
    (b"a" * 119, "53282a90724e9eb79b18d06b5b8f7f02d046e18b29247dcdb064a136d5c4459a"),
    (b"a" * 199, "e8099adc2fe76e9c1aedb2838b18845e678caba615ac7be11c4fdec88d409d53"),
]


@pytest.mark.parametrize("message,expected", KNOWN_ANSWERS)
def test_known_answers(message, expected):
    assert SM3(message).finalize().hexdigest() == expected
    assert sm3(message).hex() == expected


def test_two_block_example_fed_in_pieces():
    """The 64-byte example pads into a second block; feed it unevenly."""
    h = SM3()
    for piece in (b"abc", b"dabcdabcd", b"abcd" * 12, b"abcd"):
        h.update(piece)
    assert h.finalize().hexdigest() == KNOWN_ANSWERS[2][1]


@pytest.mark.skipif("sm3" not in hashlib.algorithms_available, reason="hashlib has no sm3")
def test_padding_boundaries_match_hashlib():
    for n in (55, 56, 63, 64, 65, 119, 128, 200):
        data = bytes((i * 13 + 1) & 0xFF for i in range(n))
        assert sm3(data) == hashlib.new("sm3", data).digest(), f"length {n}"
