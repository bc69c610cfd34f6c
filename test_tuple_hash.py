import pytest
from Crypto.Hash import TupleHash128 as RefTupleHash128
from Crypto.Hash import TupleHash256 as RefTupleHash256

from engine import HashStateError
from tuple_hash import (
    TupleHash128,
    TupleHash256,
    left_encode,
    right_encode,
    tuple_hash128,
    tuple_hash256,
)


ELEMENT_1 = bytes.fromhex("000102")
ELEMENT_2 = bytes.fromhex("101112131415")

# NIST SP 800-185 TupleHash128 samples #1 and #2 (L = 256).
NIST_SAMPLES = [
    (b"", "c5d8786c1afb9b82111ab34b65b2c0048fa64e6d48e263264ce1707d3ffc8ed1"),
    (b"My Tuple App", "75cdb20ff4db1154e841d758e24160c54bae86eb8c13e7f5f40eb35588e96dfb"),
]


@pytest.mark.parametrize(
    "value,encoded",
    [
        (0, b"\x01\x00"),
        (1, b"\x01\x01"),
        (255, b"\x01\xff"),
        (256, b"\x02\x01\x00"),
        (65536, b"\x03\x01\x00\x00"),
    ],
)
def test_left_and_right_encode(value, encoded):
    assert left_encode(value) == encoded
    assert right_encode(value) == encoded[1:] + encoded[:1]


def test_encoders_reject_out_of_range_values():
    with pytest.raises(ValueError):
        left_encode(-1)
    with pytest.raises(ValueError):
        right_encode(1 << 2040)
    assert left_encode((1 << 2040) - 1)[0] == 255


@pytest.mark.parametrize("customization,expected", NIST_SAMPLES)
def test_nist_samples(customization, expected):
    h = TupleHash128(32, customization)
    h.next_data(ELEMENT_1).next_data(ELEMENT_2)
    assert h.finalize().hexdigest() == expected


def test_customization_may_be_text():
    assert tuple_hash128([ELEMENT_1, ELEMENT_2], 32, "My Tuple App").hex() == NIST_SAMPLES[1][1]


def _reference(ref_module, elements, digest_size, customization):
    ref = ref_module.new(digest_bytes=digest_size, custom=customization)
    for element in elements:
        ref.update(element)
    return ref.digest()


TUPLES = [
    [],
    [b""],
    [b"", b""],
    [b"abc"],
    [b"ab", b"c"],
    [b"a", b"bc"],
    [bytes(range(200)), b"x" * 167, b"\x00"],
]


@pytest.mark.parametrize("elements", TUPLES)
@pytest.mark.parametrize(
    "cls,ref_module,digest_size",
    [(TupleHash128, RefTupleHash128, 32), (TupleHash128, RefTupleHash128, 67), (TupleHash256, RefTupleHash256, 64)],
)
def test_matches_pycryptodome_tuplehash(cls, ref_module, digest_size, elements):
    h = cls(digest_size, b"app")
    for element in elements:
        h.next_data(element)
    assert h.finalize().digest() == _reference(ref_module, elements, digest_size, b"app")


@pytest.mark.parametrize("hash_fn", [tuple_hash128, tuple_hash256])
def test_element_boundaries_are_part_of_the_input(hash_fn):
    digests = {
        hash_fn([b"ab", b"c"]),
        hash_fn([b"a", b"bc"]),
        hash_fn([b"abc"]),
        hash_fn([b"abc", b""]),
        hash_fn([]),
    }
    assert len(digests) == 5


def test_output_length_is_bound_into_the_digest():
    short = tuple_hash128([b"abc"], 32)
    long = tuple_hash128([b"abc"], 64)
    assert len(short) == 32
    assert len(long) == 64
    assert long[:32] != short


def test_element_order_matters():
    assert tuple_hash256([b"a", b"b"]) != tuple_hash256([b"b", b"a"])


def test_lifecycle():
    h = TupleHash128(32)
    h.next_data(b"abc")
    with pytest.raises(HashStateError):
        h.digest()
    h.finalize()
    first = h.digest()
    with pytest.raises(HashStateError, match="update\\(\\) after finalize"):
        h.next_data(b"more")
    with pytest.raises(HashStateError, match="finalize\\(\\) called twice"):
        h.finalize()
    # The rejected calls left the digest alone.
    assert h.digest() == first

    h.reset()
    assert not h.finalized
    assert h.next_data(b"abc").finalize().digest() == first


def test_rejects_non_positive_length():
    with pytest.raises(ValueError):
        TupleHash128(0)
