import pytest

from bitops import MASK32, MASK64, load_word, load_words, rotl, rotr, shr


def test_load_word_is_big_endian():
    data = bytes.fromhex("0102030405060708")
    assert load_word(data, 0, 4) == 0x01020304
    assert load_word(data, 1, 4) == 0x05060708
    assert load_word(data, 0, 8) == 0x0102030405060708


def test_load_words_from_unaligned_offset():
    """A block that starts at an odd offset inside a larger buffer reads the same words."""
    block = bytes(range(64))
    for offset in (1, 3, 7):
        buf = b"\xAA" * offset + block + b"\x55" * 5
        assert load_words(buf, 4, 16, offset) == load_words(block, 4, 16)


@pytest.mark.parametrize("buf_type", [bytes, bytearray, memoryview])
def test_load_words_accepts_bytes_like(buf_type):
    data = buf_type(bytes.fromhex("00000001ffffffff0000000000000002"))
    assert load_words(data, 4, 4) == [1, 0xFFFFFFFF, 0, 2]
    assert load_words(data, 8, 2) == [0x00000001FFFFFFFF, 2]


def test_loader_rejects_bad_arguments():
    with pytest.raises(ValueError):
        load_word(b"\x00" * 8, 0, 2)
    with pytest.raises(ValueError):
        load_word(b"\x00" * 7, 1, 4)
    with pytest.raises(ValueError):
        load_words(b"\x00" * 63, 4, 16)


def test_rotations():
    assert rotr(0x00000001, 1) == 0x80000000
    assert rotl(0x80000000, 1) == 0x00000001
    assert rotr(0x0123456789ABCDEF, 8, 64) == 0xEF0123456789ABCD
    assert rotl(0x0123456789ABCDEF, 8, 64) == 0x23456789ABCDEF01


@pytest.mark.parametrize("width,mask", [(32, MASK32), (64, MASK64)])
def test_rotation_by_zero_and_full_width_is_identity(width, mask):
    x = 0xDEADBEEFCAFEBABE & mask
    for n in (0, width, 2 * width):
        assert rotr(x, n, width) == x
        assert rotl(x, n, width) == x


def test_rotations_mask_oversized_input():
    assert rotl(0x1_00000001, 4) == 0x00000010
    assert shr(0x1_80000000, 31) == 1
