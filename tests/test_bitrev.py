import pytest

from distwt.bitrev import bitrev, bitrev32


def test_lowest_bit_becomes_highest():
    assert bitrev32(1) == 0x80000000


@pytest.mark.parametrize("x", [0, 1, 0xDEADBEEF, 0x12345678, 0xFFFFFFFF, 0x80000000])
def test_bitrev32_is_involution(x):
    assert bitrev32(bitrev32(x)) == x


@pytest.mark.parametrize("x", [0, 5, 0xF0F0, 0xABCDEF01])
def test_bitrev32_preserves_popcount(x):
    assert bin(bitrev32(x)).count("1") == bin(x).count("1")


def test_zero_bits_gives_zero():
    assert bitrev(12345, 0) == 0


@pytest.mark.parametrize("b", [1, 3, 8, 17, 32])
def test_bitrev_involution_on_low_bits(b):
    for x in range(0, min(1 << b, 300)):
        r = bitrev(x, b)
        assert r < (1 << b)
        assert bitrev(r, b) == x


def test_bitrev_small_example():
    assert bitrev(1, 3) == 4


def test_bit_count_out_of_range():
    with pytest.raises(ValueError):
        bitrev(1, 33)