import pytest

from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram

TEXT = b"mississippi river"


def make():
    hist = Histogram.from_symbols(TEXT)
    return hist, EffectiveAlphabet(hist)


def test_ranks_are_dense():
    hist, ea = make()
    etext = ea.transform(TEXT)
    assert len(etext) == len(TEXT)
    assert set(etext) == set(range(hist.size()))


def test_transform_preserves_order():
    _, ea = make()
    etext = ea.transform(TEXT)
    for a, b, x, y in zip(TEXT, TEXT[1:], etext, etext[1:]):
        assert (a < b) == (x < y)
        assert (a == b) == (x == y)


def test_symbol_inverts_transform():
    _, ea = make()
    assert bytes(ea.symbol(r) for r in ea.transform(TEXT)) == TEXT


def test_unknown_symbol_raises():
    _, ea = make()
    with pytest.raises(ValueError):
        ea.transform(b"z")


def test_rank_out_of_range_raises():
    hist, ea = make()
    with pytest.raises(IndexError):
        ea.symbol(hist.size())