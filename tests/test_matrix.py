import os

import pytest

from distwt.binary_io import FileReader
from distwt.histogram import Histogram
from distwt.levelwise import partition
from distwt.matrix import (
    DummyHistogram,
    WaveletMatrix,
    construct_concat,
    construct_concat_effective,
    construct_concat_global,
)
from distwt.util import unpack_bv64

TEXT = list(b"abracadabra_mississippi_banana")


def _hist(text):
    return Histogram.from_symbols(text)


def test_dummy_histogram_size():
    hist = DummyHistogram(42)
    assert hist.size() == 42
    assert hist.entries == []


def test_worked_example_bits_and_z():
    text = list(b"dcba")
    wm = construct_concat_global(text, _hist(text))
    assert wm.bits == [[True, True, False, False], [True, False, True, False]]
    assert wm.z_values == [2, 2]


@pytest.mark.parametrize("text", [TEXT, list(b"abcd"), list(b"hgfedcba" * 3)])
def test_global_round_trip(text):
    hist = _hist(text)
    wm = construct_concat_global(text, hist)
    assert wm.decode(hist) == text


@pytest.mark.parametrize("workers", [1, 2, 3, 4, 7])
def test_distributed_matches_global(workers):
    hist = _hist(TEXT)
    expected = construct_concat_global(TEXT, hist)
    wm = construct_concat(partition(TEXT, workers), hist)
    assert wm.bits == expected.bits
    assert wm.z_values == expected.z_values
    assert wm.decode(hist) == TEXT


def test_z_counts_zero_bits():
    hist = _hist(TEXT)
    wm = construct_concat(partition(TEXT, 3), hist)
    for level in range(wm.height):
        assert wm.z(level) == wm.bits[level].count(False)


def test_effective_input_round_trip():
    etext = [7, 0, 3, 5, 1, 6, 2, 4, 7, 0]
    wm = construct_concat_effective(partition(etext, 3))
    assert wm.sigma == 7
    assert wm.decode(DummyHistogram(wm.sigma)) == etext


def test_effective_symbol_too_large():
    with pytest.raises(ValueError):
        construct_concat_effective([[3, 1]])


def test_uneven_layout_rejected():
    hist = _hist(TEXT)
    with pytest.raises(ValueError):
        construct_concat([TEXT[:5], TEXT[5:]], hist)


def test_unknown_symbol_rejected():
    hist = _hist(list(b"abcd"))
    with pytest.raises(ValueError):
        construct_concat([list(b"abz")], hist)


def test_constructor_checks_z():
    hist = _hist(list(b"abcd"))
    with pytest.raises(ValueError):
        WaveletMatrix(hist, [[False, True], [True, True]], [1, 1])


def test_constructor_checks_level_count():
    hist = _hist(list(b"abcd"))
    with pytest.raises(ValueError):
        WaveletMatrix(hist, [[False, True]], [1])


def test_save_levels(tmp_path):
    hist = _hist(TEXT)
    wm = construct_concat(partition(TEXT, 2), hist)
    base = str(tmp_path / "wm")
    wm.save(base)
    for level in range(wm.height):
        filename = f"{base}.lv_{level + 1}"
        assert os.path.exists(filename)
        with FileReader(filename) as r:
            length = r.read("Q")
            words = [r.read("Q") for _ in range((length + 63) // 64)]
        assert length == len(TEXT)
        assert unpack_bv64(words, length) == wm.bits[level]


def test_save_z(tmp_path):
    hist = _hist(TEXT)
    wm = construct_concat(partition(TEXT, 2), hist)
    filename = str(tmp_path / "wm.z")
    wm.save_z(filename)
    assert os.path.getsize(filename) == 8 * wm.height
    with FileReader(filename) as r:
        assert [r.read("Q") for _ in range(wm.height)] == wm.z_values


def test_histogram_saved_alongside(tmp_path):
    hist = _hist(TEXT)
    wm = construct_concat_global(TEXT, hist)
    filename = str(tmp_path / f"wm.{wm.histogram_extension()}")
    hist.save(filename)
    assert wm.decode(Histogram.load(filename)) == TEXT