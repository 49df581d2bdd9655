import pytest

from distwt.binary_io import FileReader
from distwt.histogram import Histogram
from distwt.wavelet import (
    WaveletMatrixBase,
    WaveletTreeBase,
    max_bintree_nodes,
    node_sizes,
    wt_height,
)


def test_extensions():
    assert WaveletTreeBase.histogram_extension() == "hist"
    assert WaveletTreeBase.level_extension(0) == "lv_1"
    assert WaveletTreeBase.node_extension(5) == "node_5"
    assert WaveletMatrixBase.z_extension() == "z"
    assert WaveletMatrixBase.level_extension(2) == "lv_3"


@pytest.mark.parametrize("sigma", range(4, 300))
def test_height_covers_sigma_minus_one(sigma):
    h = wt_height(sigma)
    assert (1 << h) >= sigma - 1
    assert (1 << (h - 1)) < sigma - 1


def test_height_rejects_empty_alphabet():
    with pytest.raises(ValueError):
        wt_height(0)


@pytest.mark.parametrize("h", range(0, 10))
def test_max_bintree_nodes_is_level_sum(h):
    assert max_bintree_nodes(h) == sum(1 << level for level in range(h))


def test_node_sizes_consistency():
    text = [0, 1, 2, 3, 3, 2, 1, 0, 0, 5, 6, 7, 7, 4]
    hist = Histogram.from_symbols(text)
    sizes = node_sizes(hist)
    wt = WaveletTreeBase(hist)
    assert len(sizes) == wt.num_nodes()
    assert sizes[0] == len(text)
    for node_id in range(1, (wt.num_nodes() + 1) // 2):
        assert sizes[node_id - 1] == sizes[2 * node_id - 1] + sizes[2 * node_id]


def test_node_sizes_leaf_parents_count_symbols():
    text = [0, 0, 1, 2, 3, 3, 3]
    hist = Histogram.from_symbols(text)
    sizes = node_sizes(hist)
    assert sizes[1] == text.count(0) + text.count(1)
    assert sizes[2] == text.count(2) + text.count(3)


def test_matrix_z_save(tmp_path):
    hist = Histogram.from_symbols(range(8))
    wm = WaveletMatrixBase(hist)
    assert wm.z_values == [0] * wm.height
    wm.z_values = [level * 10 + 1 for level in range(wm.height)]
    path = tmp_path / "out.z"
    wm.save_z(str(path))
    assert path.stat().st_size == 8 * wm.height
    with FileReader(str(path)) as r:
        assert [r.read("Q") for _ in range(wm.height)] == wm.z_values
    assert wm.z(1) == wm.z_values[1]