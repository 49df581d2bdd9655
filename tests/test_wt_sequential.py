import random

import pytest

from distwt.wt_sequential import wt_pc, wt_pc_full


def _decode(nodes, height, length):
    out = []
    for i in range(length):
        node, pos = 1, i
        for _ in range(height):
            bits = nodes[node - 1]
            b = bits[pos]
            pos = sum(1 for x in bits[:pos] if x == b)
            node = 2 * node + int(b)
        out.append(node - (1 << height))
    return out


@pytest.mark.parametrize("height", [1, 2, 3, 5])
def test_full_tree_decodes_to_text(height):
    rng = random.Random(height)
    text = [rng.randrange(1 << height) for _ in range(120)]
    nodes = wt_pc_full(height, text)
    assert len(nodes) == (1 << height) - 1
    assert _decode(nodes, height, len(text)) == text


def test_child_sizes_match_parent_bits():
    rng = random.Random(7)
    height = 4
    text = [rng.randrange(16) for _ in range(200)]
    nodes = wt_pc_full(height, text)
    assert len(nodes[0]) == len(text)
    for node_id in range(1, 1 << (height - 1)):
        parent = nodes[node_id - 1]
        assert len(nodes[2 * node_id - 1]) == parent.count(False)
        assert len(nodes[2 * node_id]) == parent.count(True)


def test_subtree_matches_full_tree():
    rng = random.Random(3)
    text = [rng.randrange(8) for _ in range(100)]
    full = wt_pc_full(3, text)
    right = [c for c in text if c >= 4]
    sub = wt_pc(right, 3, 2)
    assert set(sub) == {3, 6, 7}
    for node_id, bits in sub.items():
        assert bits == full[node_id - 1]


def test_single_level_subtree():
    assert wt_pc([2, 3, 3, 2], 3, 1) == {3: [False, True, True, False]}


def test_height_zero_has_no_nodes():
    assert wt_pc_full(0, [0, 0]) == []


def test_symbol_outside_subtree_raises():
    with pytest.raises(ValueError):
        wt_pc([5], 1, 2)


def test_invalid_arguments_raise():
    with pytest.raises(ValueError):
        wt_pc([0], 0, 1)
    with pytest.raises(ValueError):
        wt_pc([0], 1, 0)