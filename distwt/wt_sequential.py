"""Sequential wavelet tree construction by prefix counting."""

from __future__ import annotations

from collections.abc import Sequence

from distwt.wavelet import max_bintree_nodes


def wt_pc(text: Sequence[int], root_node_id: int, h: int) -> dict[int, list[bool]]:
    """Build the wavelet subtree of height ``h`` rooted at ``root_node_id``.

    Node ids are 1-based in heap order; the symbols of ``text`` are global
    effective symbols of the leaves below the root. Returns the bit vector of
    every inner node of the subtree, keyed by node id.
    """
    if root_node_id < 1:
        raise ValueError(f"node ids are 1-based, got {root_node_id}")
    if h < 1:
        raise ValueError(f"subtree height must be at least 1, got {h}")

    root_level = root_node_id.bit_length() - 1
    root_rank = root_node_id - (1 << root_level)
    sigma = 1 << h
    first_symbol = root_rank * sigma

    for c in text:
        if not 0 <= c - first_symbol < sigma:
            raise ValueError(f"symbol {c} is not below node {root_node_id}")

    test = 1 << (h - 1)
    bits: dict[int, list[bool]] = {root_node_id: [bool(c & test) for c in text]}

    for level in range(h - 1, 0, -1):
        first_node = (1 << level) * root_node_id
        level_bits = [[] for _ in range(1 << level)]
        rsh = h - level
        test = 1 << (h - 1 - level)
        offset = root_rank * (1 << level)
        for c in text:
            level_bits[(c >> rsh) - offset].append(bool(c & test))
        for v, node_bits in enumerate(level_bits):
            bits[first_node + v] = node_bits
    return bits


def wt_pc_full(height: int, text: Sequence[int]) -> list[list[bool]]:
    """Build a whole wavelet tree; the result is indexed by ``node_id - 1``."""
    nodes: list[list[bool]] = [[] for _ in range(max_bintree_nodes(height))]
    if height == 0:
        return nodes
    for node_id, node_bits in wt_pc(text, 1, height).items():
        nodes[node_id - 1] = node_bits
    return nodes