"""Node-based wavelet trees: one bit vector per tree node.

They are built locally (per worker, or recursively over the whole text) and
then merged into the level-wise tree or the wavelet matrix.
"""

from __future__ import annotations

from collections.abc import Sequence

from distwt.bitrev import bitrev
from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram
from distwt.levelwise import WaveletTreeLevelwise
from distwt.matrix import WaveletMatrix
from distwt.wavelet import WaveletTreeBase, node_sizes
from distwt.wt_sequential import wt_pc_full


class WaveletTreeNodebased(WaveletTreeBase):
    """A wavelet tree holding the bit vector of every node, indexed by ``node_id - 1``."""

    def __init__(self, hist: Histogram, bits: Sequence[Sequence[bool]]) -> None:
        super().__init__(hist)
        if len(bits) != self.num_nodes():
            raise ValueError(
                f"expected {self.num_nodes()} node bit vectors, got {len(bits)}"
            )
        self.bits: list[list[bool]] = [[bool(b) for b in node] for node in bits]

    def _level_nodes(self, level: int) -> list[list[bool]]:
        first = 1 << level
        return self.bits[first - 1:2 * first - 1]

    def _check_sizes(self, hist: Histogram) -> None:
        expected = node_sizes(hist)
        for node_id, (node, size) in enumerate(zip(self.bits, expected), start=1):
            if len(node) != size:
                raise ValueError(
                    f"node {node_id} has {len(node)} bits, expected {size}"
                )

    def merge(self, hist: Histogram) -> WaveletTreeLevelwise:
        """Concatenate the nodes of every level into a level-wise wavelet tree."""
        self._check_sizes(hist)
        levels = [
            [b for node in self._level_nodes(level) for b in node]
            for level in range(self.height)
        ]
        return WaveletTreeLevelwise(hist, levels)

    def merge_to_matrix(self, hist: Histogram) -> WaveletMatrix:
        """Arrange the nodes of every level in bit-reversed order as a wavelet matrix."""
        self._check_sizes(hist)
        levels: list[list[bool]] = []
        z: list[int] = []
        for level in range(self.height):
            nodes = self._level_nodes(level)
            order = sorted(range(len(nodes)), key=lambda v: bitrev(v, level))
            level_bits = [b for v in order for b in nodes[v]]
            levels.append(level_bits)
            z.append(sum(1 for b in level_bits if not b))
        return WaveletMatrix(hist, levels, z, hist.text_length())

    @classmethod
    def combine(
        cls, hist: Histogram, trees: Sequence["WaveletTreeNodebased"]
    ) -> "WaveletTreeNodebased":
        """Join the local trees of consecutive text parts node by node."""
        shape = WaveletTreeBase(hist)
        num_nodes = shape.num_nodes()
        for tree in trees:
            if tree.num_nodes() != num_nodes:
                raise ValueError(
                    f"tree with {tree.num_nodes()} nodes cannot be combined "
                    f"into one with {num_nodes} nodes"
                )
        bits = [
            [b for tree in trees for b in tree.bits[index]]
            for index in range(num_nodes)
        ]
        return cls(hist, bits)


def _local_trees(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletTreeNodebased:
    alphabet = EffectiveAlphabet(hist)
    height = WaveletTreeBase(hist).height
    trees = [
        WaveletTreeNodebased(hist, wt_pc_full(height, alphabet.transform(part)))
        for part in parts
    ]
    return WaveletTreeNodebased.combine(hist, trees)


def construct_dd(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletTreeLevelwise:
    """Build local trees by prefix counting per part, then merge level-wise."""
    return _local_trees(parts, hist).merge(hist)


def construct_wm_dd(parts: Sequence[Sequence[int]], hist: Histogram) -> WaveletMatrix:
    """Build local trees by prefix counting per part, then merge to a matrix."""
    return _local_trees(parts, hist).merge_to_matrix(hist)


def construct_recursive(text: Sequence[int], hist: Histogram) -> WaveletTreeLevelwise:
    """Build the tree by recursively splitting the text at each node's middle symbol."""
    shape = WaveletTreeBase(hist)
    num_nodes = shape.num_nodes()
    etext = EffectiveAlphabet(hist).transform(text)
    limit = 1 << shape.height
    for x in etext:
        if x >= limit:
            raise ValueError(
                f"effective symbol {x} does not fit into a tree of height {shape.height}"
            )
    bits: list[list[bool]] = [[] for _ in range(num_nodes)]

    def recurse(node_id: int, symbols: list[int], a: int, b: int) -> None:
        if a == b:
            return
        m = (a + b) // 2
        bits[node_id - 1] = [x > m for x in symbols]
        recurse(2 * node_id, [x for x in symbols if x <= m], a, m)
        recurse(2 * node_id + 1, [x for x in symbols if x > m], m + 1, b)

    if num_nodes > 0:
        recurse(1, etext, 0, num_nodes)
    return WaveletTreeNodebased(hist, bits).merge(hist)