"""Wavelet tree construction by recursive distributed splitting of the text.

Each node is handled by a group of workers. The group computes the node's bit
vector, then moves all symbols of the left child to the first workers of the
group and all symbols of the right child to the others. The two subgroups
then recurse independently. A group of a single worker builds its whole
remaining subtree sequentially.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram
from distwt.levelwise import WaveletTreeLevelwise, partition
from distwt.matrix import WaveletMatrix
from distwt.nodebased import WaveletTreeNodebased
from distwt.wavelet import WaveletTreeBase
from distwt.wt_sequential import wt_pc


def _integer_log2_ceil(i: int) -> int:
    return 0 if i <= 1 else (i - 1).bit_length()


def dsplit(
    parts: Sequence[Sequence[int]], predicate: Callable[[int], bool]
) -> tuple[list[list[int]], int]:
    """Stably split a partitioned text between two groups of workers.

    Symbols for which ``predicate`` is false keep their order and go to the
    first ``split`` workers, the others go to the remaining workers. The
    number of workers of each group is proportional to its share of the
    symbols, with at least one worker per group. Returns the new parts of all
    workers and ``split``.
    """
    num_workers = len(parts)
    if num_workers < 2:
        raise ValueError(f"splitting needs at least two workers, got {num_workers}")

    left = [x for part in parts for x in part if not predicate(x)]
    right = [x for part in parts for x in part if predicate(x)]
    n = len(left) + len(right)

    if n:
        split = (2 * num_workers * len(left) + n) // (2 * n)
    else:
        split = num_workers // 2
    split = min(max(split, 1), num_workers - 1)

    return partition(left, split) + partition(right, num_workers - split), split


def dsplit_nodes(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> list[list[bool]]:
    """Bit vectors of all wavelet tree nodes, indexed by ``node_id - 1``."""
    if not parts:
        raise ValueError("at least one worker is required")
    shape = WaveletTreeBase(hist)
    alphabet = EffectiveAlphabet(hist)
    etexts = [alphabet.transform(p) for p in parts]
    limit = 1 << shape.height
    for etext in etexts:
        for x in etext:
            if x >= limit:
                raise ValueError(
                    f"effective symbol {x} does not fit into a tree "
                    f"of height {shape.height}"
                )

    num_nodes = shape.num_nodes()
    bits: list[list[bool]] = [[] for _ in range(num_nodes)]

    def recurse(group: list[list[int]], node_id: int, a: int, b: int) -> None:
        if a == b:
            return
        if len(group) == 1:
            subtree = wt_pc(group[0], node_id, _integer_log2_ceil(b - a + 1))
            for sub_id, sub_bits in subtree.items():
                bits[sub_id - 1] = sub_bits
            return

        m = (a + b) // 2
        bits[node_id - 1] = [x > m for part in group for x in part]
        if a < m or m + 1 < b:
            new_parts, split = dsplit(group, lambda x: x > m)
            recurse(new_parts[:split], 2 * node_id, a, m)
            recurse(new_parts[split:], 2 * node_id + 1, m + 1, b)

    if num_nodes > 0:
        recurse(etexts, 1, 0, num_nodes)
    return bits


def construct_dsplit(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletTreeLevelwise:
    """Build a level-wise wavelet tree by recursive distributed splitting."""
    return WaveletTreeNodebased(hist, dsplit_nodes(parts, hist)).merge(hist)


def construct_wm_dsplit(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletMatrix:
    """Build a wavelet matrix by recursive distributed splitting."""
    return WaveletTreeNodebased(hist, dsplit_nodes(parts, hist)).merge_to_matrix(hist)