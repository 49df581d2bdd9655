"""Level-wise wavelet tree construction by per-level bucket sorting."""

from __future__ import annotations

from collections.abc import Sequence
from operator import itemgetter

from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram
from distwt.levelwise import WaveletTreeLevelwise, exchange_buckets
from distwt.wavelet import WaveletTreeBase, node_sizes

DEFAULT_PACK_SIZE = 8


def _ensure_fits(etext: Sequence[int], height: int) -> None:
    limit = 1 << height
    for x in etext:
        if not 0 <= x < limit:
            raise ValueError(
                f"effective symbol {x} does not fit into a tree of height {height}"
            )


def _size_per_worker(local_sizes: Sequence[int]) -> int:
    if not local_sizes:
        raise ValueError("at least one worker is required")
    n = sum(local_sizes)
    per_worker = max(local_sizes)
    expected = [
        min(per_worker, max(0, n - w * per_worker)) for w in range(len(local_sizes))
    ]
    if list(local_sizes) != expected:
        raise ValueError(f"parts of sizes {list(local_sizes)} are not evenly laid out")
    return per_worker


def bucket_sort_level(
    text: Sequence[int], rsh: int, num_buckets: int
) -> tuple[list[bool], list[int], list[int]]:
    """Stably bucket-sort ``text`` by ``x >> rsh``.

    Returns the level's bit vector (the lowest bit of each bucket key), the
    sorted buffer, and the start offset of each bucket in the buffer followed
    by the buffer length.
    """
    sizes = [0] * num_buckets
    keys = [x >> rsh for x in text]
    for v in keys:
        if not 0 <= v < num_buckets:
            raise ValueError(f"bucket {v} out of range for {num_buckets} buckets")
        sizes[v] += 1

    offsets = [0] * (num_buckets + 1)
    for v, size in enumerate(sizes):
        offsets[v + 1] = offsets[v] + size

    positions = offsets[:-1]
    buffer = [0] * len(text)
    bits = []
    for x, v in zip(text, keys):
        bits.append(bool(v & 1))
        buffer[positions[v]] = x
        positions[v] += 1
    return bits, buffer, offsets


def construct_bsort(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletTreeLevelwise:
    """Build a level-wise wavelet tree from a partitioned text.

    Each worker counting-sorts its part into buckets of the next level, and
    the buckets are moved to their global positions before the next level.
    """
    height = WaveletTreeBase(hist).height
    alphabet = EffectiveAlphabet(hist)
    etexts = [alphabet.transform(p) for p in parts]
    for etext in etexts:
        _ensure_fits(etext, height)
    local_sizes = [len(t) for t in etexts]
    size_per_worker = _size_per_worker(local_sizes)
    sizes = node_sizes(hist)

    bits: list[list[bool]] = [[] for _ in range(height)]
    for level in range(height):
        rsh = height - 1 - level
        if level + 1 == height:
            for etext in etexts:
                bits[level].extend(bool((x >> rsh) & 1) for x in etext)
            break

        num_nodes = 1 << (level + 1)
        worker_buckets = []
        for etext in etexts:
            level_bits, buffer, offsets = bucket_sort_level(etext, rsh, num_nodes)
            bits[level].extend(level_bits)
            worker_buckets.append(
                [buffer[offsets[v]:offsets[v + 1]] for v in range(num_nodes)]
            )
        level_node_sizes = sizes[num_nodes - 1:2 * num_nodes - 1]
        etexts = exchange_buckets(
            worker_buckets, level_node_sizes, size_per_worker, local_sizes
        )
    return WaveletTreeLevelwise(hist, bits)


def pack_symbols(symbols: Sequence[int], pack_size: int) -> list[tuple[int, ...]]:
    """Group symbols into packs of ``pack_size``; the last pack is zero-padded."""
    if pack_size < 1:
        raise ValueError(f"pack size must be positive, got {pack_size}")
    packs = []
    for start in range(0, len(symbols), pack_size):
        chunk = tuple(symbols[start:start + pack_size])
        packs.append(chunk + (0,) * (pack_size - len(chunk)))
    return packs


def construct_bsort_packed(
    text: Sequence[int], hist: Histogram, pack_size: int = DEFAULT_PACK_SIZE
) -> WaveletTreeLevelwise:
    """Build a level-wise wavelet tree by filtering buckets into indexed packs.

    Every bucket is packed into fixed-size blocks labelled with global
    indices; sorting the blocks by index and dropping the padding of each
    node's last block yields the text of the next level.
    """
    if pack_size < 1:
        raise ValueError(f"pack size must be positive, got {pack_size}")
    height = WaveletTreeBase(hist).height
    etext = EffectiveAlphabet(hist).transform(text)
    _ensure_fits(etext, height)
    sizes = node_sizes(hist)

    bits: list[list[bool]] = []
    for level in range(height):
        rsh = height - 1 - level
        bits.append([bool((x >> rsh) & 1) for x in etext])
        if level + 1 == height:
            break

        num_nodes = 1 << (level + 1)
        first_node = num_nodes
        indexed: list[tuple[int, tuple[int, ...]]] = []
        blocks: list[int] = []
        total_blocks = 0
        glob_node_offs = 0
        for v in range(num_nodes):
            bucket = [x for x in etext if (x >> rsh) == v]
            packs = pack_symbols(bucket, pack_size)
            indexed.extend((glob_node_offs + i, p) for i, p in enumerate(packs))
            total_blocks += -(-sizes[first_node + v - 1] // pack_size)
            blocks.append(total_blocks)
            glob_node_offs += sizes[first_node + v - 1]

        if len(indexed) != total_blocks:
            raise ValueError("bucket sizes disagree with the histogram")
        indexed.sort(key=itemgetter(0))

        new_text: list[int] = []
        node = 0
        for rank, (_, pack) in enumerate(indexed):
            while blocks[node] <= rank:
                node += 1
            if rank + 1 == blocks[node]:
                block_size = sizes[first_node + node - 1] % pack_size or pack_size
            else:
                block_size = pack_size
            new_text.extend(pack[:block_size])
        etext = new_text
    return WaveletTreeLevelwise(hist, bits)