"""Level-wise wavelet trees: construction by stable sorting and bucket exchange."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate

from distwt.binary_io import FileReader, FileWriter
from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram
from distwt.util import pack_bv64, unpack_bv64
from distwt.wavelet import WaveletTreeBase, node_sizes


class WaveletVerificationError(RuntimeError):
    """A decoded wavelet tree does not reproduce the original text."""


class WaveletTreeLevelwise(WaveletTreeBase):
    """A wavelet tree stored as one concatenated bit vector per level."""

    def __init__(self, hist: Histogram, bits: Sequence[Sequence[bool]]) -> None:
        super().__init__(hist)
        if len(bits) != self.height:
            raise ValueError(
                f"expected {self.height} level bit vectors, got {len(bits)}"
            )
        n = hist.text_length()
        for level, level_bits in enumerate(bits):
            if len(level_bits) != n:
                raise ValueError(
                    f"level {level} has {len(level_bits)} bits, expected {n}"
                )
        self.length: int = n
        self.bits: list[list[bool]] = [[bool(b) for b in lv] for lv in bits]

    def decode(self, hist: Histogram) -> list[int]:
        """Reconstruct the original (non-effective) text."""
        n = self.length
        prefix = [0] * n
        order = list(range(n))
        for level_bits in self.bits:
            for pos, i in enumerate(order):
                prefix[i] = (prefix[i] << 1) | level_bits[pos]
            order = sorted(range(n), key=prefix.__getitem__)
        alphabet = EffectiveAlphabet(hist)
        return [alphabet.symbol(p) for p in prefix]

    def save(self, basename: str) -> None:
        """Write every level to ``<basename>.lv_<level+1>``."""
        for level, level_bits in enumerate(self.bits):
            filename = f"{basename}.{self.level_extension(level)}"
            with FileWriter(filename) as w:
                w.write(len(level_bits), "Q")
                for word in pack_bv64(level_bits):
                    w.write(word, "Q")

    @classmethod
    def load(cls, hist: Histogram, basename: str) -> "WaveletTreeLevelwise":
        """Read the levels written by :meth:`save`."""
        shape = WaveletTreeBase(hist)
        bits = []
        for level in range(shape.height):
            filename = f"{basename}.{cls.level_extension(level)}"
            with FileReader(filename) as r:
                length = r.read("Q")
                words = [r.read("Q") for _ in range((length + 63) // 64)]
            bits.append(unpack_bv64(words, length))
        return cls(hist, bits)


def partition(text: Sequence[int], num_workers: int) -> list[list[int]]:
    """Split a text into consecutive parts of ``ceil(n / num_workers)`` symbols."""
    if num_workers < 1:
        raise ValueError(f"number of workers must be positive, got {num_workers}")
    per_worker = -(-len(text) // num_workers)
    return [
        list(text[w * per_worker:(w + 1) * per_worker]) for w in range(num_workers)
    ]


def _check_fits(etext: Sequence[int], height: int) -> None:
    limit = 1 << height
    for x in etext:
        if x >= limit:
            raise ValueError(
                f"effective symbol {x} does not fit into a tree of height {height}"
            )


def _check_layout(local_sizes: Sequence[int]) -> int:
    if not local_sizes:
        raise ValueError("at least one worker is required")
    n = sum(local_sizes)
    per_worker = max(local_sizes)
    expected = [min(per_worker, max(0, n - w * per_worker)) for w in range(len(local_sizes))]
    if list(local_sizes) != expected:
        raise ValueError(f"parts of sizes {list(local_sizes)} are not evenly laid out")
    return per_worker


def exchange_buckets(
    worker_buckets: Sequence[Sequence[Sequence[int]]],
    level_node_sizes: Sequence[int],
    size_per_worker: int,
    local_sizes: Sequence[int],
) -> list[list[int]]:
    """Move every worker's buckets to their global sorted positions.

    ``worker_buckets[w][v]`` holds worker ``w``'s symbols of node ``v`` of the
    next level, whose global size is ``level_node_sizes[v]``. Returns the new
    local text of every worker.
    """
    if len(worker_buckets) != len(local_sizes):
        raise ValueError("one bucket list is required per worker")
    num_buckets = len(level_node_sizes)
    node_offs = list(accumulate(level_node_sizes, initial=0))
    outputs: list[list[int]] = [[0] * size for size in local_sizes]
    received = [0] * len(local_sizes)
    running = [0] * num_buckets

    for buckets in worker_buckets:
        if len(buckets) != num_buckets:
            raise ValueError(f"expected {num_buckets} buckets, got {len(buckets)}")
        for v, bucket in enumerate(buckets):
            start = node_offs[v] + running[v]
            running[v] += len(bucket)
            if bucket and size_per_worker <= 0:
                raise ValueError("cannot distribute symbols to empty workers")
            pos = 0
            while pos < len(bucket):
                glob = start + pos
                target, local = divmod(glob, size_per_worker)
                count = min(len(bucket) - pos, size_per_worker - local)
                if target >= len(outputs) or local + count > local_sizes[target]:
                    raise ValueError(f"global position {glob} lies outside the text")
                outputs[target][local:local + count] = bucket[pos:pos + count]
                received[target] += count
                pos += count

    if received != list(local_sizes):
        raise ValueError(
            f"received {received} symbols, expected {list(local_sizes)}"
        )
    return outputs


def construct_sort(text: Sequence[int], hist: Histogram) -> WaveletTreeLevelwise:
    """Build a level-wise wavelet tree by stably sorting the text per level."""
    height = WaveletTreeBase(hist).height
    etext = EffectiveAlphabet(hist).transform(text)
    _check_fits(etext, height)
    bits = []
    for level in range(height):
        rsh = height - 1 - level
        bits.append([bool((x >> rsh) & 1) for x in etext])
        if level + 1 < height:
            etext = sorted(etext, key=lambda x: x >> rsh)
    return WaveletTreeLevelwise(hist, bits)


def construct_dynbsort(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletTreeLevelwise:
    """Build a level-wise wavelet tree from a partitioned text by bucket exchange."""
    height = WaveletTreeBase(hist).height
    alphabet = EffectiveAlphabet(hist)
    etexts = [alphabet.transform(p) for p in parts]
    for etext in etexts:
        _check_fits(etext, height)
    local_sizes = [len(t) for t in etexts]
    size_per_worker = _check_layout(local_sizes)
    sizes = node_sizes(hist)

    bits: list[list[bool]] = [[] for _ in range(height)]
    for level in range(height):
        rsh = height - 1 - level
        for etext in etexts:
            bits[level].extend(bool((x >> rsh) & 1) for x in etext)
        if level + 1 < height:
            num_nodes = 1 << (level + 1)
            worker_buckets = []
            for etext in etexts:
                buckets: list[list[int]] = [[] for _ in range(num_nodes)]
                for x in etext:
                    buckets[x >> rsh].append(x)
                worker_buckets.append(buckets)
            level_node_sizes = sizes[num_nodes - 1:2 * num_nodes - 1]
            etexts = exchange_buckets(
                worker_buckets, level_node_sizes, size_per_worker, local_sizes
            )
    return WaveletTreeLevelwise(hist, bits)


def compare_symbols(first: Sequence[int], second: Sequence[int]) -> int:
    """Number of differing positions, counting surplus symbols as differences."""
    diff = sum(1 for a, b in zip(first, second) if a != b)
    return diff + abs(len(first) - len(second))


def verify(original: Sequence[int], wt: WaveletTreeLevelwise, hist: Histogram) -> int:
    """Check that ``wt`` decodes to ``original``; return the number of symbols."""
    decoded = wt.decode(hist)
    diff = compare_symbols(original, decoded)
    if diff != 0:
        raise WaveletVerificationError(f"WT verification FAILED: diff={diff}")
    return len(decoded)