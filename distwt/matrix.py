"""Wavelet matrices: construction by concatenating the 0- and 1-buckets per level."""

from __future__ import annotations

from collections.abc import Sequence

from distwt.binary_io import FileWriter
from distwt.effective_alphabet import EffectiveAlphabet
from distwt.histogram import Histogram
from distwt.levelwise import exchange_buckets
from distwt.util import pack_bv64
from distwt.wavelet import WaveletMatrixBase


class DummyHistogram(Histogram):
    """A histogram without entries that only reports an alphabet size."""

    def __init__(self, size: int) -> None:
        super().__init__([])
        self._size = int(size)

    def size(self) -> int:
        return self._size


class WaveletMatrix(WaveletMatrixBase):
    """A wavelet matrix: one bit vector per level plus its number of zeros."""

    def __init__(
        self,
        hist: Histogram,
        bits: Sequence[Sequence[bool]],
        z: Sequence[int],
        length: int | None = None,
    ) -> None:
        super().__init__(hist)
        if len(bits) != self.height:
            raise ValueError(
                f"expected {self.height} level bit vectors, got {len(bits)}"
            )
        if len(z) != self.height:
            raise ValueError(f"expected {self.height} Z values, got {len(z)}")
        if length is None:
            length = len(bits[0]) if bits else hist.text_length()
        for level, level_bits in enumerate(bits):
            if len(level_bits) != length:
                raise ValueError(
                    f"level {level} has {len(level_bits)} bits, expected {length}"
                )
        for level, (level_bits, zeros) in enumerate(zip(bits, z)):
            if zeros != sum(1 for b in level_bits if not b):
                raise ValueError(f"Z value of level {level} does not match its bits")
        self.length: int = length
        self.bits: list[list[bool]] = [[bool(b) for b in lv] for lv in bits]
        self.z_values = [int(v) for v in z]

    def save(self, basename: str) -> None:
        """Write every level to ``<basename>.lv_<level+1>``."""
        for level, level_bits in enumerate(self.bits):
            filename = f"{basename}.{self.level_extension(level)}"
            with FileWriter(filename) as w:
                w.write(len(level_bits), "Q")
                for word in pack_bv64(level_bits):
                    w.write(word, "Q")

    def decode(self, hist: Histogram) -> list[int]:
        """Reconstruct the text; a histogram without entries yields effective symbols."""
        n = self.length
        values = [0] * n
        order = list(range(n))
        for level_bits in self.bits:
            zeros, ones = [], []
            for pos, idx in enumerate(order):
                bit = level_bits[pos]
                values[idx] = (values[idx] << 1) | bit
                (ones if bit else zeros).append(idx)
            order = zeros + ones
        if not hist.entries:
            return values
        alphabet = EffectiveAlphabet(hist)
        return [alphabet.symbol(v) for v in values]


def _ensure_fits(etext: Sequence[int], height: int) -> None:
    limit = 1 << height
    for x in etext:
        if not 0 <= x < limit:
            raise ValueError(
                f"effective symbol {x} does not fit into a matrix of height {height}"
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


def _build_distributed(etexts: list[list[int]], hist: Histogram) -> WaveletMatrix:
    height = WaveletMatrixBase(hist).height
    for etext in etexts:
        _ensure_fits(etext, height)
    local_sizes = [len(t) for t in etexts]
    size_per_worker = _size_per_worker(local_sizes)
    n = sum(local_sizes)

    bits: list[list[bool]] = [[] for _ in range(height)]
    z = [0] * height
    for level in range(height):
        rsh = height - 1 - level
        worker_buffers = []
        for etext in etexts:
            zeros: list[int] = []
            ones: list[int] = []
            for x in etext:
                bit = bool((x >> rsh) & 1)
                bits[level].append(bit)
                (ones if bit else zeros).append(x)
            worker_buffers.append([zeros, ones])
        glob_z = sum(len(b[0]) for b in worker_buffers)
        z[level] = glob_z
        if level + 1 < height:
            etexts = exchange_buckets(
                worker_buffers, [glob_z, n - glob_z], size_per_worker, local_sizes
            )
    return WaveletMatrix(hist, bits, z, n)


def construct_concat(
    parts: Sequence[Sequence[int]], hist: Histogram
) -> WaveletMatrix:
    """Build a wavelet matrix from a partitioned text.

    On every level each worker splits its part stably into a 0-buffer and a
    1-buffer, and the buffers are moved to their global positions: all
    0-buffers first, then all 1-buffers, in worker order.
    """
    alphabet = EffectiveAlphabet(hist)
    return _build_distributed([alphabet.transform(p) for p in parts], hist)


def construct_concat_global(text: Sequence[int], hist: Histogram) -> WaveletMatrix:
    """Build a wavelet matrix by concatenating the filtered 0- and 1-symbols."""
    height = WaveletMatrixBase(hist).height
    etext = EffectiveAlphabet(hist).transform(text)
    _ensure_fits(etext, height)
    n = len(etext)

    bits: list[list[bool]] = []
    z: list[int] = []
    for level in range(height):
        rsh = height - 1 - level
        level_bits = [bool((x >> rsh) & 1) for x in etext]
        bits.append(level_bits)
        z.append(n - sum(level_bits))
        if level + 1 < height:
            etext = [x for x in etext if not (x >> rsh) & 1] + [
                x for x in etext if (x >> rsh) & 1
            ]
    return WaveletMatrix(hist, bits, z, n)


def construct_concat_effective(parts: Sequence[Sequence[int]]) -> WaveletMatrix:
    """Build a wavelet matrix from a text that is already an effective transform.

    The alphabet size is taken to be the largest symbol of the whole text.
    """
    etexts = [[int(x) for x in p] for p in parts]
    glob_max = max((max(p, default=0) for p in etexts), default=0)
    return _build_distributed(etexts, DummyHistogram(glob_max))