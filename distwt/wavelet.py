"""Shape of wavelet trees and wavelet matrices derived from a histogram."""

from __future__ import annotations

from distwt.binary_io import FileWriter


def _integer_log2_ceil(i: int) -> int:
    return 0 if i <= 1 else (i - 1).bit_length()


def wt_height(sigma: int) -> int:
    """Tree height used for an alphabet of ``sigma`` symbols."""
    if sigma < 1:
        raise ValueError(f"alphabet size must be positive, got {sigma}")
    return _integer_log2_ceil(sigma - 1)


def max_bintree_nodes(height: int) -> int:
    """Number of inner nodes of a complete binary tree of the given height."""
    return (1 << height) - 1


def node_sizes(hist) -> list[int]:
    """Bit vector length of every node, indexed by ``node_id - 1``."""
    num_nodes = max_bintree_nodes(wt_height(hist.size()))
    sizes = [0] * num_nodes
    c = hist.compute_c()
    last = len(c) - 1

    stack = [(1, 0, num_nodes)]
    while stack:
        node_id, a, b = stack.pop()
        if a < b:
            sizes[node_id - 1] = c[min(b + 1, last)] - c[min(a, last)]
            m = (a + b) // 2
            stack.append((2 * node_id, a, m))
            stack.append((2 * node_id + 1, m + 1, b))
    return sizes


class WaveletTreeBase:
    """Alphabet size and height of a wavelet tree."""

    def __init__(self, hist) -> None:
        self.sigma: int = hist.size()
        self.height: int = wt_height(self.sigma)

    @staticmethod
    def histogram_extension() -> str:
        return "hist"

    @staticmethod
    def level_extension(level: int) -> str:
        return f"lv_{level + 1}"

    @staticmethod
    def node_extension(node_id: int) -> str:
        return f"node_{node_id}"

    def num_nodes(self) -> int:
        return max_bintree_nodes(self.height)


class WaveletMatrixBase(WaveletTreeBase):
    """Wavelet tree shape plus the number of zero bits on every level."""

    def __init__(self, hist) -> None:
        super().__init__(hist)
        self.z_values: list[int] = [0] * self.height

    @staticmethod
    def z_extension() -> str:
        return "z"

    def z(self, level: int) -> int:
        return self.z_values[level]

    def save_z(self, filename: str) -> None:
        """Write one 8-byte Z value per level."""
        with FileWriter(filename) as w:
            for level in range(self.height):
                w.write(self.z(level), "Q")