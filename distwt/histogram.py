"""Symbol histograms: sorted (symbol, count) entries."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import accumulate

from distwt.binary_io import FileReader, FileWriter


@dataclass
class Histogram:
    """Occurrence counts of symbols, ordered by symbol."""

    entries: list[tuple[int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.entries = [(int(s), int(c)) for s, c in self.entries]

    @classmethod
    def from_symbols(cls, symbols: Iterable[int]) -> "Histogram":
        """Count the symbols of a text."""
        return cls(sorted(Counter(symbols).items()))

    def compute_c(self) -> list[int]:
        """The C array: exclusive prefix sums of counts, with the total appended."""
        return list(accumulate((c for _, c in self.entries), initial=0))

    def text_length(self) -> int:
        """Length of the text the histogram was computed from."""
        return sum(c for _, c in self.entries)

    def save(self, filename: str, sym_width: int = 1) -> None:
        """Write the entry count, then each symbol and its 8-byte count."""
        with FileWriter(filename) as w:
            w.write(len(self.entries), "Q")
            for sym, cnt in self.entries:
                w.write(sym, sym_width)
                w.write(cnt, "Q")

    @classmethod
    def load(cls, filename: str, sym_width: int = 1) -> "Histogram":
        """Read a histogram written by :meth:`save`."""
        with FileReader(filename) as r:
            num_entries = r.read("Q")
            entries = []
            for _ in range(num_entries):
                sym = r.read(sym_width)
                cnt = r.read("Q")
                entries.append((sym, cnt))
        return cls(entries)

    def size(self) -> int:
        """Number of distinct symbols."""
        return len(self.entries)