"""Mapping of symbols to their rank in the histogram (effective alphabet)."""

from __future__ import annotations

from collections.abc import Iterable

from distwt.histogram import Histogram


class EffectiveAlphabet:
    """Maps each symbol of a histogram to its rank ``0 .. sigma-1``."""

    def __init__(self, hist: Histogram) -> None:
        self._symbols = [sym for sym, _ in hist.entries]
        self._ranks = {sym: rank for rank, sym in enumerate(self._symbols)}

    def transform(self, symbols: Iterable[int]) -> list[int]:
        """Replace every symbol by its rank."""
        try:
            return [self._ranks[x] for x in symbols]
        except KeyError as exc:
            raise ValueError(f"symbol {exc.args[0]!r} is not in the alphabet") from None

    def symbol(self, rank: int) -> int:
        """The original symbol of the given rank."""
        if not 0 <= rank < len(self._symbols):
            raise IndexError(f"rank {rank} out of range")
        return self._symbols[rank]