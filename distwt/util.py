"""Small helpers: file sizes, wall-clock time and 64-bit block bit vectors."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable, Sequence

BV64_BITS = 64


def file_size(filename: str) -> int:
    """Size of a file in bytes."""
    return os.stat(filename).st_size


def current_time() -> float:
    """Wall-clock time in seconds, at millisecond resolution."""
    return (time.time_ns() // 1_000_000) / 1000.0


def format_bits(bits: Iterable[bool]) -> str:
    """Render a bit vector as a string of 0s and 1s."""
    return "".join("1" if b else "0" for b in bits)


def pack_bv64(bits: Sequence[bool]) -> list[int]:
    """Pack bits into 64-bit words; the first bit of a block is the word's top bit."""
    words = []
    for start in range(0, len(bits), BV64_BITS):
        word = 0
        for i, b in enumerate(bits[start:start + BV64_BITS]):
            if b:
                word |= 1 << (BV64_BITS - 1 - i)
        words.append(word)
    return words


def unpack_bv64(words: Sequence[int], length: int) -> list[bool]:
    """Inverse of :func:`pack_bv64` for a bit vector of the given length."""
    if length < 0 or length > BV64_BITS * len(words):
        raise ValueError(f"length {length} does not fit into {len(words)} words")
    return [
        bool((words[i // BV64_BITS] >> (BV64_BITS - 1 - i % BV64_BITS)) & 1)
        for i in range(length)
    ]