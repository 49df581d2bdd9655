"""Command-line entry point: build a wavelet tree or matrix from a file."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from fractions import Fraction
from time import perf_counter
import re

from distwt.bsort import construct_bsort, construct_bsort_packed
from distwt.dsplit import construct_dsplit, construct_wm_dsplit
from distwt.histogram import Histogram
from distwt.levelwise import construct_dynbsort, construct_sort, partition
from distwt.matrix import (
    DummyHistogram,
    construct_concat,
    construct_concat_effective,
    construct_concat_global,
)
from distwt.nodebased import construct_dd, construct_recursive, construct_wm_dd
from distwt.result import Result, Time
from distwt.wavelet import WaveletMatrixBase, WaveletTreeBase

SUPPORTED_WIDTHS = (1, 2, 4, 5)
INPUT_ONLY = "input"

_UNIT_PREFIXES = "kmgtpe"
_BYTES_RE = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([kmgtpe]?)(i?)b?\s*", re.IGNORECASE)


@dataclass(frozen=True)
class _Algorithm:
    build: Callable
    distributed: bool
    matrix: bool


ALGORITHMS: dict[str, _Algorithm] = {
    "mpi-bsort": _Algorithm(construct_bsort, True, False),
    "mpi-dynbsort": _Algorithm(construct_dynbsort, True, False),
    "mpi-dd": _Algorithm(construct_dd, True, False),
    "mpi-dsplit": _Algorithm(construct_dsplit, True, False),
    "mpi-wm-concat": _Algorithm(construct_concat, True, True),
    "mpi-wm-dd": _Algorithm(construct_wm_dd, True, True),
    "mpi-wm-dsplit": _Algorithm(construct_wm_dsplit, True, True),
    "thrill-bsort": _Algorithm(construct_bsort_packed, False, False),
    "thrill-sort": _Algorithm(construct_sort, False, False),
    "thrill-dd": _Algorithm(construct_recursive, False, False),
    "thrill-wm-concat": _Algorithm(construct_concat_global, False, True),
}


def parse_bytes(text: str) -> int:
    """Parse a byte count with an optional SI (``k``) or IEC (``Ki``) unit."""
    match = _BYTES_RE.fullmatch(text)
    if not match:
        raise ValueError(f"invalid byte size: {text!r}")
    number, unit, iec = match.groups()
    if iec and not unit:
        raise ValueError(f"invalid byte size: {text!r}")
    base = 1024 if iec else 1000
    power = _UNIT_PREFIXES.index(unit.lower()) + 1 if unit else 0
    return int(Fraction(number) * base**power)


def read_symbols(filename: str, width: int = 1, prefix: int | None = None) -> list[int]:
    """Read little-endian symbols of ``width`` bytes from at most ``prefix`` bytes."""
    if width not in SUPPORTED_WIDTHS:
        raise ValueError(f"symbol width of {width} not supported")
    if prefix is not None and prefix < 0:
        raise ValueError(f"prefix must not be negative, got {prefix}")
    with open(filename, "rb") as f:
        data = f.read() if prefix is None else f.read(prefix)
    usable = len(data) - len(data) % width
    view = memoryview(data)[:usable]
    return [
        int.from_bytes(view[start:start + width], "little")
        for start in range(0, usable, width)
    ]


class _Stopwatch:
    def __init__(self) -> None:
        self._last = perf_counter()

    def lap(self) -> float:
        now = perf_counter()
        elapsed, self._last = now - self._last, now
        return elapsed


def run(
    algorithm: str,
    filename: str,
    prefix: int | None = None,
    width: int = 1,
    effective: bool = False,
    output: str = "",
    workers: int = 1,
) -> Result:
    """Build the structure of ``algorithm`` for a file and return run statistics.

    With ``output`` set, the histogram, the level bit vectors and (for
    matrices) the Z values are written next to that base name.
    """
    if algorithm != INPUT_ONLY and algorithm not in ALGORITHMS:
        raise ValueError(f"unknown algorithm: {algorithm!r}")
    if workers < 1:
        raise ValueError(f"number of workers must be positive, got {workers}")

    timing = Time()
    watch = _Stopwatch()
    symbols = read_symbols(filename, width, prefix)
    timing.input = watch.lap()
    size = len(symbols) * width

    if algorithm == INPUT_ONLY:
        sum(1 for _ in symbols)
        timing.construct = watch.lap()
        return Result(
            algo=algorithm, workers_per_node=workers, input_name=filename,
            size=size, bytes_per_symbol=width, time=timing,
        )

    spec = ALGORITHMS[algorithm]
    if spec.distributed:
        source = partition(symbols, workers)
    else:
        source = symbols

    if effective and algorithm == "mpi-wm-concat":
        hist = DummyHistogram(max(symbols, default=0))
        timing.hist = watch.lap()
        structure = construct_concat_effective(source)
    else:
        hist = Histogram.from_symbols(symbols)
        timing.hist = watch.lap()
        structure = spec.build(source, hist)
    timing.construct = watch.lap()

    if output:
        hist.save(f"{output}.{WaveletTreeBase.histogram_extension()}", sym_width=width)
        if spec.matrix:
            structure.save_z(f"{output}.{WaveletMatrixBase.z_extension()}")
        structure.save(output)

    return Result(
        algo=algorithm,
        workers_per_node=workers,
        input_name=filename,
        size=size,
        bytes_per_symbol=width,
        alphabet=structure.sigma,
        time=timing,
    )


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="distwt", description="Construct wavelet trees and wavelet matrices."
    )
    parser.add_argument("file", help="The input file.")
    parser.add_argument(
        "-a", "--algorithm", default="mpi-dd",
        choices=sorted([*ALGORITHMS, INPUT_ONLY]), help="Construction algorithm.",
    )
    parser.add_argument("-o", "--output", default="", help="Name of output file.")
    parser.add_argument(
        "-p", "--prefix", type=parse_bytes, default=None,
        help="Only process prefix of input file.",
    )
    parser.add_argument(
        "-w", "--width", type=parse_bytes, default=1,
        help="Number of bytes per input symbol.",
    )
    parser.add_argument(
        "-e", "--effective", action="store_true",
        help="Input is already an effective transform (skip histogram computation).",
    )
    parser.add_argument(
        "-n", "--workers", type=int, default=1, help="Number of simulated workers."
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return -1

    if args.width not in SUPPORTED_WIDTHS:
        print(f"symbol width of {args.width} not supported")
        return -2

    try:
        result = run(
            args.algorithm, args.file, args.prefix, args.width,
            args.effective, args.output, args.workers,
        )
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(result.readable())
    print(result.sqlplot())
    return 0


if __name__ == "__main__":
    sys.exit(main())