# distwt

Construction of wavelet trees and wavelet matrices over binary input files.
Every construction computes the histogram of the input (`Histogram`), maps
the text to its effective alphabet (`EffectiveAlphabet`, symbol ranks
`0 .. sigma-1`) and then builds the bit vectors of the structure.

The distributed algorithms take the text as a list of equal, consecutive
parts (see `distwt.levelwise.partition`), one per simulated worker, and
reproduce how the workers exchange symbols between levels.

## Construction algorithms

| Function | Module | Input | Result |
| --- | --- | --- | --- |
| `construct_sort` | `distwt.levelwise` | whole text | `WaveletTreeLevelwise` |
| `construct_dynbsort` | `distwt.levelwise` | parts | `WaveletTreeLevelwise` |
| `construct_bsort` | `distwt.bsort` | parts | `WaveletTreeLevelwise` |
| `construct_bsort_packed` | `distwt.bsort` | whole text | `WaveletTreeLevelwise` |
| `construct_dd` | `distwt.nodebased` | parts | `WaveletTreeLevelwise` |
| `construct_recursive` | `distwt.nodebased` | whole text | `WaveletTreeLevelwise` |
| `construct_dsplit` | `distwt.dsplit` | parts | `WaveletTreeLevelwise` |
| `construct_concat` | `distwt.matrix` | parts | `WaveletMatrix` |
| `construct_concat_global` | `distwt.matrix` | whole text | `WaveletMatrix` |
| `construct_wm_dd` | `distwt.nodebased` | parts | `WaveletMatrix` |
| `construct_wm_dsplit` | `distwt.dsplit` | parts | `WaveletMatrix` |

`construct_concat_effective(parts)` builds a wavelet matrix from a text that
is already an effective transform; no histogram is computed and the alphabet
size is taken from the largest symbol (`DummyHistogram`).

Node-based trees (`WaveletTreeNodebased`) hold one bit vector per node and
are merged with `merge` (level-wise tree) or `merge_to_matrix` (wavelet
matrix). A sequential prefix-counting construction of whole trees or
subtrees is in `distwt.wt_sequential` (`wt_pc`, `wt_pc_full`).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
distwt [options] <file>
```

Options:

- `-a`, `--algorithm` — one of `mpi-bsort`, `mpi-dynbsort`, `mpi-dd`
  (default), `mpi-dsplit`, `mpi-wm-concat`, `mpi-wm-dd`, `mpi-wm-dsplit`,
  `thrill-bsort`, `thrill-sort`, `thrill-dd`, `thrill-wm-concat`, or `input`
  (only read the file and time it)
- `-o`, `--output` — base name of the output files
- `-p`, `--prefix` — only process this many bytes of the input (accepts
  units such as `64Ki` or `1M`)
- `-w`, `--width` — bytes per little-endian input symbol: 1, 2, 4 or 5
- `-e`, `--effective` — the input is already an effective transform (used by
  `mpi-wm-concat`)
- `-n`, `--workers` — number of simulated workers the input is split into

When an output name is given, the histogram is written to `<output>.hist`,
each level's bit vector to `<output>.lv_<k>` (an 8-byte bit count followed by
64-bit words), and for wavelet matrices the Z values to `<output>.z`.

After construction a summary sentence and a machine-readable `RESULT` line
are printed. The command exits with `-1` on invalid arguments, `-2` for an
unsupported symbol width and `1` if the file cannot be read or processed.

## Library use

```python
from distwt.histogram import Histogram
from distwt.levelwise import construct_sort, verify

text = list(b"mississippi")
hist = Histogram.from_symbols(text)
wt = construct_sort(text, hist)
verify(text, wt, hist)  # raises WaveletVerificationError on mismatch
```

Saved trees are loaded with `WaveletTreeLevelwise.load(hist, basename)` and
decoded back into the original symbols with `decode(hist)`; a histogram is
loaded with `Histogram.load(filename, sym_width)`. `WaveletMatrix.decode`
reconstructs the text of a wavelet matrix.

## What this package does not do

Workers are simulated inside a single Python process: nothing is run in
parallel or sent over a network, and the traffic and memory figures of the
`RESULT` line are reported as zero. There is no command for verifying saved
files and no loader for saved wavelet matrices; verification is available
through `distwt.levelwise.verify` in code.