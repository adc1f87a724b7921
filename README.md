# cachelab

A small cache-simulation toolkit:

- a cache simulator with FIFO replacement, either set-associative
  (`CacheSim`) or fully associative (`FullyAssociativeCacheSim`), that
  counts accesses, misses, bytes moved and writebacks;
- plain and cache-friendlier versions of matrix transpose and matrix
  multiply;
- testbenches that fill matrices with a deterministic hash and write the
  results as text, with a `cachelab-bench` command.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Simulating a cache

The module `cachelab.cache` holds the simulator.

A cache is described by a `sets:ways:blocksize` string, parsed by
`parse_config`. `sets` and `blocksize` must be powers of two, `blocksize`
must be at least 8 and `ways` at least 1; anything else raises
`CacheConfigError` (a `ValueError`). `construct(config, name)` builds a
`FullyAssociativeCacheSim` when there is a single set with more than four
ways, and a `CacheSim` otherwise.

```python
import sys
from cachelab.cache import construct

l2 = construct("256:8:64", "L2$")
l1 = construct("64:4:64", "D$")
l1.miss_handler = l2

l1.access(0x1000, 8, store=False)
l1.access(0x1008, 8, store=True)

print(l1.miss_rate())
l1.print_stats(sys.stdout)
```

- The cache is write-back and write-allocate. A miss fetches the line from
  the `miss_handler` (if one is set), and a dirty victim is written back to
  it and counted in `writebacks`.
- Setting `log = True` on a cache prints each miss to standard error as
  `<name> read miss 0x<addr>` or `<name> write miss 0x<addr>`.
- `clean_invalidate(addr, nbytes, clean, inval)` cleans (counting a
  writeback for each dirty line) and/or invalidates every line covering the
  byte range, then forwards the request to the miss handler.
- `stats()` returns the counters as a dictionary; `miss_rate()` returns the
  miss percentage, or NaN when nothing has been accessed.
- `print_stats(stream)` writes one line per counter followed by the miss
  rate to three decimals; with no stream it writes to standard output.

`CacheSim(sets, ways, linesz, name)` and
`FullyAssociativeCacheSim(ways, linesz, name)` can also be built directly.
The module also provides `Lfsr`, a 32-bit linear feedback shift register
whose `next()` returns the next register value.

## Matrix kernels

`cachelab.matrix` works on matrices given as lists of rows.

```python
from cachelab.matrix import hash_32, transpose, blocked_transpose, multiply, reordered_multiply

m = [[hash_32(r * 4 + c) for c in range(4)] for r in range(4)]
assert transpose(m) == blocked_transpose(m, 2)
assert multiply(m, m) == reordered_multiply(m, m)
```

- `hash_32(val)` maps an integer to the range 0..1023.
- `blocked_transpose(src, block=8)` visits the matrix in square tiles.
- `multiply` computes one dot product per cell; `reordered_multiply`
  accumulates each output row while streaming through the rows of the
  second matrix. Both wrap results to 32-bit signed integers.
- Ragged matrices and mismatched shapes raise `ValueError`.

## Testbenches

`cachelab.testbench` builds hashed input matrices (`hashed_matrix`), runs
the kernels (`transpose_bench`, defaulting to a 1000x1000 matrix, and
`multiply_bench`, defaulting to 100x100 by 100x100) and formats a result as
rows of space-terminated integers (`format_matrix`).

From the command line:

```
cachelab-bench transpose [--size N] [--improved] [OUTPUT]
cachelab-bench multiply [--rows R] [--inner K] [--cols C] [--improved] [OUTPUT]
```

`--improved` selects the blocked transpose or the reordered multiply. When
`OUTPUT` is given, the result is written to that file; otherwise nothing is
printed.

## What it does not do

The simulator is driven only by calls to `access` and `clean_invalidate`.
It does not attach to a running program or instruction-set simulator to
trace its instruction fetches, loads and stores, and the benchmarks do not
feed their memory accesses through the cache or measure time or cycles.