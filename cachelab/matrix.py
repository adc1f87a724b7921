"""Matrix kernels with straightforward and cache-friendlier loop orders."""

from __future__ import annotations

GOLDEN_RATIO_32 = 0x61C88647


def hash_32(val: int) -> int:
    """Multiplicative hash of a 32-bit integer into the range 0..1023."""
    return ((val * GOLDEN_RATIO_32) & 0xFFFFFFFF) >> 22 & 0x3FF


def _wrap32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _shape(matrix) -> tuple:
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    if any(len(row) != cols for row in matrix):
        raise ValueError("matrix rows differ in length")
    return rows, cols


def _product_shape(a, b) -> tuple:
    rows, inner = _shape(a)
    b_rows, cols = _shape(b)
    if rows and inner != b_rows:
        raise ValueError(f"cannot multiply {rows}x{inner} by {b_rows}x{cols}")
    return rows, inner, cols


def transpose(src):
    """Return the transpose of ``src``."""
    _shape(src)
    return [list(column) for column in zip(*src)]


def blocked_transpose(src, block: int = 8):
    """Return the transpose of ``src``, visiting it in ``block``-sized tiles."""
    if block < 1:
        raise ValueError("block size must be positive")
    rows, cols = _shape(src)
    dst = [[0] * rows for _ in range(cols)]
    for i in range(0, rows, block):
        for j in range(0, cols, block):
            for x in range(i, min(i + block, rows)):
                src_row = src[x]
                for y in range(j, min(j + block, cols)):
                    dst[y][x] = src_row[y]
    return dst


def multiply(a, b):
    """Matrix product with 32-bit signed wrap-around, one dot product per cell."""
    _product_shape(a, b)
    columns = list(zip(*b))
    return [
        [_wrap32(sum(x * y for x, y in zip(row, column))) for column in columns]
        for row in a
    ]


def reordered_multiply(a, b):
    """Matrix product accumulated row by row, streaming through ``b``."""
    _, _, cols = _product_shape(a, b)
    output = []
    for a_row in a:
        out_row = [0] * cols
        for a_val, b_row in zip(a_row, b):
            out_row = [acc + a_val * b_val for acc, b_val in zip(out_row, b_row)]
        output.append([_wrap32(value) for value in out_row])
    return output