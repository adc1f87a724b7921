"""Deterministic workloads for the transpose and multiply kernels."""

from __future__ import annotations

import argparse

from .matrix import blocked_transpose, hash_32, multiply, reordered_multiply, transpose


def hashed_matrix(rows: int, cols: int):
    """Build a ``rows`` x ``cols`` matrix whose cells are hashes of their index."""
    return [[hash_32(i * cols + j) for j in range(cols)] for i in range(rows)]


def format_matrix(matrix) -> str:
    """Render a matrix as space-terminated values, one row per line."""
    return "".join("".join(f"{value} " for value in row) + "\n" for row in matrix)


def transpose_bench(size: int = 1000, improved: bool = False):
    """Transpose a hashed ``size`` x ``size`` matrix."""
    src = hashed_matrix(size, size)
    return blocked_transpose(src, 8) if improved else transpose(src)


def multiply_bench(rows: int = 100, inner: int = 100, cols: int = 100, improved: bool = False):
    """Multiply two hashed matrices of shapes rows x inner and inner x cols."""
    a = hashed_matrix(rows, inner)
    b = hashed_matrix(inner, cols)
    return reordered_multiply(a, b) if improved else multiply(a, b)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cachelab", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    trans = commands.add_parser("transpose", help="transpose a hashed square matrix")
    trans.add_argument("--size", type=int, default=1000)
    trans.add_argument("--improved", action="store_true")
    trans.add_argument("output", nargs="?")

    mult = commands.add_parser("multiply", help="multiply two hashed matrices")
    mult.add_argument("--rows", type=int, default=100)
    mult.add_argument("--inner", type=int, default=100)
    mult.add_argument("--cols", type=int, default=100)
    mult.add_argument("--improved", action="store_true")
    mult.add_argument("output", nargs="?")
    return parser


def main(argv=None) -> int:
    """Run a workload and optionally write its result to a file."""
    args = _parser().parse_args(argv)
    if args.command == "transpose":
        result = transpose_bench(args.size, args.improved)
    else:
        result = multiply_bench(args.rows, args.inner, args.cols, args.improved)
    if args.output:
        with open(args.output, "w") as handle:
            handle.write(format_matrix(result))
    return 0