import pytest

from cachelab.matrix import (
    blocked_transpose,
    hash_32,
    multiply,
    reordered_multiply,
    transpose,
)


def _grid(rows, cols):
    return [[hash_32(r * cols + c) for c in range(cols)] for r in range(rows)]


def test_hash_known_values():
    assert hash_32(0) == 0
    assert hash_32(1) == 391


def test_hash_range_and_wrap():
    for value in range(-500, 500):
        h = hash_32(value)
        assert 0 <= h < 1024
        assert h == hash_32(value + 2**32)


def test_transpose_swaps_indices():
    src = _grid(3, 5)
    dst = transpose(src)
    assert len(dst) == 5 and len(dst[0]) == 3
    assert all(dst[c][r] == src[r][c] for r in range(3) for c in range(5))


def test_transpose_twice_is_identity():
    src = _grid(7, 7)
    assert transpose(transpose(src)) == src


@pytest.mark.parametrize("block", [1, 3, 8, 20])
@pytest.mark.parametrize("rows, cols", [(10, 10), (9, 13), (1, 4)])
def test_blocked_matches_plain(block, rows, cols):
    src = _grid(rows, cols)
    assert blocked_transpose(src, block) == transpose(src)


def test_blocked_rejects_bad_block():
    with pytest.raises(ValueError):
        blocked_transpose(_grid(2, 2), 0)


def test_transpose_rejects_ragged():
    with pytest.raises(ValueError):
        transpose([[1, 2], [3]])


def test_multiply_known_product():
    assert multiply([[1, 2], [3, 4]], [[5, 6], [7, 8]]) == [[19, 22], [43, 50]]


def test_multiply_by_identity():
    a = _grid(4, 4)
    identity = [[int(r == c) for c in range(4)] for r in range(4)]
    assert multiply(a, identity) == a
    assert reordered_multiply(identity, a) == a


@pytest.mark.parametrize("i, k, j", [(5, 5, 5), (3, 7, 2), (1, 1, 6)])
def test_reordered_matches_plain(i, k, j):
    a = _grid(i, k)
    b = _grid(k, j)
    result = reordered_multiply(a, b)
    assert result == multiply(a, b)
    assert len(result) == i and all(len(row) == j for row in result)


def test_multiply_wraps_to_int32():
    assert multiply([[2**31 - 1]], [[2]]) == [[-2]]
    assert reordered_multiply([[2**31 - 1]], [[2]]) == [[-2]]


def test_multiply_shape_mismatch():
    with pytest.raises(ValueError):
        multiply(_grid(2, 3), _grid(2, 3))
    with pytest.raises(ValueError):
        reordered_multiply(_grid(2, 3), _grid(2, 3))