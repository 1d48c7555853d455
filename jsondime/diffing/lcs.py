# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..utils import json_equal

__all__ = ["lcs", "llcs_grid"]


def llcs_grid(A, B, compare=json_equal):
    "Compute grid R[x][y] == llcs(A[:x], B[:y])."
    N, M = len(A), len(B)
    R = [[0]*(M+1) for i in range(N+1)]
    for x in range(1, N+1):
        a = A[x-1]
        for y in range(1, M+1):
            if compare(a, B[y-1]):
                R[x][y] = R[x-1][y-1] + 1
            else:
                R[x][y] = max(R[x-1][y], R[x][y-1])
    return R


def lcs(A, B, compare=json_equal):
    """Compute a longest common subsequence of A and B.

    Returns the list of index pairs (i, j) with compare(A[i], B[j]),
    strictly increasing in both i and j.

    Uses the O(MN) dynamic programming table. When walking back
    from the end, dropping an item from A is preferred over dropping
    one from B, which is preferred over taking a match.
    """
    R = llcs_grid(A, B, compare)
    pairs = []
    x = len(A)
    y = len(B)
    while x > 0 and y > 0:
        if R[x][y] == R[x-1][y]:
            x -= 1
        elif R[x][y] == R[x][y-1]:
            y -= 1
        else:
            assert compare(A[x-1], B[y-1]), 'lcs table is inconsistent'
            x -= 1
            y -= 1
            pairs.append((x, y))
    pairs.reverse()
    return pairs
