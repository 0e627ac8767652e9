from __future__ import annotations
from typing import List

from .models import CostModel, DEFAULT_COSTS


class EditDistance:
    """
    Weighted Damerau-style edit distance.

    The DP matrix is kept between calls and only grown, so one instance can
    score every candidate of a single suggestion pass without reallocating.
    Not thread-safe.
    """

    def __init__(self, costs: CostModel = DEFAULT_COSTS) -> None:
        self.costs = costs
        self._matrix: List[List[int]] = []

    def _grow(self, rows: int, cols: int) -> List[List[int]]:
        m = self._matrix
        if len(m) < rows or (m and len(m[0]) < cols):
            width = max(cols, len(m[0]) if m else 0)
            height = max(rows, len(m))
            m = [[0] * width for _ in range(height)]
            self._matrix = m
        return m

    def __call__(self, a: str, b: str) -> int:
        """Cost of turning `a` into `b`."""
        c = self.costs
        rows, cols = len(a) + 1, len(b) + 1
        m = self._grow(rows, cols)

        for i in range(rows):
            m[i][0] = i * c.insertion
        for j in range(cols):
            m[0][j] = j * c.deletion

        for i in range(1, rows):
            ai = a[i - 1]
            for j in range(1, cols):
                bj = b[j - 1]
                if ai == bj:
                    m[i][j] = m[i - 1][j - 1]
                    continue
                best = c.substitution + m[i - 1][j - 1]
                if i > 1 and j > 1 and ai == b[j - 2] and a[i - 2] == bj:
                    best = min(best, c.swap + m[i - 2][j - 2])
                best = min(best, c.deletion + m[i][j - 1], c.insertion + m[i - 1][j])
                if ai.lower() == bj.lower():
                    best = min(best, c.case_change + m[i - 1][j - 1])
                m[i][j] = best

        return m[rows - 1][cols - 1]


def distance(a: str, b: str, costs: CostModel = DEFAULT_COSTS) -> int:
    return EditDistance(costs)(a, b)
