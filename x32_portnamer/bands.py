from bisect import bisect_left
from collections import namedtuple

Band = namedtuple("Band", "upper, kind, base")


class BandTable:
    """Classifies numeric codes into categories by inclusive upper bound.

    Rows must be given in ascending order of their upper bound. A code
    belongs to the first row whose upper bound is >= the code, provided
    the code is not below that row's base.
    """

    def __init__(self, rows):
        self._rows = [Band(*row) for row in rows]
        self._uppers = [row.upper for row in self._rows]
        if self._uppers != sorted(self._uppers):
            raise ValueError("Band rows must be sorted by upper bound")
        for row in self._rows:
            if row.base > row.upper:
                raise ValueError(f"Band {row.kind} starts after its upper bound")

    def classify(self, code):
        """Return (kind, offset from the band base) or None"""
        if code is None:
            return None
        idx = bisect_left(self._uppers, code)
        if idx == len(self._rows):
            return None
        row = self._rows[idx]
        if code < row.base:
            return None
        return row.kind, code - row.base
