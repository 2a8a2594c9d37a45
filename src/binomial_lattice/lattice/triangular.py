"""Flat storage for upper-triangular recombining lattices.

A lattice with ``size`` columns holds one cell per node ``(i, j)`` with
``0 <= i <= j < size``, where ``j`` is the number of elapsed steps and ``i``
the number of down-moves. Cells are stored column by column, so column ``j``
occupies the contiguous slice ``[j*(j+1)/2, j*(j+1)/2 + j + 1)``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd


def triangular_count(size: int) -> int:
    """Number of cells in a triangular lattice with `size` columns."""
    return size * (size + 1) // 2


def column_slice(j: int) -> slice:
    """Flat-storage slice for column `j`."""
    start = j * (j + 1) // 2
    return slice(start, start + j + 1)


class TriangularLattice:
    """Read-only triangular lattice indexed by `(down_moves, step)`."""

    __slots__ = ("_values", "_size")

    def __init__(self, values: np.ndarray | Sequence[float]) -> None:
        flat = np.array(values, dtype=float).ravel()
        size = (math.isqrt(8 * flat.size + 1) - 1) // 2
        if size < 1 or triangular_count(size) != flat.size:
            raise ValueError(
                f"{flat.size} values do not fill a triangular lattice"
            )
        flat.flags.writeable = False
        self._values = flat
        self._size = size

    @classmethod
    def from_columns(cls, columns: Iterable[Iterable[float]]) -> TriangularLattice:
        """Build a lattice from columns `0..m`, column `j` holding `j+1` cells."""
        parts = []
        for j, col in enumerate(columns):
            arr = np.asarray(col, dtype=float)
            if arr.shape != (j + 1,):
                raise ValueError(
                    f"column {j} must hold {j + 1} values, got shape {arr.shape}"
                )
            parts.append(arr)
        if not parts:
            raise ValueError("at least one column is required")
        return cls(np.concatenate(parts))

    @property
    def size(self) -> int:
        """Number of columns (steps + 1)."""
        return self._size

    @property
    def n(self) -> int:
        """Number of steps spanned by the lattice."""
        return self._size - 1

    @property
    def root(self) -> float:
        return float(self._values[0])

    @property
    def values(self) -> np.ndarray:
        """Flat read-only storage in column order."""
        return self._values

    def _check(self, i: int, j: int) -> None:
        if not (0 <= j < self._size and 0 <= i <= j):
            raise IndexError(
                f"cell ({i}, {j}) is outside a lattice with {self._size} columns"
            )

    def __getitem__(self, key: tuple[int, int]) -> float:
        i, j = key
        self._check(i, j)
        return float(self._values[j * (j + 1) // 2 + i])

    def column(self, j: int) -> np.ndarray:
        """Read-only view of column `j` (rows `0..j`)."""
        self._check(0, j)
        return self._values[column_slice(j)]

    def scaled(self, factor: float) -> TriangularLattice:
        """Return a new lattice with every cell multiplied by `factor`."""
        return TriangularLattice(self._values * factor)

    def to_array(self, fill: float = np.nan) -> np.ndarray:
        """Square matrix view: rows are down-moves, columns are steps."""
        out = np.full((self._size, self._size), fill, dtype=float)
        for j in range(self._size):
            out[: j + 1, j] = self._values[column_slice(j)]
        return out

    def to_frame(self) -> pd.DataFrame:
        frame = pd.DataFrame(self.to_array())
        frame.index.name = "down_moves"
        frame.columns.name = "step"
        return frame

    def __len__(self) -> int:
        return self._values.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriangularLattice):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TriangularLattice(size={self._size}, root={self.root:.6g})"
