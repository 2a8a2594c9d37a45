"""Two-leaf backward induction shared by the futures lattice and option pricing."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from binomial_lattice.lattice.triangular import (
    TriangularLattice,
    column_slice,
    triangular_count,
)

# Receives the column index and its continuation values; returns node values.
ColumnOverride = Callable[[int, np.ndarray], np.ndarray]


def backward_induct(
    terminal: np.ndarray,
    q: float,
    *,
    scalar: float = 1.0,
    override: ColumnOverride | None = None,
) -> TriangularLattice:
    """Fill a triangular lattice backward from its terminal column.

    Each node takes the weighted value of its two successors::

        value[i, j] = scalar * (q * value[i, j+1] + (1 - q) * value[i+1, j+1])

    Args:
        terminal: Values of the last column, ordered by down-move count.
            A lattice spanning `m` steps needs `m + 1` terminal values.
        q: Risk-neutral probability of an up-move.
        scalar: Per-step factor applied to the expectation. `1.0` gives an
            undiscounted (forward) lattice, `exp(-r*dt)` a discounted one.
        override: Optional hook applied to every induced column, e.g. the
            early-exercise comparison for American payoffs. It is not
            applied to the terminal column.

    Returns:
        Read-only lattice whose column `m` equals `terminal`.
    """
    leaf = np.asarray(terminal, dtype=float).ravel()
    if leaf.size < 1:
        raise ValueError("terminal column must hold at least one value")

    size = leaf.size
    q_inv = 1.0 - q
    flat = np.empty(triangular_count(size), dtype=float)
    flat[column_slice(size - 1)] = leaf

    for j in range(size - 2, -1, -1):
        nxt = flat[column_slice(j + 1)]
        cont = scalar * (q * nxt[:-1] + q_inv * nxt[1:])
        if override is not None:
            cont = override(j, cont)
        flat[column_slice(j)] = cont

    return TriangularLattice(flat)
