"""Chooser options composed from already-priced call and put lattices."""

from __future__ import annotations

import numbers

import numpy as np

from binomial_lattice.errors import InvalidParameterError
from binomial_lattice.lattice.induction import backward_induct
from binomial_lattice.lattice.model import LatticeModel
from binomial_lattice.lattice.triangular import TriangularLattice


def chooser_lattice(
    model: LatticeModel,
    call: TriangularLattice,
    put: TriangularLattice,
    choose_step: int,
) -> TriangularLattice:
    """Value a chooser that picks the better of a call and a put.

    At step `choose_step` the holder takes `max(call, put, 0)` at each node;
    that column is then discounted back to time 0 on the model's lattice.
    `call` and `put` are typically European lattices from `price_option`
    with the same spot and strike.
    """
    if isinstance(choose_step, bool) or not isinstance(choose_step, numbers.Integral):
        raise InvalidParameterError(
            f"choose_step must be an integer, got {choose_step!r}"
        )
    last = min(call.n, put.n)
    if not 0 <= choose_step <= last:
        raise InvalidParameterError(
            f"choose_step must be in [0, {last}], got {choose_step}"
        )

    payoff = np.maximum(
        np.maximum(call.column(choose_step), put.column(choose_step)), 0.0
    )
    return backward_induct(payoff, model.q, scalar=model.discount)
