"""Triangular lattice storage, backward induction, and model construction."""

from .induction import ColumnOverride, backward_induct
from .model import LatticeModel, build_lattice_model, stock_rate_lattice
from .triangular import TriangularLattice

__all__ = [
    "TriangularLattice",
    "ColumnOverride",
    "backward_induct",
    "LatticeModel",
    "build_lattice_model",
    "stock_rate_lattice",
]
