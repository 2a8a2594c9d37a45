"""Binomial lattice pricing of European and American options."""

from .errors import DegenerateModelError, InvalidParameterError, LatticeError
from .lattice import LatticeModel, TriangularLattice, build_lattice_model
from .options import OptionStyle, chooser_lattice, price_option

__all__ = [
    "LatticeError",
    "InvalidParameterError",
    "DegenerateModelError",
    "TriangularLattice",
    "LatticeModel",
    "build_lattice_model",
    "OptionStyle",
    "price_option",
    "chooser_lattice",
]
