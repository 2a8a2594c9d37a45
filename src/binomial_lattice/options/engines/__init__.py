"""Pricing engines exposing a common `price(spec, state)` interface."""

from .base import PriceModel
from .bs_pricer import BlackScholesPricer
from .lattice_pricer import BinomialLatticePricer

__all__ = [
    "PriceModel",
    "BinomialLatticePricer",
    "BlackScholesPricer",
]
