"""Analytical option-pricing models."""

from .black_scholes import bs_d1_d2, bs_price

__all__ = ["bs_d1_d2", "bs_price"]
