"""Interface for option-pricing engines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from binomial_lattice.options.types import MarketState, OptionSpec


@runtime_checkable
class PriceModel(Protocol):
    """Minimum pricing capability shared by lattice and analytical engines."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        """Return option value for one contract."""
