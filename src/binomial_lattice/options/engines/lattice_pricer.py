"""Binomial-lattice pricing engine for vanilla options."""

from __future__ import annotations

from dataclasses import dataclass

from binomial_lattice.errors import InvalidParameterError
from binomial_lattice.lattice.model import build_lattice_model
from binomial_lattice.options.pricing import price_option
from binomial_lattice.options.types import MarketState, OptionSpec, OptionStyle


@dataclass(frozen=True)
class BinomialLatticePricer:
    """Lattice pricer supporting American and European exercise.

    Builds a fresh `steps`-period model per call, so `price(...)` only suits
    one-off valuations; reuse `build_lattice_model` directly to price many
    strikes or horizons on one lattice.
    """

    steps: int = 200
    american: bool = True

    def __post_init__(self) -> None:
        if self.steps < 1:
            raise InvalidParameterError("steps must be >= 1")

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        model = build_lattice_model(
            r=state.rate,
            b=state.dividend_yield,
            n=self.steps,
            time=spec.time_to_expiry,
            sigma=state.volatility,
        )
        style = OptionStyle.from_parts(spec.option_type, self.american)
        lattices = price_option(model, state.spot, spec.strike, styles=[style])
        return lattices[style].root
