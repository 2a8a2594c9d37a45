"""Black-Scholes pricing engine."""

from __future__ import annotations

from binomial_lattice.options.models.black_scholes import bs_price
from binomial_lattice.options.types import MarketState, OptionSpec


class BlackScholesPricer:
    """European reference pricer backed by the closed-form formula."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_price(
            S=state.spot,
            K=spec.strike,
            T=spec.time_to_expiry,
            sigma=state.volatility,
            r=state.rate,
            q=state.dividend_yield,
            option_type=spec.option_type,
        )
