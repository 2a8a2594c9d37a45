"""Backward-induction pricing of European and American options on a lattice."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Iterable

import numpy as np

from binomial_lattice.errors import InvalidParameterError
from binomial_lattice.lattice.induction import ColumnOverride, backward_induct
from binomial_lattice.lattice.model import LatticeModel
from binomial_lattice.lattice.triangular import TriangularLattice
from binomial_lattice.options.types import (
    ALL_STYLES,
    OptionStyle,
    OptionStyleInput,
    OptionType,
    coerce_option_styles,
)

logger = logging.getLogger(__name__)


def intrinsic_value(
    prices: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    """Immediate exercise value of a call or put at the given prices."""
    prices = np.asarray(prices, dtype=float)
    if option_type == OptionType.CALL:
        return np.maximum(prices - strike, 0.0)
    return np.maximum(strike - prices, 0.0)


def _resolve_horizon(model: LatticeModel, horizon: int | None) -> int:
    if horizon is None:
        return model.n
    if isinstance(horizon, bool) or not isinstance(horizon, numbers.Integral):
        raise InvalidParameterError(f"horizon must be an integer, got {horizon!r}")
    if horizon < 0:
        raise InvalidParameterError("horizon must be >= 0")
    if horizon > model.n:
        raise InvalidParameterError(
            f"horizon={horizon} cannot exceed the model period count n={model.n}"
        )
    return int(horizon)


def _early_exercise(
    model: LatticeModel, spot: float, strike: float, option_type: OptionType
) -> ColumnOverride:
    def _override(j: int, continuation: np.ndarray) -> np.ndarray:
        prices = spot * model.stock_rates.column(j)
        return np.maximum(intrinsic_value(prices, strike, option_type), continuation)

    return _override


def price_style(
    model: LatticeModel,
    spot: float,
    strike: float,
    style: OptionStyle,
    horizon: int,
) -> TriangularLattice:
    """Value lattice for one style over an already-validated horizon."""
    terminal_prices = spot * model.stock_rates.column(horizon)
    payoff = intrinsic_value(terminal_prices, strike, style.option_type)
    override = (
        _early_exercise(model, spot, strike, style.option_type)
        if style.is_american
        else None
    )
    return backward_induct(payoff, model.q, scalar=model.discount, override=override)


def price_option(
    model: LatticeModel,
    spot: float,
    strike: float,
    horizon: int | None = None,
    styles: OptionStyleInput | Iterable[OptionStyleInput] = ALL_STYLES,
) -> dict[OptionStyle, TriangularLattice]:
    """Price one or more option styles on a lattice model.

    Args:
        model: Lattice built by `build_lattice_model`.
        spot: Initial price of the underlying.
        strike: Strike price.
        horizon: Number of periods of the option. Defaults to `model.n`; a
            shorter horizon prices a shorter-dated option on the same model.
        styles: Styles to price, as `OptionStyle` members or labels
            (`'ce'`, `'pe'`, `'ca'`, `'pa'`).

    Returns:
        Mapping from style to its value lattice of size `horizon + 1`, in
        canonical style order. Each lattice's `root` is the option price.

    Raises:
        InvalidParameterError: If `horizon` is not in `[0, model.n]` or
            `styles` is empty or holds an unknown label.
    """
    resolved = coerce_option_styles(styles)
    steps = _resolve_horizon(model, horizon)
    logger.debug(
        "Pricing styles=%s spot=%s strike=%s horizon=%d",
        [style.value for style in resolved],
        spot,
        strike,
        steps,
    )

    out: dict[OptionStyle, TriangularLattice] = {}
    for style in resolved:
        out[style] = price_style(model, spot, strike, style, steps)
        logger.debug("%s price=%.6f", style.value, out[style].root)
    return out
