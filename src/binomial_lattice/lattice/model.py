"""Binomial lattice model specified through Black-Scholes parameters."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np

from binomial_lattice.errors import DegenerateModelError, InvalidParameterError
from binomial_lattice.lattice.induction import backward_induct
from binomial_lattice.lattice.triangular import TriangularLattice

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class LatticeModel:
    """Per-step factors and unit-principal lattices for one parameter set.

    Rate lattices start from an initial value of one; multiply by a spot
    price (see `stock_prices`) to obtain price lattices.
    """

    r: float
    b: float
    n: int
    time: float
    sigma: float
    growth: float
    discount: float
    carry_growth: float
    u: float
    d: float
    q: float
    q_inv: float
    stock_rates: TriangularLattice
    futures_rates: TriangularLattice

    @property
    def dt(self) -> float:
        return self.time / self.n

    @property
    def futures_rate(self) -> float:
        """Model-implied futures rate at time 0."""
        return self.futures_rates.root

    def stock_prices(self, spot: float) -> TriangularLattice:
        return self.stock_rates.scaled(spot)

    def futures_prices(self, spot: float) -> TriangularLattice:
        return self.futures_rates.scaled(spot)

    def scalars(self) -> dict[str, float]:
        """Scalar inputs and derived factors as a plain mapping."""
        return {
            "r": self.r,
            "b": self.b,
            "n": self.n,
            "time": self.time,
            "sigma": self.sigma,
            "growth": self.growth,
            "discount": self.discount,
            "carry_growth": self.carry_growth,
            "u": self.u,
            "d": self.d,
            "q": self.q,
            "q_inv": self.q_inv,
            "futures_rate": self.futures_rate,
        }


def _require_finite(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return value


def _validate_inputs(
    r: float, b: float, n: int, time: float, sigma: float
) -> tuple[float, float, int, float, float]:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidParameterError(f"n must be an integer, got {n!r}")
    if n < 1:
        raise InvalidParameterError("n must be >= 1")

    r = _require_finite("r", r)
    b = _require_finite("b", b)
    time = _require_finite("time", time)
    sigma = _require_finite("sigma", sigma)
    if time <= 0:
        raise InvalidParameterError("time must be positive")
    if sigma <= 0:
        raise InvalidParameterError("sigma must be positive")
    return r, b, int(n), time, sigma


def stock_rate_lattice(u: float, n: int) -> TriangularLattice:
    """Unit stock lattice with `u**(j-i) * d**i` at node `(i, j)`.

    Uses `u**(j - 2i)`, equal since `d = 1/u`, so a cell stays finite
    whenever its value is representable.
    """
    with np.errstate(over="ignore"):
        return TriangularLattice.from_columns(
            u ** (j - 2.0 * np.arange(j + 1)) for j in range(n + 1)
        )


def _require_finite_lattice(name: str, lattice: TriangularLattice) -> None:
    if not np.isfinite(lattice.values).all():
        raise DegenerateModelError(
            f"{name} lattice overflows for these inputs; reduce sigma, time or n"
        )


def build_lattice_model(
    r: float,
    b: float,
    n: int,
    time: float,
    sigma: float,
) -> LatticeModel:
    """Build a recombining binomial model from continuous-time inputs.

    Args:
        r: Continuously-compounded risk-free rate.
        b: Continuous dividend yield (or carry rate) of the underlying.
        n: Number of periods.
        time: Time to maturity in years (0.5 = six months).
        sigma: Annualized volatility in decimals.

    Returns:
        Immutable `LatticeModel` holding the per-step factors, the unit stock
        lattice and the futures lattice derived from it.

    Raises:
        InvalidParameterError: If `n < 1`, `time <= 0`, `sigma <= 0`, or an
            input is not a finite number.
        DegenerateModelError: If `u == d` after rounding, a factor or lattice
            cell overflows, or the risk-neutral probability falls outside
            `[0, 1]`.
    """
    r, b, n, time, sigma = _validate_inputs(r, b, n, time, sigma)

    dt = time / n
    try:
        growth = math.exp(r * dt)
        discount = math.exp(-r * dt)
        carry_growth = math.exp((r - b) * dt)
        u = math.exp(sigma * math.sqrt(dt))
    except OverflowError as e:
        raise DegenerateModelError("lattice factors overflow for these inputs") from e
    d = 1.0 / u

    if not all(math.isfinite(x) for x in (growth, discount, carry_growth, u, d)):
        raise DegenerateModelError("lattice factors overflow for these inputs")
    if u - d == 0.0:
        raise DegenerateModelError(
            "up and down factors coincide; increase sigma or time/n"
        )

    # b == 0 reduces to (growth - d) / (u - d) since carry_growth == growth.
    q = (carry_growth - d) / (u - d)
    if not 0.0 <= q <= 1.0:
        raise DegenerateModelError(
            f"risk-neutral probability q={q:.6g} is outside [0, 1]; "
            "increase sigma or n, or check r and b"
        )
    q_inv = 1.0 - q

    stock_rates = stock_rate_lattice(u, n)
    _require_finite_lattice("stock", stock_rates)
    futures_rates = backward_induct(stock_rates.column(n), q)
    _require_finite_lattice("futures", futures_rates)

    logger.debug(
        "Built lattice n=%d dt=%.6g u=%.6g d=%.6g q=%.6g futures_rate=%.6g",
        n,
        dt,
        u,
        d,
        q,
        futures_rates.root,
    )

    return LatticeModel(
        r=r,
        b=b,
        n=n,
        time=time,
        sigma=sigma,
        growth=growth,
        discount=discount,
        carry_growth=carry_growth,
        u=u,
        d=d,
        q=q,
        q_inv=q_inv,
        stock_rates=stock_rates,
        futures_rates=futures_rates,
    )
