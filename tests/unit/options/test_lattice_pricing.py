import numpy as np
import pytest

from binomial_lattice import InvalidParameterError, build_lattice_model
from binomial_lattice.options import (
    ALL_STYLES,
    OptionStyle,
    bs_price,
    price_option,
)


@pytest.fixture
def model():
    return build_lattice_model(r=0.02, b=0.01, n=15, time=0.25, sigma=0.3)


def _parity_gap(model, spot, strike, horizon):
    return model.discount**horizon * (spot * model.carry_growth**horizon - strike)


def test_fifteen_period_european_pair(model):
    out = price_option(
        model,
        100.0,
        100.0,
        styles={OptionStyle.EUROPEAN_CALL, OptionStyle.EUROPEAN_PUT},
    )

    assert list(out) == [OptionStyle.EUROPEAN_CALL, OptionStyle.EUROPEAN_PUT]
    call = out[OptionStyle.EUROPEAN_CALL]
    put = out[OptionStyle.EUROPEAN_PUT]
    assert call.size == 16
    assert put.to_array().shape == (16, 16)
    assert call.root > 0
    assert put.root > 0
    assert call.root - put.root == pytest.approx(
        _parity_gap(model, 100.0, 100.0, 15), abs=1e-9
    )


def test_default_styles_price_all_four_in_canonical_order(model):
    out = price_option(model, 100.0, 95.0)

    assert tuple(out) == ALL_STYLES


@pytest.mark.parametrize("strike", [70.0, 100.0, 140.0])
@pytest.mark.parametrize("horizon", [1, 7, 15])
def test_put_call_parity_without_dividends(strike, horizon):
    model = build_lattice_model(r=0.05, b=0.0, n=15, time=1.0, sigma=0.25)

    out = price_option(model, 100.0, strike, horizon=horizon, styles=["ce", "pe"])

    gap = out[OptionStyle.EUROPEAN_CALL].root - out[OptionStyle.EUROPEAN_PUT].root
    assert gap == pytest.approx(100.0 - strike * model.discount**horizon, abs=1e-9)


def test_terminal_column_holds_intrinsic_value(model):
    out = price_option(model, 100.0, 100.0, styles=["ce", "pa"])

    prices = 100.0 * model.stock_rates.column(15)
    np.testing.assert_allclose(
        out[OptionStyle.EUROPEAN_CALL].column(15), np.maximum(prices - 100.0, 0.0)
    )
    np.testing.assert_allclose(
        out[OptionStyle.AMERICAN_PUT].column(15), np.maximum(100.0 - prices, 0.0)
    )


def test_american_dominates_european_at_every_node(model):
    out = price_option(model, 90.0, 100.0)

    for european, american in (
        (OptionStyle.EUROPEAN_CALL, OptionStyle.AMERICAN_CALL),
        (OptionStyle.EUROPEAN_PUT, OptionStyle.AMERICAN_PUT),
    ):
        assert np.all(out[american].values >= out[european].values - 1e-12)


def test_american_call_without_carry_matches_european():
    model = build_lattice_model(r=0.03, b=0.0, n=50, time=0.5, sigma=0.2)

    out = price_option(model, 103.0, 100.0, styles=["ce", "ca"])

    assert out[OptionStyle.AMERICAN_CALL].root == pytest.approx(
        out[OptionStyle.EUROPEAN_CALL].root, rel=1e-12
    )


def test_deep_in_the_money_american_put_exercises_early():
    model = build_lattice_model(r=0.08, b=0.0, n=100, time=1.0, sigma=0.2)

    out = price_option(model, 70.0, 100.0, styles=["pe", "pa"])
    american = out[OptionStyle.AMERICAN_PUT]

    assert american.root > out[OptionStyle.EUROPEAN_PUT].root
    # immediate exercise is optimal at the root
    assert american.root == pytest.approx(30.0)


def test_american_node_uses_discounted_continuation():
    model = build_lattice_model(r=0.05, b=0.0, n=3, time=1.0, sigma=0.3)
    spot, strike = 100.0, 110.0

    lattice = price_option(model, spot, strike, styles=["pa"])[OptionStyle.AMERICAN_PUT]

    for j in range(3):
        for i in range(j + 1):
            cont = model.discount * (
                model.q * lattice[i, j + 1] + model.q_inv * lattice[i + 1, j + 1]
            )
            intrinsic = max(strike - spot * model.stock_rates[i, j], 0.0)
            assert lattice[i, j] == pytest.approx(max(intrinsic, cont), rel=1e-14)


def test_zero_horizon_returns_immediate_payoff(model):
    out = price_option(model, 110.0, 100.0, horizon=0)

    for style, lattice in out.items():
        assert lattice.size == 1
    assert out[OptionStyle.EUROPEAN_CALL].root == pytest.approx(10.0)
    assert out[OptionStyle.AMERICAN_CALL].root == pytest.approx(10.0)
    assert out[OptionStyle.EUROPEAN_PUT].root == 0.0
    assert out[OptionStyle.AMERICAN_PUT].root == 0.0


def test_shorter_horizon_matches_model_with_fewer_periods(model):
    short = build_lattice_model(r=0.02, b=0.01, n=10, time=0.25 * 10 / 15, sigma=0.3)

    via_horizon = price_option(model, 100.0, 105.0, horizon=10)
    direct = price_option(short, 100.0, 105.0)

    for style in ALL_STYLES:
        assert via_horizon[style].size == 11
        assert via_horizon[style].root == pytest.approx(direct[style].root, rel=1e-10)


@pytest.mark.parametrize("option_type", ["ce", "pe"])
def test_european_converges_to_black_scholes(option_type):
    spot, strike, time, sigma, r, b = 102.0, 100.0, 45 / 365.0, 0.25, 0.03, 0.01
    style = OptionStyle.from_label(option_type)
    bs = bs_price(
        S=spot, K=strike, T=time, sigma=sigma, r=r, q=b, option_type=style.option_type
    )

    errors = []
    for n in (50, 200, 800):
        model = build_lattice_model(r=r, b=b, n=n, time=time, sigma=sigma)
        root = price_option(model, spot, strike, styles=[style])[style].root
        errors.append(abs(root - bs))
        assert errors[-1] <= 2.0 / np.sqrt(n)

    assert errors[-1] < 1e-2


def test_horizon_beyond_model_periods_raises(model):
    with pytest.raises(InvalidParameterError, match="cannot exceed"):
        price_option(model, 100.0, 100.0, horizon=16)


@pytest.mark.parametrize("horizon", [-1, 2.5, True])
def test_non_integer_or_negative_horizon_raises(model, horizon):
    with pytest.raises(InvalidParameterError):
        price_option(model, 100.0, 100.0, horizon=horizon)


@pytest.mark.parametrize("styles", [[], set(), ["ce", "xx"], "american"])
def test_empty_or_unknown_styles_raise(model, styles):
    with pytest.raises(InvalidParameterError):
        price_option(model, 100.0, 100.0, styles=styles)


def test_non_positive_spot_is_priced_without_special_casing(model):
    out = price_option(model, 0.0, 100.0, styles=["ce", "pe"])

    assert out[OptionStyle.EUROPEAN_CALL].root == 0.0
    assert out[OptionStyle.EUROPEAN_PUT].root == pytest.approx(
        100.0 * model.discount**15
    )


def test_pricing_does_not_touch_model_lattices(model):
    before = model.stock_rates.values.copy()

    price_option(model, 100.0, 100.0)

    np.testing.assert_array_equal(model.stock_rates.values, before)
