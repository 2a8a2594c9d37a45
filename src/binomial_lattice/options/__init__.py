"""Option styles, lattice pricing, chooser composition, and engines."""

from .chooser import chooser_lattice
from .engines import BinomialLatticePricer, BlackScholesPricer, PriceModel
from .models import bs_d1_d2, bs_price
from .pricing import intrinsic_value, price_option, price_style
from .types import (
    ALL_STYLES,
    MarketState,
    OptionSpec,
    OptionStyle,
    OptionStyleInput,
    OptionType,
    OptionTypeInput,
    coerce_option_styles,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "OptionStyle",
    "OptionStyleInput",
    "ALL_STYLES",
    "OptionSpec",
    "MarketState",
    "coerce_option_styles",
    "normalize_option_type",
    "intrinsic_value",
    "price_style",
    "price_option",
    "chooser_lattice",
    "PriceModel",
    "BinomialLatticePricer",
    "BlackScholesPricer",
    "bs_d1_d2",
    "bs_price",
]
