"""Shared option-pricing dataclasses, enums, and label parsing."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

from binomial_lattice.errors import InvalidParameterError


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (configs/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    if option_type in ("call", "C"):
        return OptionType.CALL
    if option_type in ("put", "P"):
        return OptionType.PUT
    raise InvalidParameterError(
        "option_type must be one of {'call', 'put', 'C', 'P'}"
    )


class OptionStyle(StrEnum):
    """Closed set of contracts priced on a lattice.

    Values are the short labels accepted in configs: `ce`, `pe`, `ca`, `pa`.
    """

    EUROPEAN_CALL = "ce"
    EUROPEAN_PUT = "pe"
    AMERICAN_CALL = "ca"
    AMERICAN_PUT = "pa"

    @property
    def option_type(self) -> OptionType:
        if self in (OptionStyle.EUROPEAN_CALL, OptionStyle.AMERICAN_CALL):
            return OptionType.CALL
        return OptionType.PUT

    @property
    def is_american(self) -> bool:
        return self in (OptionStyle.AMERICAN_CALL, OptionStyle.AMERICAN_PUT)

    @classmethod
    def from_label(cls, label: OptionStyle | str) -> OptionStyle:
        """Resolve a style member from its label or member name."""
        if isinstance(label, cls):
            return label
        if isinstance(label, str):
            key = label.strip()
            try:
                return cls(key.lower())
            except ValueError:
                pass
            try:
                return cls[key.upper()]
            except KeyError:
                pass
        valid = ", ".join(style.value for style in cls)
        raise InvalidParameterError(
            f"Unknown option style {label!r}; expected one or more of: {valid}"
        )

    @classmethod
    def from_parts(cls, option_type: OptionTypeInput, american: bool) -> OptionStyle:
        opt_type = normalize_option_type(option_type)
        if opt_type == OptionType.CALL:
            return cls.AMERICAN_CALL if american else cls.EUROPEAN_CALL
        return cls.AMERICAN_PUT if american else cls.EUROPEAN_PUT


ALL_STYLES: tuple[OptionStyle, ...] = tuple(OptionStyle)

OptionStyleInput: TypeAlias = OptionStyle | str


def coerce_option_styles(
    styles: OptionStyleInput | Iterable[OptionStyleInput],
) -> tuple[OptionStyle, ...]:
    """Resolve style labels into a de-duplicated tuple in canonical order.

    A bare string is treated as a single label.

    Raises:
        InvalidParameterError: If `styles` is empty or holds an unknown label.
    """
    if isinstance(styles, str):
        styles = [styles]
    requested = {OptionStyle.from_label(style) for style in styles}
    if not requested:
        raise InvalidParameterError(
            "styles must hold one or more of: ce, pe, ca, pa"
        )
    return tuple(style for style in ALL_STYLES if style in requested)


@dataclass(frozen=True)
class OptionSpec:
    """Contract terms required for pricing one vanilla option."""

    strike: float
    time_to_expiry: float
    option_type: OptionTypeInput


@dataclass(frozen=True)
class MarketState:
    """Market inputs used by pricing engines."""

    spot: float
    volatility: float
    rate: float = 0.0
    dividend_yield: float = 0.0
