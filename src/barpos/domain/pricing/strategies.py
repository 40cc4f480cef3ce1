"""Pluggable pricing strategies.

A strategy turns the lines of a cart or order into a ``PriceQuote``. The
register, the order lifecycle and the quote endpoint all price through the
strategy selected by configuration, so switching modes never touches the
callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Protocol

from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import PricingClass
from barpos.domain.pricing.tiers import DEFAULT_TIERS, TierTable


class PricingMode(str, Enum):
    FLAT_RATE = "flat-rate"
    CATEGORY_SPLIT = "category-split"
    POOLED_DISCOUNT = "pooled-discount"
    LINE_ITEM = "line-item"


@dataclass(frozen=True)
class PricingLine:
    menu_item_id: MenuItemId
    unit_price: int
    quantity: int
    pricing_class: PricingClass


@dataclass(frozen=True)
class PriceQuote:
    subtotal: int
    tax: int
    total: int

    def __post_init__(self) -> None:
        if self.subtotal < 0 or self.tax < 0:
            raise ValueError("quote amounts must be >= 0")
        if self.total != self.subtotal + self.tax:
            raise ValueError("total must equal subtotal + tax")


@dataclass(frozen=True)
class TaxRule:
    rate_bps: int

    def __post_init__(self) -> None:
        if self.rate_bps < 0:
            raise ValueError("rate_bps must be >= 0")

    def compute(self, subtotal: int) -> int:
        # half-up rounding to the nearest minor unit, integer-only
        if subtotal <= 0 or self.rate_bps == 0:
            return 0
        return (subtotal * self.rate_bps + 5_000) // 10_000


NO_TAX = TaxRule(rate_bps=0)


class PricingStrategy(Protocol):
    mode: PricingMode

    def quote(self, lines: Iterable[PricingLine]) -> PriceQuote: ...


def _countable(lines: Iterable[PricingLine]) -> list[PricingLine]:
    return [line for line in lines if line.quantity > 0]


def count_units(lines: Iterable[PricingLine], pricing_class: PricingClass | None = None) -> int:
    return sum(
        line.quantity
        for line in _countable(lines)
        if pricing_class is None or line.pricing_class == pricing_class
    )


def _quote(subtotal: int, tax: TaxRule) -> PriceQuote:
    subtotal = max(0, subtotal)
    tax_amount = tax.compute(subtotal)
    return PriceQuote(subtotal=subtotal, tax=tax_amount, total=subtotal + tax_amount)


@dataclass(frozen=True)
class FlatRateTiering:
    tiers: TierTable = DEFAULT_TIERS
    tax: TaxRule = NO_TAX
    mode: PricingMode = field(default=PricingMode.FLAT_RATE, init=False)

    def quote(self, lines: Iterable[PricingLine]) -> PriceQuote:
        return _quote(self.tiers.price(count_units(lines)), self.tax)


@dataclass(frozen=True)
class CategorySplitTiering:
    """Each pricing class is counted and tiered on its own; subtotals are summed."""

    tiers_by_class: Mapping[PricingClass, TierTable]
    tax: TaxRule = NO_TAX
    mode: PricingMode = field(default=PricingMode.CATEGORY_SPLIT, init=False)

    def __post_init__(self) -> None:
        if PricingClass.ALCOHOLIC not in self.tiers_by_class:
            raise ValueError("an alcoholic tier table is required")

    def tiers_for(self, pricing_class: PricingClass) -> TierTable:
        return self.tiers_by_class.get(pricing_class, self.tiers_by_class[PricingClass.ALCOHOLIC])

    def quote(self, lines: Iterable[PricingLine]) -> PriceQuote:
        countable = _countable(lines)
        subtotal = sum(
            self.tiers_for(pricing_class).price(count_units(countable, pricing_class))
            for pricing_class in PricingClass
        )
        return _quote(subtotal, self.tax)


@dataclass(frozen=True)
class PooledDiscountTiering:
    """All units tiered together, then a per-unit discount for one class, floored at zero."""

    tiers: TierTable = DEFAULT_TIERS
    discounted_class: PricingClass = PricingClass.SOFT
    discount_per_unit: int = 200
    tax: TaxRule = NO_TAX
    mode: PricingMode = field(default=PricingMode.POOLED_DISCOUNT, init=False)

    def __post_init__(self) -> None:
        if self.discount_per_unit < 0:
            raise ValueError("discount_per_unit must be >= 0")

    def quote(self, lines: Iterable[PricingLine]) -> PriceQuote:
        countable = _countable(lines)
        pooled = self.tiers.price(count_units(countable))
        discount = self.discount_per_unit * count_units(countable, self.discounted_class)
        return _quote(max(0, pooled - discount), self.tax)


@dataclass(frozen=True)
class LineItemPricing:
    tax: TaxRule = TaxRule(rate_bps=1_000)
    mode: PricingMode = field(default=PricingMode.LINE_ITEM, init=False)

    def quote(self, lines: Iterable[PricingLine]) -> PriceQuote:
        subtotal = sum(line.unit_price * line.quantity for line in _countable(lines))
        return _quote(subtotal, self.tax)


@dataclass(frozen=True)
class PricingConfig:
    mode: PricingMode = PricingMode.FLAT_RATE
    bundle_size: int = 3
    bundle_price: int = 1500
    remainder_prices: Mapping[int, int] = field(default_factory=lambda: {1: 700, 2: 1200})
    soft_discount_per_unit: int = 200
    tax_rate_bps: int = 1_000

    def __post_init__(self) -> None:
        if self.soft_discount_per_unit < 0:
            raise ValueError("soft_discount_per_unit must be >= 0")
        if self.tax_rate_bps < 0:
            raise ValueError("tax_rate_bps must be >= 0")

    def tier_table(self) -> TierTable:
        return TierTable(
            bundle_size=self.bundle_size,
            bundle_price=self.bundle_price,
            remainder_prices=self.remainder_prices,
        )


def build_pricing_strategy(config: PricingConfig) -> PricingStrategy:
    if config.mode == PricingMode.LINE_ITEM:
        return LineItemPricing(tax=TaxRule(rate_bps=config.tax_rate_bps))

    tiers = config.tier_table()
    if config.mode == PricingMode.FLAT_RATE:
        return FlatRateTiering(tiers=tiers)
    if config.mode == PricingMode.CATEGORY_SPLIT:
        return CategorySplitTiering(
            tiers_by_class={
                PricingClass.ALCOHOLIC: tiers,
                PricingClass.SOFT: tiers.discounted(config.soft_discount_per_unit),
            }
        )
    if config.mode == PricingMode.POOLED_DISCOUNT:
        return PooledDiscountTiering(
            tiers=tiers,
            discounted_class=PricingClass.SOFT,
            discount_per_unit=config.soft_discount_per_unit,
        )
    raise ValueError(f"unsupported pricing mode: {config.mode}")


def parse_remainder_prices(raw: str) -> dict[int, int]:
    """Parse ``"1:700,2:1200"`` into ``{1: 700, 2: 1200}``."""
    prices: dict[int, int] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        units, _, price = chunk.partition(":")
        try:
            prices[int(units)] = int(price)
        except ValueError:
            raise ValueError(f"invalid remainder price entry: {chunk!r}") from None
    return prices

