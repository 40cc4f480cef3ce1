from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


def price_for_count(
    n: int,
    *,
    bundle_price: int,
    remainder_prices: Mapping[int, int],
    bundle_size: int = 3,
    unit_price: int = 0,
) -> int:
    """Price ``n`` units under bundle tiering.

    Every full bundle of ``bundle_size`` units costs ``bundle_price``; the
    leftover units are looked up in ``remainder_prices`` (remainder 0 costs
    nothing). A remainder missing from the table is charged ``unit_price``
    per unit.
    """
    if n <= 0:
        return 0
    full_bundles, remainder = divmod(n, bundle_size)
    total = full_bundles * bundle_price
    if remainder:
        total += remainder_prices.get(remainder, remainder * unit_price)
    return total


@dataclass(frozen=True)
class TierTable:
    """Bundle tiering whose price never drops as units are added.

    Every remainder ``1..bundle_size-1`` needs a price; remainder prices are
    non-decreasing and none exceeds ``bundle_price``.
    """

    bundle_size: int
    bundle_price: int
    remainder_prices: Mapping[int, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.bundle_size < 1:
            raise ValueError("bundle_size must be >= 1")
        if self.bundle_price < 0:
            raise ValueError("tier prices must be >= 0")
        for units in self.remainder_prices:
            if not 1 <= units < self.bundle_size:
                raise ValueError(f"remainder tier {units} outside 1..{self.bundle_size - 1}")

        missing = [
            units for units in range(1, self.bundle_size) if units not in self.remainder_prices
        ]
        if missing:
            raise ValueError(f"remainder tiers missing a price: {missing}")

        previous = 0
        for units in range(1, self.bundle_size):
            price = self.remainder_prices[units]
            if price < 0:
                raise ValueError("tier prices must be >= 0")
            if price < previous:
                raise ValueError(f"remainder tier {units} is cheaper than tier {units - 1}")
            previous = price
        if previous > self.bundle_price:
            raise ValueError("remainder tiers must not cost more than a full bundle")
        object.__setattr__(self, "remainder_prices", dict(self.remainder_prices))

    def price(self, n: int) -> int:
        return price_for_count(
            n,
            bundle_price=self.bundle_price,
            remainder_prices=self.remainder_prices,
            bundle_size=self.bundle_size,
        )

    def discounted(self, per_unit: int) -> TierTable:
        """Same tier shape with every tier reduced by ``per_unit`` for each unit it covers.

        Raises ``ValueError`` when the floor at 0 would make a larger tier
        cheaper than a smaller one.
        """
        return TierTable(
            bundle_size=self.bundle_size,
            bundle_price=max(0, self.bundle_price - per_unit * self.bundle_size),
            remainder_prices={
                units: max(0, price - per_unit * units)
                for units, price in self.remainder_prices.items()
            },
        )


DEFAULT_TIERS = TierTable(bundle_size=3, bundle_price=1500, remainder_prices={1: 700, 2: 1200})
