from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from barpos.domain.common.ids import MenuItemId
from barpos.domain.common.money import ensure_non_negative


class PricingClass(str, Enum):
    ALCOHOLIC = "alcoholic"
    SOFT = "soft"


class MenuCategory(str, Enum):
    SAKE = "sake"
    UMESHU = "umeshu"
    COCKTAIL = "cocktail"
    SANGRIA = "sangria"
    BEER = "beer"
    WINE = "wine"
    SOFT_DRINK = "soft-drink"

    @property
    def pricing_class(self) -> PricingClass:
        if self is MenuCategory.SOFT_DRINK:
            return PricingClass.SOFT
        return PricingClass.ALCOHOLIC


@dataclass(frozen=True)
class MenuItemDraft:
    name: str
    price: int
    category: MenuCategory
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        ensure_non_negative(self.price, "price")


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: int
    category: MenuCategory
    image_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        ensure_non_negative(self.price, "price")

    @property
    def pricing_class(self) -> PricingClass:
        return self.category.pricing_class

    @classmethod
    def from_draft(cls, item_id: MenuItemId, draft: MenuItemDraft) -> MenuItem:
        return cls(
            item_id=item_id,
            name=draft.name,
            price=draft.price,
            category=draft.category,
            image_url=draft.image_url,
        )
