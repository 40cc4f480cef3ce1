from __future__ import annotations

import logging

from barpos.application.ports.repositories import MenuRepository
from barpos.domain.menu.entities import MenuCategory, MenuItemDraft
from barpos.infrastructure.observability.logging_config import configure_logging
from barpos.infrastructure.settings import Settings
from barpos.infrastructure.store import open_store

logger = logging.getLogger(__name__)

DEFAULT_MENU: tuple[MenuItemDraft, ...] = (
    MenuItemDraft(name="獺祭 純米大吟醸", price=980, category=MenuCategory.SAKE),
    MenuItemDraft(name="十四代 秘蔵酒", price=1200, category=MenuCategory.SAKE),
    MenuItemDraft(name="久保田 千寿", price=750, category=MenuCategory.SAKE),
    MenuItemDraft(name="黒龍 純米吟醸", price=850, category=MenuCategory.SAKE),
    MenuItemDraft(name="梅酒 ロック", price=650, category=MenuCategory.UMESHU),
    MenuItemDraft(name="梅酒 ソーダ", price=700, category=MenuCategory.UMESHU),
    MenuItemDraft(name="モヒート", price=850, category=MenuCategory.COCKTAIL),
    MenuItemDraft(name="マティーニ", price=900, category=MenuCategory.COCKTAIL),
    MenuItemDraft(name="赤ワインサングリア", price=780, category=MenuCategory.SANGRIA),
    MenuItemDraft(name="白ワインサングリア", price=780, category=MenuCategory.SANGRIA),
    MenuItemDraft(name="ウーロン茶", price=400, category=MenuCategory.SOFT_DRINK),
    MenuItemDraft(name="ジンジャーエール", price=450, category=MenuCategory.SOFT_DRINK),
)


def seed_menu(menu_repository: MenuRepository) -> int:
    """Load the default drink list into an empty catalog; returns the number of items added."""
    if menu_repository.list_items():
        return 0
    for draft in DEFAULT_MENU:
        menu_repository.add_item(draft)
    return len(DEFAULT_MENU)


def main() -> None:
    configure_logging()
    settings = Settings.from_env()
    if settings.database_url is None:
        raise SystemExit("DATABASE_URL is not set")

    store = open_store(settings)
    try:
        added = seed_menu(store.menu_repository)
    finally:
        store.close()
    logger.info("menu_seeded", extra={"count": added})


if __name__ == "__main__":
    main()
