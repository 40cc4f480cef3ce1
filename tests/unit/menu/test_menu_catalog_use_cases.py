from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from barpos.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from barpos.application.use_cases.errors import InvalidMenuItemError, MenuItemNotFoundError
from barpos.application.use_cases.menu_catalog import (
    MENU_CACHE_KEY,
    CreateMenuItem,
    DeleteMenuItem,
    GetMenuItem,
    ListMenuItems,
    UpdateMenuItem,
)
from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuCategory, MenuItemDraft
from barpos.infrastructure.memory.store import InMemoryPosStore


class CountingStore(InMemoryPosStore):
    def __init__(self) -> None:
        super().__init__()
        self.list_calls = 0

    def list_items(self):
        self.list_calls += 1
        return super().list_items()


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value
        self.ttls[key] = ttl_seconds

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class BrokenCacheStore:
    def get(self, key: str) -> str | None:
        raise ConnectionError("redis down")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("redis down")

    def delete(self, key: str) -> None:
        raise ConnectionError("redis down")


def _seeded_store() -> CountingStore:
    store = CountingStore()
    store.add_item(MenuItemDraft(name="獺祭 純米大吟醸", price=980, category=MenuCategory.SAKE))
    store.add_item(MenuItemDraft(name="ウーロン茶", price=400, category=MenuCategory.SOFT_DRINK))
    return store


def test_list_menu_items_populates_cache_on_miss() -> None:
    store = _seeded_store()
    cache = FakeCacheStore()

    response = ListMenuItems(repository=store, cache=cache, ttl_seconds=120).execute()

    assert [item.id for item in response] == [1, 2]
    assert response[1].pricingClass == "soft"
    assert MENU_CACHE_KEY in cache.values
    assert cache.ttls[MENU_CACHE_KEY] == 120
    assert store.list_calls == 1


def test_list_menu_items_uses_cache_when_warm() -> None:
    store = _seeded_store()
    cache = FakeCacheStore()
    ListMenuItems(repository=store, cache=cache).execute()
    store.list_calls = 0

    response = ListMenuItems(repository=store, cache=cache).execute()

    assert store.list_calls == 0
    assert response[0].name == "獺祭 純米大吟醸"


def test_list_menu_items_survives_cache_failures() -> None:
    store = _seeded_store()

    response = ListMenuItems(repository=store, cache=BrokenCacheStore()).execute()

    assert len(response) == 2


def test_list_menu_items_ignores_corrupt_cache_payload() -> None:
    store = _seeded_store()
    cache = FakeCacheStore()
    cache.values[MENU_CACHE_KEY] = "{not json"

    response = ListMenuItems(repository=store, cache=cache).execute()

    assert len(response) == 2
    assert store.list_calls == 1


def test_create_menu_item_assigns_id_and_invalidates_cache() -> None:
    store = _seeded_store()
    cache = FakeCacheStore()
    ListMenuItems(repository=store, cache=cache).execute()

    created = CreateMenuItem(repository=store, cache=cache).execute(
        CreateMenuItemRequest(name=" モヒート ", price=850, category=MenuCategory.COCKTAIL)
    )

    assert created.id == 3
    assert created.name == "モヒート"
    assert created.category == "cocktail"
    assert MENU_CACHE_KEY not in cache.values


def test_create_menu_item_rejects_invalid_values() -> None:
    store = _seeded_store()
    use_case = CreateMenuItem(repository=store, cache=FakeCacheStore())

    with pytest.raises(InvalidMenuItemError):
        use_case.execute(CreateMenuItemRequest(name="  ", price=850, category=MenuCategory.SAKE))
    with pytest.raises(InvalidMenuItemError):
        use_case.execute(CreateMenuItemRequest(name="x", price=-1, category=MenuCategory.SAKE))
    assert len(store.list_items()) == 2


def test_get_menu_item_raises_when_missing() -> None:
    with pytest.raises(MenuItemNotFoundError) as exc_info:
        GetMenuItem(repository=_seeded_store()).execute(MenuItemId(99))
    assert exc_info.value.details == {"menuItemIds": [99]}


def test_update_menu_item_applies_partial_changes() -> None:
    store = _seeded_store()
    cache = FakeCacheStore()
    cache.values[MENU_CACHE_KEY] = "[]"

    updated = UpdateMenuItem(repository=store, cache=cache).execute(
        MenuItemId(1),
        UpdateMenuItemRequest(price=1100),
    )

    assert updated.price == 1100
    assert updated.name == "獺祭 純米大吟醸"
    assert MENU_CACHE_KEY not in cache.values


def test_update_menu_item_rejects_negative_price() -> None:
    store = _seeded_store()
    with pytest.raises(InvalidMenuItemError):
        UpdateMenuItem(repository=store, cache=FakeCacheStore()).execute(
            MenuItemId(1),
            UpdateMenuItemRequest(price=-5),
        )
    assert store.get_item(MenuItemId(1)).price == 980


def test_delete_menu_item_reports_missing_ids() -> None:
    store = _seeded_store()
    use_case = DeleteMenuItem(repository=store, cache=FakeCacheStore())

    use_case.execute(MenuItemId(2))

    assert store.get_item(MenuItemId(2)) is None
    with pytest.raises(MenuItemNotFoundError):
        use_case.execute(MenuItemId(2))
