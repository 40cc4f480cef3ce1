from __future__ import annotations

import logging
from dataclasses import replace

from pydantic import TypeAdapter, ValidationError

from barpos.application.dto.requests import CreateMenuItemRequest, UpdateMenuItemRequest
from barpos.application.dto.responses import MenuItemResponse
from barpos.application.mappers.menu_mapper import to_menu_item_response
from barpos.application.ports.cache import CacheStore
from barpos.application.ports.repositories import MenuRepository
from barpos.application.use_cases.errors import InvalidMenuItemError, MenuItemNotFoundError
from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuItemDraft

logger = logging.getLogger(__name__)

MENU_CACHE_KEY = "menu:items"

_menu_items_adapter = TypeAdapter(list[MenuItemResponse])


class _MenuCacheMixin:
    _cache: CacheStore

    def _cache_get(self, key: str) -> str | None:
        try:
            return self._cache.get(key)
        except Exception:
            return None

    def _cache_set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            self._cache.set(key, value, ttl_seconds=ttl_seconds)
        except Exception:
            return

    def _invalidate(self) -> None:
        try:
            self._cache.delete(MENU_CACHE_KEY)
        except Exception:
            logger.warning("menu_cache_invalidate_failed")


class ListMenuItems(_MenuCacheMixin):
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def execute(self) -> list[MenuItemResponse]:
        payload = self._cache_get(MENU_CACHE_KEY)
        if payload:
            try:
                return _menu_items_adapter.validate_json(payload)
            except ValidationError:
                pass

        response = [to_menu_item_response(item) for item in self._repository.list_items()]
        self._cache_set(
            MENU_CACHE_KEY,
            _menu_items_adapter.dump_json(response).decode("utf-8"),
            ttl_seconds=self._ttl_seconds,
        )
        return response


class GetMenuItem:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, item_id: MenuItemId) -> MenuItemResponse:
        item = self._repository.get_item(item_id)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found", missing_ids=[item_id])
        return to_menu_item_response(item)


class CreateMenuItem(_MenuCacheMixin):
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, request_dto: CreateMenuItemRequest) -> MenuItemResponse:
        try:
            draft = MenuItemDraft(
                name=request_dto.name.strip(),
                price=request_dto.price,
                category=request_dto.category,
                image_url=request_dto.image_url,
            )
        except ValueError as exc:
            raise InvalidMenuItemError(str(exc)) from exc

        item = self._repository.add_item(draft)
        self._invalidate()
        logger.info("menu_item_created", extra={"menu_item_id": int(item.item_id)})
        return to_menu_item_response(item)


class UpdateMenuItem(_MenuCacheMixin):
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId, request_dto: UpdateMenuItemRequest) -> MenuItemResponse:
        current = self._repository.get_item(item_id)
        if current is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found", missing_ids=[item_id])

        changes = request_dto.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is not None:
            changes["name"] = changes["name"].strip()
        # imageUrl may be cleared with an explicit null; other fields ignore nulls
        fields = {
            key: value
            for key, value in changes.items()
            if value is not None or key == "image_url"
        }
        try:
            updated = replace(current, **fields)
        except ValueError as exc:
            raise InvalidMenuItemError(str(exc)) from exc

        stored = self._repository.update_item(updated)
        if stored is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found", missing_ids=[item_id])
        self._invalidate()
        logger.info("menu_item_updated", extra={"menu_item_id": int(item_id)})
        return to_menu_item_response(stored)


class DeleteMenuItem(_MenuCacheMixin):
    """Remove a catalog entry.

    Orders that already reference the item are not checked; joining such an
    order afterwards reports a dangling menu item.
    """

    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId) -> None:
        if not self._repository.delete_item(item_id):
            raise MenuItemNotFoundError(f"menu item {item_id} not found", missing_ids=[item_id])
        self._invalidate()
        logger.info("menu_item_deleted", extra={"menu_item_id": int(item_id)})

