from __future__ import annotations

from sqlalchemy import Engine, select

from barpos.application.ports.repositories import MenuRepository
from barpos.domain.common.ids import MenuItemId
from barpos.domain.menu.entities import MenuCategory, MenuItem, MenuItemDraft
from barpos.infrastructure.db.models.menu import MenuItemModel
from barpos.infrastructure.db.session import session_scope


def menu_item_to_domain(model: MenuItemModel) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(model.id),
        name=model.name,
        price=model.price,
        category=MenuCategory(model.category),
        image_url=model.image_url,
    )


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_items(self) -> list[MenuItem]:
        statement = select(MenuItemModel).order_by(MenuItemModel.id)
        with session_scope(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [menu_item_to_domain(model) for model in models]

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        with session_scope(self._engine) as session:
            model = session.get(MenuItemModel, int(item_id))
        if model is None:
            return None
        return menu_item_to_domain(model)

    def get_items(self, item_ids: list[MenuItemId]) -> dict[MenuItemId, MenuItem]:
        if not item_ids:
            return {}
        statement = select(MenuItemModel).where(
            MenuItemModel.id.in_({int(item_id) for item_id in item_ids})
        )
        with session_scope(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return {MenuItemId(model.id): menu_item_to_domain(model) for model in models}

    def add_item(self, draft: MenuItemDraft) -> MenuItem:
        model = MenuItemModel(
            name=draft.name,
            price=draft.price,
            category=draft.category.value,
            image_url=draft.image_url,
        )
        with session_scope(self._engine) as session:
            session.add(model)
            session.commit()
        return menu_item_to_domain(model)

    def update_item(self, item: MenuItem) -> MenuItem | None:
        with session_scope(self._engine) as session:
            model = session.get(MenuItemModel, int(item.item_id))
            if model is None:
                return None
            model.name = item.name
            model.price = item.price
            model.category = item.category.value
            model.image_url = item.image_url
            session.commit()
        return menu_item_to_domain(model)

    def delete_item(self, item_id: MenuItemId) -> bool:
        with session_scope(self._engine) as session:
            model = session.get(MenuItemModel, int(item_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True
