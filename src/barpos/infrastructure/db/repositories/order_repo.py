from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from barpos.application.ports.repositories import (
    DanglingMenuItemError,
    OrderNumberConflictError,
    OrderRepository,
    OrderStatusConflictError,
)
from barpos.domain.common.ids import MenuItemId, OrderId, OrderItemId
from barpos.domain.order.entities import (
    EDITABLE_STATUSES,
    Order,
    OrderDraft,
    OrderItem,
    OrderItemDraft,
    OrderItemWithMenuItem,
    OrderStatus,
    OrderWithItems,
)
from barpos.infrastructure.db.models.menu import MenuItemModel
from barpos.infrastructure.db.models.order import (
    OrderItemModel,
    OrderModel,
    OrderNumberSequenceModel,
)
from barpos.infrastructure.db.repositories.menu_repo import menu_item_to_domain
from barpos.infrastructure.db.session import session_scope

_SEQUENCE_ROW_ID = 1


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine, order_number_start: int = 1000) -> None:
        self._engine = engine
        self._order_number_start = order_number_start

    def add_order(self, draft: OrderDraft) -> OrderWithItems:
        model = OrderModel(
            order_number=draft.order_number,
            status=draft.status.value,
            total_amount=draft.total_amount,
            created_at=draft.created_at,
            updated_at=draft.created_at,
        )
        model.items = [self._item_model(item) for item in draft.items]

        with session_scope(self._engine) as session:
            session.add(model)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise OrderNumberConflictError(
                    f"order number {draft.order_number} is already in use"
                ) from exc
            return self._join(session, model)

    def get_order(self, order_id: OrderId) -> Order | None:
        with session_scope(self._engine) as session:
            model = session.get(OrderModel, int(order_id))
        if model is None:
            return None
        return self._to_domain(model)

    def get_order_by_number(self, order_number: str) -> Order | None:
        statement = select(OrderModel).where(OrderModel.order_number == order_number).limit(1)
        with session_scope(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    def list_orders(self) -> list[Order]:
        statement = select(OrderModel).order_by(OrderModel.id)
        with session_scope(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def get_order_with_items(self, order_id: OrderId) -> OrderWithItems | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == int(order_id))
        )
        with session_scope(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._join(session, model)

    def list_orders_with_items(self) -> list[OrderWithItems]:
        statement = (
            select(OrderModel).options(selectinload(OrderModel.items)).order_by(OrderModel.id)
        )
        with session_scope(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            menu_items = self._menu_items(
                session, {item.menu_item_id for model in models for item in model.items}
            )
            return [self._join(session, model, menu_items) for model in models]

    def update_order_status(
        self,
        order_id: OrderId,
        status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None:
        with session_scope(self._engine) as session:
            model = session.get(OrderModel, int(order_id), with_for_update=True)
            if model is None:
                return None
            model.status = status.value
            model.updated_at = updated_at
            session.commit()
        return self._to_domain(model)

    def replace_order(
        self,
        order: Order,
        items: list[OrderItemDraft],
    ) -> OrderWithItems | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == int(order.order_id))
            .with_for_update()
        )
        with session_scope(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            if OrderStatus(model.status) not in EDITABLE_STATUSES:
                raise OrderStatusConflictError(
                    f"order {order.order_id} cannot be edited in status={model.status}"
                )
            model.order_number = order.order_number
            model.status = order.status.value
            model.total_amount = order.total_amount
            model.updated_at = order.updated_at
            # delete-orphan drops the previous items in the same transaction
            model.items = [self._item_model(item) for item in items]
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise OrderNumberConflictError(
                    f"order number {order.order_number} is already in use"
                ) from exc
            return self._join(session, model)

    def delete_order(self, order_id: OrderId) -> bool:
        with session_scope(self._engine) as session:
            model = session.get(OrderModel, int(order_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def next_order_sequence(self) -> int:
        """Hand out the next value of the persistent order-number counter.

        The increment runs first so the row is write-locked before it is read;
        concurrent callers serialise on that lock and never see the same value.
        """
        bump = (
            update(OrderNumberSequenceModel)
            .where(OrderNumberSequenceModel.id == _SEQUENCE_ROW_ID)
            .values(next_value=OrderNumberSequenceModel.next_value + 1)
        )
        for _ in range(2):
            with session_scope(self._engine) as session:
                result = session.execute(bump)
                if result.rowcount == 1:
                    value = session.execute(
                        select(OrderNumberSequenceModel.next_value).where(
                            OrderNumberSequenceModel.id == _SEQUENCE_ROW_ID
                        )
                    ).scalar_one()
                    session.commit()
                    return value - 1

                session.add(
                    OrderNumberSequenceModel(
                        id=_SEQUENCE_ROW_ID,
                        next_value=self._order_number_start + 1,
                    )
                )
                try:
                    session.commit()
                except IntegrityError:
                    # another writer created the row first; bump it on the next pass
                    session.rollback()
                    continue
                return self._order_number_start
        raise OrderNumberConflictError("order number counter could not be initialised")

    def _item_model(self, draft: OrderItemDraft) -> OrderItemModel:
        return OrderItemModel(
            menu_item_id=int(draft.menu_item_id),
            quantity=draft.quantity,
            unit_price=draft.unit_price,
        )

    def _menu_items(self, session: Session, ids: set[int]) -> dict[int, MenuItemModel]:
        if not ids:
            return {}
        statement = select(MenuItemModel).where(MenuItemModel.id.in_(ids))
        return {model.id: model for model in session.execute(statement).scalars().all()}

    def _join(
        self,
        session: Session,
        model: OrderModel,
        menu_items: dict[int, MenuItemModel] | None = None,
    ) -> OrderWithItems:
        if menu_items is None:
            menu_items = self._menu_items(session, {item.menu_item_id for item in model.items})

        rows: list[OrderItemWithMenuItem] = []
        for item_model in sorted(model.items, key=lambda item: item.id):
            menu_item = menu_items.get(item_model.menu_item_id)
            if menu_item is None:
                raise DanglingMenuItemError(
                    f"order item {item_model.id} references missing menu item "
                    f"{item_model.menu_item_id}"
                )
            rows.append(
                OrderItemWithMenuItem(
                    item=OrderItem(
                        order_item_id=OrderItemId(item_model.id),
                        order_id=OrderId(model.id),
                        menu_item_id=MenuItemId(item_model.menu_item_id),
                        quantity=item_model.quantity,
                        unit_price=item_model.unit_price,
                    ),
                    menu_item=menu_item_to_domain(menu_item),
                )
            )
        return OrderWithItems(order=self._to_domain(model), items=rows)

    def _to_domain(self, model: OrderModel) -> Order:
        return Order(
            order_id=OrderId(model.id),
            order_number=model.order_number,
            status=OrderStatus(model.status),
            total_amount=model.total_amount,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
