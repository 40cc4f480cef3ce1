from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from barpos.application.ports.cache import CacheStore
from barpos.application.ports.repositories import MenuRepository, OrderRepository
from barpos.infrastructure.cache.cache_store import NullCacheStore, RedisCacheStore
from barpos.infrastructure.cache.redis_client import ping_redis
from barpos.infrastructure.db.models import order as _order_models  # noqa: F401
from barpos.infrastructure.db.models.menu import Base
from barpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from barpos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from barpos.infrastructure.db.session import create_db_engine, ping_database
from barpos.infrastructure.memory.store import InMemoryPosStore
from barpos.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreHandle:
    """Repositories backing one application instance plus the hooks to check and release them."""

    backend: str
    menu_repository: MenuRepository
    order_repository: OrderRepository
    ping: Callable[[], bool]
    close: Callable[[], None]


def open_store(settings: Settings) -> StoreHandle:
    if settings.database_url is None:
        memory_store = InMemoryPosStore(order_number_start=settings.order_number_start)
        logger.info("store_opened", extra={"backend": "memory"})
        return StoreHandle(
            backend="memory",
            menu_repository=memory_store,
            order_repository=memory_store,
            ping=lambda: True,
            close=memory_store.close,
        )

    engine = create_db_engine(settings.database_url)
    if engine.dialect.name == "sqlite":
        # sqlite databases are local scratch stores; postgres schemas come from alembic
        Base.metadata.create_all(engine)
    logger.info("store_opened", extra={"backend": engine.dialect.name})
    return StoreHandle(
        backend=engine.dialect.name,
        menu_repository=SqlAlchemyMenuRepository(engine),
        order_repository=SqlAlchemyOrderRepository(
            engine,
            order_number_start=settings.order_number_start,
        ),
        ping=lambda: ping_database(engine),
        close=engine.dispose,
    )


def open_menu_cache(settings: Settings) -> tuple[CacheStore, Callable[[], bool] | None]:
    """Menu cache plus its readiness probe; the probe is ``None`` when no redis is configured."""
    redis_url = settings.redis_url
    if redis_url is None:
        return NullCacheStore(), None
    return RedisCacheStore(redis_url), lambda: ping_redis(redis_url)
