from __future__ import annotations

import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from barpos.application.order_numbers import ORDER_NUMBER_STRATEGIES
from barpos.domain.common.money import Currency, get_currency
from barpos.domain.order.entities import OrderStatus
from barpos.domain.pricing.strategies import (
    PricingConfig,
    PricingMode,
    build_pricing_strategy,
    parse_remainder_prices,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _optional_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    app_env: str = "dev"
    log_level: str = "INFO"
    database_url: str | None = None
    redis_url: str | None = None
    menu_cache_ttl_seconds: int = 300
    currency: Currency = field(default_factory=lambda: get_currency("JPY"))
    pricing: PricingConfig = field(default_factory=PricingConfig)
    order_initial_status: OrderStatus = OrderStatus.IN_PROGRESS
    order_number_strategy: str = "sequential"
    order_number_start: int = 1000
    seed_menu: bool = True
    display_timezone: str = "Asia/Tokyo"
    otel_service_name: str = "barpos"
    otel_exporter_endpoint: str | None = None

    def __post_init__(self) -> None:
        if self.order_initial_status == OrderStatus.READY:
            raise ValueError("ORDER_INITIAL_STATUS cannot be ready")
        if self.order_number_strategy not in ORDER_NUMBER_STRATEGIES:
            raise ValueError(
                f"ORDER_NUMBER_STRATEGY must be one of {', '.join(ORDER_NUMBER_STRATEGIES)}"
            )
        if self.menu_cache_ttl_seconds < 1:
            raise ValueError("MENU_CACHE_TTL_SECONDS must be >= 1")
        if self.order_number_start < 0:
            raise ValueError("ORDER_NUMBER_START must be >= 0")
        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown DISPLAY_TIMEZONE: {self.display_timezone!r}") from None

    @property
    def display_tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)

    @classmethod
    def from_env(cls) -> Settings:
        mode_raw = os.getenv("PRICING_MODE", PricingMode.FLAT_RATE.value).strip().lower()
        try:
            mode = PricingMode(mode_raw)
        except ValueError:
            raise ValueError(f"unsupported PRICING_MODE: {mode_raw!r}") from None

        pricing = PricingConfig(
            mode=mode,
            bundle_size=_int_env("PRICING_BUNDLE_SIZE", 3),
            bundle_price=_int_env("PRICING_BUNDLE_PRICE", 1500),
            remainder_prices=parse_remainder_prices(
                os.getenv("PRICING_REMAINDER_PRICES", "1:700,2:1200")
            ),
            soft_discount_per_unit=_int_env("PRICING_SOFT_DISCOUNT", 200),
            tax_rate_bps=_int_env("PRICING_TAX_RATE_BPS", 1000),
        )
        # builds every tier table once so a malformed configuration fails at startup
        build_pricing_strategy(pricing)

        status_raw = (
            os.getenv("ORDER_INITIAL_STATUS", OrderStatus.IN_PROGRESS.value).strip().lower()
        )
        try:
            initial_status = OrderStatus(status_raw)
        except ValueError:
            raise ValueError(f"unsupported ORDER_INITIAL_STATUS: {status_raw!r}") from None

        return cls(
            app_env=os.getenv("APP_ENV", "dev").strip().lower(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            database_url=_optional_env("DATABASE_URL"),
            redis_url=_optional_env("REDIS_URL"),
            menu_cache_ttl_seconds=_int_env("MENU_CACHE_TTL_SECONDS", 300),
            currency=get_currency(os.getenv("CURRENCY", "JPY").strip()),
            pricing=pricing,
            order_initial_status=initial_status,
            order_number_strategy=os.getenv("ORDER_NUMBER_STRATEGY", "sequential").strip().lower(),
            order_number_start=_int_env("ORDER_NUMBER_START", 1000),
            seed_menu=_bool_env("SEED_MENU", True),
            display_timezone=os.getenv("DISPLAY_TIMEZONE", "Asia/Tokyo").strip(),
            otel_service_name=os.getenv("OTEL_SERVICE_NAME", "barpos").strip(),
            otel_exporter_endpoint=_optional_env("OTEL_EXPORTER_OTLP_ENDPOINT"),
        )
