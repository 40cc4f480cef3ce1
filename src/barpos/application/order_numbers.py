from __future__ import annotations

import random
from typing import Protocol

from barpos.application.ports.repositories import OrderRepository
from barpos.application.use_cases.errors import OrderNumberUnavailableError


def format_order_number(value: int) -> str:
    return f"#{value}"


class OrderNumberAllocator(Protocol):
    def next_number(self) -> str: ...


class SequentialOrderNumbers:
    """``#1000``, ``#1001``, ... from the store's counter; numbers are never handed out twice."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def next_number(self) -> str:
        return format_order_number(self._order_repository.next_order_sequence())


class RandomOrderNumbers:
    """Random four digit numbers, re-drawn while the store already holds them."""

    def __init__(
        self,
        order_repository: OrderRepository,
        rng: random.Random | None = None,
        max_attempts: int = 50,
    ) -> None:
        self._order_repository = order_repository
        self._rng = rng or random.Random()
        self._max_attempts = max_attempts

    def next_number(self) -> str:
        for _ in range(self._max_attempts):
            candidate = format_order_number(self._rng.randint(1000, 9999))
            if self._order_repository.get_order_by_number(candidate) is None:
                return candidate
        raise OrderNumberUnavailableError(
            f"no free order number after {self._max_attempts} attempts"
        )


ORDER_NUMBER_STRATEGIES = ("sequential", "random")


def build_order_number_allocator(
    strategy: str,
    order_repository: OrderRepository,
) -> OrderNumberAllocator:
    if strategy == "sequential":
        return SequentialOrderNumbers(order_repository)
    if strategy == "random":
        return RandomOrderNumbers(order_repository)
    raise ValueError(f"unsupported order number strategy: {strategy}")
