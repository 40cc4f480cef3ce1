from __future__ import annotations

import concurrent.futures
import sys
from pathlib import Path

import pytest
from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from barpos.application.order_numbers import SequentialOrderNumbers
from barpos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

pytestmark = pytest.mark.integration


def test_concurrent_allocations_never_share_a_number(engine: Engine) -> None:
    repository = SqlAlchemyOrderRepository(engine, order_number_start=1000)
    allocator = SequentialOrderNumbers(repository)

    with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
        numbers = list(executor.map(lambda _: allocator.next_number(), range(40)))

    assert len(set(numbers)) == 40
    assert sorted(numbers, key=lambda number: int(number[1:])) == [
        f"#{value}" for value in range(1000, 1040)
    ]
