"""
Pytest configuration for the roadways ledger API.

Provides fixtures for:
- an in-memory stand-in for `bilty.repository` (unit tests, no database)
- a FastAPI TestClient wired to that store
"""

from __future__ import annotations

import itertools
from typing import Any

import asyncpg
import pytest
from fastapi.testclient import TestClient

from bilty import repository

NOT_NULL_COLUMNS = ("bilty_sl_no", "weight")


def unique_violation() -> asyncpg.exceptions.UniqueViolationError:
    return asyncpg.exceptions.UniqueViolationError(
        'duplicate key value violates unique constraint "bilty_data_bilty_sl_no_key"'
    )


def not_null_violation(column: str) -> asyncpg.exceptions.NotNullViolationError:
    exc = asyncpg.exceptions.NotNullViolationError(
        f'null value in column "{column}" of relation "bilty_data" violates not-null constraint'
    )
    exc.column_name = column
    return exc


class FakeBiltyStore:
    """
    Mirrors the `bilty_data` table constraints: identity id, unique and
    not-null `bilty_sl_no`, not-null `weight`.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.written: list[dict[str, Any]] = []
        self._ids = itertools.count(1)

    def _check(self, fields: dict[str, Any], *, exclude_id: int | None = None) -> None:
        for column in NOT_NULL_COLUMNS:
            if fields.get(column) is None:
                raise not_null_violation(column)
        for row_id, row in self.rows.items():
            if row_id != exclude_id and row["bilty_sl_no"] == fields["bilty_sl_no"]:
                raise unique_violation()

    async def list_bilty(self) -> list[dict[str, Any]]:
        return [dict(self.rows[row_id]) for row_id in sorted(self.rows, reverse=True)]

    async def insert_bilty(self, fields: dict[str, Any]) -> dict[str, Any]:
        self.written.append(dict(fields))
        self._check(fields)
        row_id = next(self._ids)
        row = {"id": row_id, **{c: fields.get(c) for c in repository.WRITABLE_COLUMNS}}
        self.rows[row_id] = row
        return dict(row)

    async def update_bilty(self, bilty_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        self.written.append(dict(fields))
        if bilty_id not in self.rows:
            return None
        self._check(fields, exclude_id=bilty_id)
        row = {"id": bilty_id, **{c: fields.get(c) for c in repository.WRITABLE_COLUMNS}}
        self.rows[bilty_id] = row
        return dict(row)

    async def delete_bilty(self, bilty_id: int) -> bool:
        return self.rows.pop(bilty_id, None) is not None


@pytest.fixture
def store(monkeypatch) -> FakeBiltyStore:
    fake = FakeBiltyStore()
    monkeypatch.setattr(repository, "list_bilty", fake.list_bilty)
    monkeypatch.setattr(repository, "insert_bilty", fake.insert_bilty)
    monkeypatch.setattr(repository, "update_bilty", fake.update_bilty)
    monkeypatch.setattr(repository, "delete_bilty", fake.delete_bilty)
    return fake


@pytest.fixture
def client(store: FakeBiltyStore) -> TestClient:
    """
    TestClient without the lifespan, so no pool is created.
    """
    from main import app

    return TestClient(app)


@pytest.fixture
def sample_entry() -> dict[str, Any]:
    return {
        "bilty_sl_no": "BS-1001",
        "lr_no": "LR-77",
        "bill_no": "B-12",
        "bill_date": "2024-03-15",
        "truck_no": "WB23A4455",
        "destination": "Durgapur",
        "weight": "12.5",
        "freight": "45000",
        "diesel": "8000.75",
        "total_adv": "10000",
        "balance": "35000",
        "pump_name": "Highway Fuels",
        "payment_officer": "R. Sen",
        "damage_if_any": "",
        "margin": "1200",
    }
