"""
Bilty persistence (raw SQL).

Each function is one auto-committed statement on a pooled connection.
Constraint violations surface as asyncpg exceptions; the service layer maps
them to HTTP responses.
"""

from __future__ import annotations

from typing import Any

from core import db

# Column order for INSERT/UPDATE parameters ($1..$15).
WRITABLE_COLUMNS = (
    "bilty_sl_no",
    "lr_no",
    "bill_no",
    "bill_date",
    "truck_no",
    "destination",
    "weight",
    "freight",
    "diesel",
    "total_adv",
    "balance",
    "pump_name",
    "payment_officer",
    "damage_if_any",
    "margin",
)


def _params(fields: dict[str, Any]) -> list[Any]:
    return [fields.get(column) for column in WRITABLE_COLUMNS]


async def list_bilty() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, bilty_sl_no, lr_no, bill_no, bill_date, truck_no, destination,
               weight, freight, diesel, total_adv, balance, pump_name,
               payment_officer, damage_if_any, margin
        FROM bilty_data
        ORDER BY id DESC
        """
    )


async def insert_bilty(fields: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO bilty_data (
            bilty_sl_no, lr_no, bill_no, bill_date, truck_no, destination,
            weight, freight, diesel, total_adv, balance, pump_name,
            payment_officer, damage_if_any, margin
        )
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15)
        RETURNING id, bilty_sl_no, lr_no, bill_no, bill_date, truck_no, destination,
                  weight, freight, diesel, total_adv, balance, pump_name,
                  payment_officer, damage_if_any, margin
        """,
        *_params(fields),
    )
    if row is None:
        raise RuntimeError("Failed to insert bilty entry.")
    return row


async def update_bilty(bilty_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
    """
    Overwrite every writable column of one row. Returns None when `bilty_id`
    matches nothing.
    """
    return await db.fetch_one(
        """
        UPDATE bilty_data
        SET bilty_sl_no = $1,
            lr_no = $2,
            bill_no = $3,
            bill_date = $4,
            truck_no = $5,
            destination = $6,
            weight = $7,
            freight = $8,
            diesel = $9,
            total_adv = $10,
            balance = $11,
            pump_name = $12,
            payment_officer = $13,
            damage_if_any = $14,
            margin = $15
        WHERE id = $16
        RETURNING id, bilty_sl_no, lr_no, bill_no, bill_date, truck_no, destination,
                  weight, freight, diesel, total_adv, balance, pump_name,
                  payment_officer, damage_if_any, margin
        """,
        *_params(fields),
        bilty_id,
    )


async def delete_bilty(bilty_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM bilty_data
        WHERE id = $1
        RETURNING id
        """,
        bilty_id,
    )
    return row is not None
