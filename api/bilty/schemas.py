"""
Pydantic schemas for bilty endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

TEXT_FIELDS = (
    "lr_no",
    "bill_no",
    "truck_no",
    "destination",
    "pump_name",
    "payment_officer",
    "damage_if_any",
)


class BiltyPayload(BaseModel):
    """
    Request body for create and update.

    `bilty_sl_no` and the numeric columns stay as sent: create checks
    presence on the raw value, and the service layer converts afterwards.
    `bill_date` must be an ISO `YYYY-MM-DD` date; blank means no date.
    """

    model_config = ConfigDict(extra="ignore")

    bilty_sl_no: str | int | float | bool | None = None
    lr_no: str | None = None
    bill_no: str | None = None
    bill_date: date | None = None
    truck_no: str | None = None
    destination: str | None = None
    weight: Any = None
    freight: Any = None
    diesel: Any = None
    total_adv: Any = None
    balance: Any = None
    pump_name: str | None = None
    payment_officer: str | None = None
    damage_if_any: str | None = None
    margin: Any = None

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # Spreadsheet-style frontends send SL/LR/bill numbers as JSON numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("bill_date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BiltyRecord(BaseModel):
    id: int
    bilty_sl_no: str | None = None
    lr_no: str | None = None
    bill_no: str | None = None
    bill_date: date | None = None
    truck_no: str | None = None
    destination: str | None = None
    weight: float | None = None
    freight: float | None = None
    diesel: float | None = None
    total_adv: float | None = None
    balance: float | None = None
    pump_name: str | None = None
    payment_officer: str | None = None
    damage_if_any: str | None = None
    margin: float | None = None
