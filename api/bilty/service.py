"""
Bilty business logic.

Scope:
- numeric coercion of the six money/weight columns
- required-field check on create
- mapping store failures to HTTP errors
"""

from __future__ import annotations

import asyncio
import logging
import math
import re
from decimal import Decimal
from typing import Any

import asyncpg
from fastapi import HTTPException, status

from . import repository, schemas

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("weight", "freight", "diesel", "total_adv", "balance", "margin")

# Leading decimal literal, read the way a browser's parseFloat reads it.
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

STORE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
    RuntimeError,
)

NOT_FOUND = "Bilty entry not found."


def parse_numeric(value: Any) -> Decimal | None:
    """
    Coerce raw JSON input to a finite decimal, or None when there is no number.

    Values are read as doubles, the way the browser frontend reads them, so
    what is stored is exactly what the response echoes back. Never raises:
    blanks, null, booleans, containers, text without a leading number and
    anything outside double range all come back as None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.lstrip())
        if match is None:
            return None
        value = match.group(0)
    elif not isinstance(value, (int, float)):
        return None

    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return Decimal(repr(number))


def _to_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_blank(value: Any) -> bool:
    # Same set a JS truthiness check rejects for JSON values.
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    return False


def _to_fields(payload: schemas.BiltyPayload) -> dict[str, Any]:
    fields = payload.model_dump()
    fields["bilty_sl_no"] = _to_text(fields.get("bilty_sl_no"))
    for name in NUMERIC_FIELDS:
        fields[name] = parse_numeric(fields.get(name))
    return fields


def _constraint_error(exc: asyncpg.PostgresError) -> HTTPException | None:
    if isinstance(exc, asyncpg.exceptions.UniqueViolationError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Bilty SL No. already exists. Please use a unique number.",
        )
    if isinstance(exc, asyncpg.exceptions.NotNullViolationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required data for column: {exc.column_name}",
        )
    return None


async def list_bilty() -> list[dict[str, Any]]:
    try:
        return await repository.list_bilty()
    except STORE_ERRORS as exc:
        logger.exception("bilty_list_failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error fetching bilty data.",
        ) from exc


async def create_bilty(payload: schemas.BiltyPayload) -> dict[str, Any]:
    if _is_blank(payload.bilty_sl_no) or _is_blank(payload.weight):
        logger.info("bilty_create_rejected reason=missing_required")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bilty SL No. and Weight are required.",
        )

    try:
        row = await repository.insert_bilty(_to_fields(payload))
    except asyncpg.PostgresError as exc:
        mapped = _constraint_error(exc)
        if mapped is not None:
            logger.info("bilty_create_rejected reason=%s", type(exc).__name__)
            raise mapped from exc
        logger.exception("bilty_insert_failed bilty_sl_no=%s", payload.bilty_sl_no)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error: {exc}",
        ) from exc
    except STORE_ERRORS as exc:
        logger.exception("bilty_insert_failed bilty_sl_no=%s", payload.bilty_sl_no)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error: {exc}",
        ) from exc

    logger.info("bilty_created id=%s bilty_sl_no=%s", row["id"], row["bilty_sl_no"])
    return row


async def update_bilty(bilty_id: int, payload: schemas.BiltyPayload) -> dict[str, Any]:
    # Full replacement; unlike create there is no required-field check.
    try:
        row = await repository.update_bilty(bilty_id, _to_fields(payload))
    except STORE_ERRORS as exc:
        logger.exception("bilty_update_failed id=%s", bilty_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error: {exc}",
        ) from exc

    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    logger.info("bilty_updated id=%s", bilty_id)
    return row


async def delete_bilty(bilty_id: int) -> None:
    try:
        deleted = await repository.delete_bilty(bilty_id)
    except STORE_ERRORS as exc:
        logger.exception("bilty_delete_failed id=%s", bilty_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error deleting bilty entry.",
        ) from exc

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    logger.info("bilty_deleted id=%s", bilty_id)
