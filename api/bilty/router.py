"""
Bilty CRUD endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from . import schemas, service

router = APIRouter(prefix="/api/bilty")


@router.get("", response_model=list[schemas.BiltyRecord])
async def list_bilty() -> list[dict]:
    """
    All entries, newest first.
    """
    return await service.list_bilty()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.BiltyRecord)
async def create_bilty(payload: schemas.BiltyPayload | None = None) -> dict:
    return await service.create_bilty(payload or schemas.BiltyPayload())


@router.put("/{bilty_id}", response_model=schemas.BiltyRecord)
async def update_bilty(bilty_id: int, payload: schemas.BiltyPayload | None = None) -> dict:
    """
    Replace every field of an entry. Fields left out of the body are cleared.
    """
    return await service.update_bilty(bilty_id, payload or schemas.BiltyPayload())


@router.delete("/{bilty_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bilty(bilty_id: int) -> Response:
    await service.delete_bilty(bilty_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
