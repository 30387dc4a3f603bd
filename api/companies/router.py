"""
Company API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.get("/companies")
async def list_companies(db: Database = Depends(get_db)) -> list[dict]:
    """
    All companies as a bare array of `{code, name}`.
    """
    return await service.list_companies(db)


@router.get("/companies/{code}")
async def get_company(code: str, db: Database = Depends(get_db)) -> dict:
    company = await service.get_company(db, code)
    return {"company": company}


@router.post("/companies")
async def create_company(
    payload: schemas.CompanyCreate | None = None,
    db: Database = Depends(get_db),
) -> dict:
    company = await service.create_company(db, payload)
    return {"company": company}


@router.put("/companies/{code}")
async def update_company(
    code: str,
    payload: schemas.CompanyUpdate | None = None,
    db: Database = Depends(get_db),
) -> dict:
    company = await service.update_company(db, code, payload)
    return {"company": company}


@router.delete("/companies/{code}")
async def delete_company(code: str, db: Database = Depends(get_db)) -> dict:
    await service.delete_company(db, code)
    return {"status": "deleted"}
