"""
Company business logic.

Scope:
- presence checks on request bodies
- code normalization (slug) before insert
- folding the company/invoice/industry join into one nested object
- mapping "no row" results to 404s
"""

from __future__ import annotations

import logging
from typing import Any

from slugify import slugify

from core.db import Database
from core.errors import missing_inputs, not_found

from . import repository, schemas

logger = logging.getLogger(__name__)

COMPANY_NOT_FOUND = "Company cannot be found"


def slugify_code(code: Any) -> str:
    if not isinstance(code, str):
        raise TypeError("slugify: string argument expected")
    return slugify(code)


def collapse_company_rows(rows: list[dict]) -> dict:
    """
    Fold joined rows into `{code, name, description, invoices, industries}`.

    Rows are not deduplicated: each joined row contributes one invoice id
    (None when the company has no invoices) and one industry field.
    """
    first = rows[0]
    return {
        "code": first["code"],
        "name": first["name"],
        "description": first["description"],
        "invoices": [row["id"] for row in rows],
        "industries": [row["field"] for row in rows],
    }


async def list_companies(db: Database) -> list[dict]:
    return await repository.list_companies(db)


async def get_company(db: Database, code: str) -> dict:
    rows = await repository.get_company_detail_rows(db, code)
    if not rows:
        raise not_found(COMPANY_NOT_FOUND)
    return collapse_company_rows(rows)


async def create_company(db: Database, payload: schemas.CompanyCreate | None) -> dict:
    sent = payload.model_fields_set if payload is not None else set()
    if not {"code", "name", "description"} <= sent:
        raise missing_inputs()

    # Duplicate codes are rejected by the primary key, not checked here.
    row = await repository.insert_company(
        db,
        code=slugify_code(payload.code) if payload.code is not None else None,
        name=payload.name,
        description=payload.description,
    )
    if row is None:
        raise RuntimeError("Failed to create company.")
    logger.info("company_created code=%s", row["code"])
    return row


async def update_company(db: Database, code: str, payload: schemas.CompanyUpdate | None) -> dict:
    payload = payload or schemas.CompanyUpdate()
    row = await repository.update_company(
        db,
        code,
        name=payload.name,
        description=payload.description,
    )
    if row is None:
        raise not_found(COMPANY_NOT_FOUND)
    logger.info("company_updated code=%s", row["code"])
    return row


async def delete_company(db: Database, code: str) -> dict:
    row = await repository.delete_company(db, code)
    if row is None:
        raise not_found(COMPANY_NOT_FOUND)
    logger.info("company_deleted code=%s", row["code"])
    return row
