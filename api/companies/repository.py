"""
Company persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, text_param


async def list_companies(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT code, name
        FROM companies
        """
    )


async def get_company_detail_rows(db: Database, code: str) -> list[dict]:
    """
    One row per (invoice, industry) combination of the company.

    Invoices are left-joined, industries inner-joined: a company without any
    industry mapping yields no rows at all.
    """
    return await db.fetch_all(
        """
        SELECT c.code, c.name, c.description, i.id, industry.field
        FROM companies AS c
          LEFT JOIN invoices AS i
            ON c.code = i.comp_code
          JOIN industries_companies AS ic
            ON ic.company_code = c.code
          JOIN industries AS industry
            ON industry.code = ic.industry_code
        WHERE c.code = $1
        """,
        code,
    )


async def insert_company(
    db: Database,
    *,
    code: str | None,
    name: Any,
    description: Any,
) -> dict | None:
    return await db.fetch_one(
        """
        INSERT INTO companies (code, name, description)
        VALUES ($1, $2, $3)
        RETURNING code, name, description
        """,
        code,
        text_param(name),
        text_param(description),
    )


async def update_company(
    db: Database,
    code: str,
    *,
    name: Any,
    description: Any,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE companies
        SET name = $1,
            description = $2
        WHERE code = $3
        RETURNING code, name, description
        """,
        text_param(name),
        text_param(description),
        code,
    )


async def delete_company(db: Database, code: str) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM companies
        WHERE code = $1
        RETURNING code, name, description
        """,
        code,
    )
