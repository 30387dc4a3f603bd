"""
Invoice persistence (raw SQL).

Ids and amounts arrive as text and are cast in the statement, so input such
as `/invoices/abc` fails with Postgres' own "invalid input syntax" error.
"""

from __future__ import annotations

from typing import Any

from core.db import Database, text_param

INVOICE_COLUMNS = "id, comp_code, amt, paid, add_date, paid_date"


async def list_invoices(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, comp_code
        FROM invoices
        """
    )


async def get_invoice(db: Database, invoice_id: Any) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, amt, paid, add_date, paid_date
        FROM invoices
        WHERE id = $1::text::integer
        """,
        text_param(invoice_id),
    )


async def get_invoice_company(db: Database, invoice_id: Any) -> dict | None:
    return await db.fetch_one(
        """
        SELECT c.code, c.name, c.description
        FROM companies AS c
          JOIN invoices AS i
            ON c.code = i.comp_code
        WHERE i.id = $1::text::integer
        """,
        text_param(invoice_id),
    )


async def insert_invoice(db: Database, *, comp_code: Any, amt: Any) -> dict | None:
    return await db.fetch_one(
        f"""
        INSERT INTO invoices (comp_code, amt)
        VALUES ($1, $2::text::double precision)
        RETURNING {INVOICE_COLUMNS}
        """,
        text_param(comp_code),
        text_param(amt),
    )


async def update_invoice_amount(db: Database, invoice_id: Any, *, amt: Any) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE invoices
        SET amt = $1::text::double precision
        WHERE id = $2::text::integer
        RETURNING {INVOICE_COLUMNS}
        """,
        text_param(amt),
        text_param(invoice_id),
    )


async def delete_invoice(db: Database, invoice_id: Any) -> dict | None:
    return await db.fetch_one(
        """
        DELETE FROM invoices
        WHERE id = $1::text::integer
        RETURNING id, comp_code, amt
        """,
        text_param(invoice_id),
    )
