"""
Invoice business logic.
"""

from __future__ import annotations

import logging

from core.db import Database
from core.errors import missing_inputs, not_found

from . import repository, schemas

logger = logging.getLogger(__name__)

INVOICE_NOT_FOUND = "Invoice cannot be found"


async def list_invoices(db: Database) -> list[dict]:
    return await repository.list_invoices(db)


async def get_invoice(db: Database, invoice_id: str) -> dict:
    invoice = await repository.get_invoice(db, invoice_id)
    if invoice is None:
        raise not_found(INVOICE_NOT_FOUND)

    # Separate read, no transaction: if the invoice was removed in between
    # there is no company row and the key is left out.
    company = await repository.get_invoice_company(db, invoice_id)
    if company is not None:
        invoice["company"] = company
    return invoice


async def create_invoice(db: Database, payload: schemas.InvoiceCreate | None) -> dict:
    sent = payload.model_fields_set if payload is not None else set()
    if not {"comp_code", "amt"} <= sent:
        raise missing_inputs()

    # An unknown comp_code surfaces as the store's foreign-key violation.
    row = await repository.insert_invoice(db, comp_code=payload.comp_code, amt=payload.amt)
    if row is None:
        raise RuntimeError("Failed to create invoice.")
    logger.info("invoice_created id=%s comp_code=%s", row["id"], row["comp_code"])
    return row


async def update_invoice(db: Database, invoice_id: str, payload: schemas.InvoiceUpdate | None) -> dict:
    payload = payload or schemas.InvoiceUpdate()
    row = await repository.update_invoice_amount(db, invoice_id, amt=payload.amt)
    if row is None:
        raise not_found(INVOICE_NOT_FOUND)
    logger.info("invoice_updated id=%s", row["id"])
    return row


async def delete_invoice(db: Database, invoice_id: str) -> dict:
    row = await repository.delete_invoice(db, invoice_id)
    if row is None:
        raise not_found(INVOICE_NOT_FOUND)
    logger.info("invoice_deleted id=%s comp_code=%s", row["id"], row["comp_code"])
    return row
