"""
Invoice API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.get("/invoices")
async def list_invoices(db: Database = Depends(get_db)) -> dict:
    rows = await service.list_invoices(db)
    # Clients read the rows from `invoices[0]`.
    return {"invoices": [rows]}


@router.get("/invoices/{invoice_id}")
async def get_invoice(invoice_id: str, db: Database = Depends(get_db)) -> dict:
    invoice = await service.get_invoice(db, invoice_id)
    return {"invoice": invoice}


@router.post("/invoices")
async def create_invoice(
    payload: schemas.InvoiceCreate | None = None,
    db: Database = Depends(get_db),
) -> dict:
    invoice = await service.create_invoice(db, payload)
    return {"invoice": invoice}


@router.put("/invoices/{invoice_id}")
async def update_invoice(
    invoice_id: str,
    payload: schemas.InvoiceUpdate | None = None,
    db: Database = Depends(get_db),
) -> dict:
    invoice = await service.update_invoice(db, invoice_id, payload)
    return {"invoice": invoice}


@router.delete("/invoices/{invoice_id}")
async def delete_invoice(invoice_id: str, db: Database = Depends(get_db)) -> dict:
    await service.delete_invoice(db, invoice_id)
    return {"status": "deleted"}
