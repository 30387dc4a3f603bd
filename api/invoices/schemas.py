"""
Pydantic schemas for invoice endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class InvoiceCreate(BaseModel):
    comp_code: Any = None
    amt: Any = None


class InvoiceUpdate(BaseModel):
    amt: Any = None
