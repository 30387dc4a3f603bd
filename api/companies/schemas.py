"""
Pydantic schemas for company endpoints.

Fields are untyped and optional: a key that was not sent is reported by the
service as missing inputs, and whatever was sent goes to the store as-is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CompanyCreate(BaseModel):
    code: Any = None
    name: Any = None
    description: Any = None


class CompanyUpdate(BaseModel):
    name: Any = None
    description: Any = None
