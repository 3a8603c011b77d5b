"""
Schemas for the payables pipeline.

Inbound envelopes are deliberately loose (``Any``): the client may send
numbers where text is expected, and the validator decides what is
acceptable. Outbound types are the canonical, validated shapes.
"""
from __future__ import annotations

import enum
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

CATEGORY_MAX_LENGTH = 120
COST_CENTER_MAX_LENGTH = 120
SUPPLIER_NAME_MAX_LENGTH = 255
SUPPLIER_DOCUMENT_MAX_LENGTH = 40


class SupplierType(str, enum.Enum):
    """Supplier kind, stored by its two-letter code."""
    INDIVIDUAL = "PF"  # pessoa física
    ORGANIZATION = "PJ"  # pessoa jurídica

    @classmethod
    def from_code(cls, code: Optional[str]) -> Optional["SupplierType"]:
        if not code:
            return None
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# API request envelopes
# ---------------------------------------------------------------------------

class SupplierPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    nome: Any = None
    razao_social: Any = Field(default=None, alias="razaoSocial")
    documento: Any = None
    tipo: Any = Field(default=None, description="PF | PJ")


class PayableCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    valor: Any = Field(default=None, description="number, or text such as '1.500,00'")
    classe: Any = None
    centro_custo: Any = Field(default=None, alias="centroCusto")
    fornecedor: Optional[SupplierPayload] = None


# ---------------------------------------------------------------------------
# Canonical records
# ---------------------------------------------------------------------------

class SupplierCandidate(BaseModel):
    """Supplier fields after the name alternatives have been resolved."""
    name: Optional[str] = None
    document: Optional[str] = None
    type_code: Optional[str] = None


class SupplierInfo(BaseModel):
    name: str
    document: str
    type: SupplierType


class PayableRecord(BaseModel):
    amount: Decimal
    category: str
    cost_center: str
    supplier: SupplierInfo


# ---------------------------------------------------------------------------
# API responses
# ---------------------------------------------------------------------------

class PayableCreated(BaseModel):
    message: str = "Conta registrada com sucesso!"
    id: int


class ErrorResponse(BaseModel):
    error: str
    violations: list[str] = Field(default_factory=list)


class ServerErrorResponse(BaseModel):
    error: str
    details: str
