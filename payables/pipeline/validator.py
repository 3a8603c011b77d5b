"""
Record validator.

Raw client fields are first coerced to text explicitly (``coerce_text``) and
the supplier's alternative name fields are resolved once
(``resolve_supplier``); only then are presence, enumeration and length
constraints checked. Every violation is reported, not just the first.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from payables.exceptions import ValidationFailed
from payables.schemas import (
    CATEGORY_MAX_LENGTH,
    COST_CENTER_MAX_LENGTH,
    SUPPLIER_DOCUMENT_MAX_LENGTH,
    SUPPLIER_NAME_MAX_LENGTH,
    PayableCreate,
    PayableRecord,
    SupplierCandidate,
    SupplierInfo,
    SupplierPayload,
    SupplierType,
)


def coerce_text(value: Any) -> Optional[str]:
    """Canonical text for a primitive client value, or ``None`` when absent.

    Numbers are accepted and stringified (``12.0`` becomes ``"12"``);
    booleans become ``"true"``/``"false"``. Objects, lists and blank strings
    count as absent.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, str):
        text = value
    elif isinstance(value, float):
        text = str(int(value)) if value.is_integer() else repr(value)
    elif isinstance(value, (int, Decimal)):
        text = str(value)
    else:
        return None
    text = text.strip()
    return text or None


def resolve_supplier(payload: Optional[SupplierPayload]) -> SupplierCandidate:
    """Collapse ``nome``/``razaoSocial`` into a single name; first non-empty wins."""
    if payload is None:
        return SupplierCandidate()
    return SupplierCandidate(
        name=coerce_text(payload.nome) or coerce_text(payload.razao_social),
        document=coerce_text(payload.documento),
        type_code=coerce_text(payload.tipo),
    )


def _check_text(
    violations: list[str], label: str, value: Optional[str], max_length: int
) -> None:
    if value is None:
        violations.append(f"{label} é obrigatório")
    elif len(value) > max_length:
        violations.append(f"{label} excede {max_length} caracteres")


def validate_record(amount: Optional[Decimal], payload: PayableCreate) -> PayableRecord:
    """Return the validated record or raise ``ValidationFailed``."""
    violations: list[str] = []

    if amount is None or not amount.is_finite() or amount <= 0:
        violations.append("valor deve ser um número positivo")

    category = coerce_text(payload.classe)
    cost_center = coerce_text(payload.centro_custo)
    _check_text(violations, "classe", category, CATEGORY_MAX_LENGTH)
    _check_text(violations, "centroCusto", cost_center, COST_CENTER_MAX_LENGTH)

    supplier = resolve_supplier(payload.fornecedor)
    _check_text(violations, "fornecedor.nome", supplier.name, SUPPLIER_NAME_MAX_LENGTH)
    _check_text(
        violations, "fornecedor.documento", supplier.document, SUPPLIER_DOCUMENT_MAX_LENGTH
    )
    supplier_type = SupplierType.from_code(supplier.type_code)
    if supplier_type is None:
        violations.append("fornecedor.tipo deve ser PF ou PJ")

    if violations:
        raise ValidationFailed(violations)

    return PayableRecord(
        amount=amount,
        category=category,
        cost_center=cost_center,
        supplier=SupplierInfo(
            name=supplier.name,
            document=supplier.document,
            type=supplier_type,
        ),
    )
