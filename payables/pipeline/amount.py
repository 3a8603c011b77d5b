"""
Amount normalizer.

Accepts numbers, or text written in either separator convention
("1.500,00" or "1,500.00"), and returns a positive Decimal with 2 places.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from payables.exceptions import InvalidAmount

CENTS = Decimal("0.01")
# NUMERIC(15,2) holds up to 13 integer digits
MAX_AMOUNT = Decimal(10) ** 13
TOO_LARGE = "Valor inválido: excede o limite suportado."


def _canonical_text(text: str) -> str:
    """Drop grouping separators and turn the decimal separator into '.'."""
    text = text.strip().replace(" ", "").replace("\u00a0", "")
    last_dot, last_comma = text.rfind("."), text.rfind(",")

    if last_dot >= 0 and last_comma >= 0:
        # whichever comes last marks the fraction
        if last_comma > last_dot:
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    sep = "," if last_comma >= 0 else "." if last_dot >= 0 else ""
    if not sep:
        return text
    if text.count(sep) > 1:
        return text.replace(sep, "")
    return text.replace(sep, ".")


def normalize_amount(raw: Any) -> Decimal:
    if raw is None or isinstance(raw, bool):
        raise InvalidAmount()

    if isinstance(raw, (int, Decimal)):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(repr(raw))
    elif isinstance(raw, str):
        if not raw.strip():
            raise InvalidAmount()
        try:
            value = Decimal(_canonical_text(raw))
        except InvalidOperation:
            raise InvalidAmount() from None
    else:
        raise InvalidAmount()

    if not value.is_finite():
        raise InvalidAmount()
    # bounded before quantize, which fails past the context precision
    if abs(value) >= MAX_AMOUNT:
        raise InvalidAmount(TOO_LARGE)

    value = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if value <= 0:
        raise InvalidAmount()
    if value >= MAX_AMOUNT:
        raise InvalidAmount(TOO_LARGE)
    return value
