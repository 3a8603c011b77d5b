"""
Error taxonomy for the ingestion pipeline.

``InvalidAmount`` and ``ValidationFailed`` are client-input errors (HTTP 400).
``PersistenceFailed`` is operational (HTTP 500) and always carries its cause.
"""
from __future__ import annotations

from typing import Optional


class PayablesError(Exception):
    """Base class for every error raised by the payables core."""


class InvalidAmount(PayablesError):
    def __init__(self, message: str = "Valor inválido: informe um número positivo.") -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(PayablesError):
    """One or more required-field or domain constraints were violated."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        self.message = "Todos os campos de conta e fornecedor são obrigatórios."
        super().__init__(f"{self.message} ({'; '.join(self.violations)})")


class PersistenceFailed(PayablesError):
    """The store rejected or could not complete an operation."""

    def __init__(self, cause: Optional[BaseException] = None, message: str = "") -> None:
        self.cause = cause
        self.details = message or (str(cause) if cause is not None else "unknown error")
        super().__init__(self.details)
