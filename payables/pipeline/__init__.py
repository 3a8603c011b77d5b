"""
Payables ingestion pipeline.

Orchestrates: normalize amount → validate record. Persistence is a separate
step (``payables.pipeline.writer``) so that a pooled connection is only
taken for records that passed validation.
"""
import logging

from payables.pipeline.amount import normalize_amount
from payables.pipeline.validator import validate_record
from payables.schemas import PayableCreate, PayableRecord

logger = logging.getLogger(__name__)


def process_payable(payload: PayableCreate) -> PayableRecord:
    """Normalize and validate one inbound payable.

    Raises ``InvalidAmount`` or ``ValidationFailed``.
    """
    amount = normalize_amount(payload.valor)
    logger.debug("Amount normalized: %r -> %s", payload.valor, amount)

    record = validate_record(amount, payload)
    logger.debug("Record valid: %s / %s", record.category, record.cost_center)
    return record
