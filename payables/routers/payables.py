"""
Contas a Pagar API endpoint.

POST /contas-a-pagar   normalize → validate → store one payable record
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from payables.database import ConnectionPool, get_pool
from payables.pipeline import process_payable
from payables.pipeline.writer import insert_payable
from payables.schemas import (
    ErrorResponse,
    PayableCreate,
    PayableCreated,
    ServerErrorResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ── POST /contas-a-pagar ─────────────────────────────────────────────────
@router.post(
    "/contas-a-pagar",
    status_code=201,
    response_model=PayableCreated,
    responses={400: {"model": ErrorResponse}, 500: {"model": ServerErrorResponse}},
)
def create_payable(req: PayableCreate, pool: ConnectionPool = Depends(get_pool)):
    # InvalidAmount / ValidationFailed propagate to the 400 handler before
    # any connection is taken
    record = process_payable(req)
    logger.info(
        "Ingest: classe=%s  centroCusto=%s  valor=%s",
        record.category,
        record.cost_center,
        record.amount,
    )

    with pool.acquire() as conn:
        record_id = insert_payable(conn, record)

    return PayableCreated(id=record_id)
