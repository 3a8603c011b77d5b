"""
Persistence writer: one parameterized INSERT per validated record.
"""
from __future__ import annotations

import logging

from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payables.exceptions import PersistenceFailed
from payables.models.payable import PayableModel
from payables.schemas import PayableRecord

logger = logging.getLogger(__name__)


def insert_payable(conn: Connection, record: PayableRecord) -> int:
    """Store ``record`` and return the id assigned by the database.

    ``registered_at`` is left to the column's server default.
    """
    row = PayableModel(
        amount=record.amount,
        category=record.category,
        cost_center=record.cost_center,
        supplier_name=record.supplier.name,
        supplier_document=record.supplier.document,
        supplier_type=record.supplier.type,
    )
    try:
        with Session(bind=conn, expire_on_commit=False) as db:
            db.add(row)
            db.flush()
            row_id = row.id
            db.commit()
    except SQLAlchemyError as exc:
        raise PersistenceFailed(exc) from exc

    logger.info("Stored payable %s", row_id)
    return row_id
