"""
SQLAlchemy model for the accounts-payable table.

Column names match the table created by earlier deployments of the service.
"""
from sqlalchemy import TIMESTAMP, Column, Enum, Integer, Numeric, String, func

from payables.database import Base
from payables.schemas.payable import (
    CATEGORY_MAX_LENGTH,
    COST_CENTER_MAX_LENGTH,
    SUPPLIER_DOCUMENT_MAX_LENGTH,
    SUPPLIER_NAME_MAX_LENGTH,
    SupplierType,
)


class PayableModel(Base):
    """Conta a pagar, with the supplier denormalized onto the row."""
    __tablename__ = "contas_a_pagar"

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column("valor", Numeric(15, 2), nullable=False)
    category = Column("classe", String(CATEGORY_MAX_LENGTH), nullable=False)
    cost_center = Column("centroCusto", String(COST_CENTER_MAX_LENGTH), nullable=False)

    supplier_name = Column("fornecedorNome", String(SUPPLIER_NAME_MAX_LENGTH), nullable=False)
    supplier_document = Column("fornecedorDoc", String(SUPPLIER_DOCUMENT_MAX_LENGTH), nullable=False)
    supplier_type = Column(
        "tipoFornecedor",
        Enum(
            SupplierType,
            name="tipo_fornecedor",
            values_callable=lambda members: [m.value for m in members],
            create_constraint=True,
        ),
        nullable=False,
    )

    registered_at = Column(
        "dataRegistro", TIMESTAMP, server_default=func.current_timestamp(), nullable=False
    )
