from payables.schemas.payable import (  # noqa: F401
    CATEGORY_MAX_LENGTH,
    COST_CENTER_MAX_LENGTH,
    SUPPLIER_DOCUMENT_MAX_LENGTH,
    SUPPLIER_NAME_MAX_LENGTH,
    ErrorResponse,
    PayableCreate,
    PayableCreated,
    PayableRecord,
    ServerErrorResponse,
    SupplierCandidate,
    SupplierInfo,
    SupplierPayload,
    SupplierType,
)
