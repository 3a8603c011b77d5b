from payables.models.payable import PayableModel

__all__ = ["PayableModel"]
