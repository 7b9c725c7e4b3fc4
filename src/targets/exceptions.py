"""Errors raised by the supplier target and incentive core."""


class PerformanceError(Exception):
    """Base class for supplier performance errors."""


class TargetValidationError(PerformanceError, ValueError):
    """Input rejected before anything is persisted."""

    def __init__(self, message, *, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidCategoryError(TargetValidationError):
    """Category code outside the product category catalog."""


class RecordNotFound(PerformanceError, LookupError):
    """Supplier, target or incentive record absent."""


class SupplierNotFound(RecordNotFound):
    pass


class TargetNotFound(RecordNotFound):
    pass


class IncentiveNotFound(RecordNotFound):
    pass


class DuplicateRecord(PerformanceError):
    """A record already exists for this supplier and period."""
