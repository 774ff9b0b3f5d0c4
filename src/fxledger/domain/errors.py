"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StorageError(RuntimeError):
    """The backing store is unavailable or failed mid-operation."""


def supplier_not_found(supplier_id: int) -> str:
    """Return message for missing supplier."""
    return f"Supplier {supplier_id} not found"


def supplier_name_not_found(name: str) -> str:
    """Return message for missing supplier looked up by name."""
    return f"Supplier '{name}' not found"


def duplicate_supplier_name(name: str) -> str:
    """Return message for duplicate supplier name."""
    return f"Supplier with name '{name}' already exists"


def purchase_not_found(purchase_id: int) -> str:
    """Return message for missing purchase."""
    return f"Purchase {purchase_id} not found"


def sale_not_found(sale_id: int) -> str:
    """Return message for missing sale."""
    return f"Sale {sale_id} not found"


def must_be_positive(field: str) -> str:
    """Return message for a non-positive numeric input."""
    return f"{field} must be greater than zero"


def required_field(field: str) -> str:
    """Return message for a missing required input."""
    return f"{field} is required"


def invalid_rate_type(rate_type: str) -> str:
    """Return message for an unknown rate observation type."""
    return f"Invalid rate type '{rate_type}'. Expected 'buy' or 'sell'"
