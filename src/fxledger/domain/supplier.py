"""Supplier domain service."""

import logging
from decimal import Decimal
from typing import Optional

from fxledger.database.base import Database
from fxledger.domain.entities import Supplier as SupplierEntity
from fxledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_supplier_name,
    required_field,
    supplier_name_not_found,
    supplier_not_found,
)

logger = logging.getLogger(__name__)

DEFAULT_LOW_BALANCE_ALERT = Decimal("10000")


class SupplierService:
    """Service for managing suppliers (exchange counters)."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supplier(self, name: str, low_balance_alert: Optional[Decimal] = None) -> int:
        """Create a new supplier.

        Args:
            name: Display name, unique across suppliers
            low_balance_alert: THB threshold under which the supplier is flagged
                (defaults to 10000)

        Returns:
            Supplier ID

        Raises:
            ValidationError: If the name is blank or the threshold is negative
            ConflictError: If a supplier with the same name exists
        """
        name = self._validate_name(name)
        threshold = self._validate_threshold(
            DEFAULT_LOW_BALANCE_ALERT if low_balance_alert is None else low_balance_alert
        )

        if self.db.get_supplier_by_name(name) is not None:
            raise ConflictError(duplicate_supplier_name(name))

        supplier_id = self.db.create_supplier(name=name, low_balance_alert=threshold)
        logger.info("Created supplier %s (%r)", supplier_id, name)
        return supplier_id

    def get_supplier(self, supplier_id: int) -> Optional[SupplierEntity]:
        """Get supplier by ID.

        Returns:
            Supplier entity or None if not found
        """
        return self.db.get_supplier(supplier_id)

    def require_supplier(self, supplier_id: int) -> SupplierEntity:
        """Get supplier by ID or raise NotFoundError."""
        supplier = self.db.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError(supplier_not_found(supplier_id))
        return supplier

    def require_supplier_by_name(self, name: str) -> SupplierEntity:
        """Get supplier by name or raise NotFoundError."""
        supplier = self.db.get_supplier_by_name(name)
        if supplier is None:
            raise NotFoundError(supplier_name_not_found(name))
        return supplier

    def list_suppliers(self) -> list[SupplierEntity]:
        """List all suppliers, newest first."""
        return self.db.list_suppliers()

    def update_supplier(
        self,
        supplier_id: int,
        name: Optional[str] = None,
        low_balance_alert: Optional[Decimal] = None,
    ) -> None:
        """Rename a supplier and/or change its alert threshold.

        Args:
            supplier_id: Supplier ID to update
            name: Optional new name
            low_balance_alert: Optional new threshold in THB

        Raises:
            NotFoundError: If the supplier does not exist
            ValidationError: If the new values are invalid
            ConflictError: If the new name belongs to another supplier
        """
        self.require_supplier(supplier_id)

        if name is not None:
            name = self._validate_name(name)
            existing = self.db.get_supplier_by_name(name)
            if existing is not None and existing.id != supplier_id:
                raise ConflictError(duplicate_supplier_name(name))
        if low_balance_alert is not None:
            low_balance_alert = self._validate_threshold(low_balance_alert)

        self.db.update_supplier(supplier_id, name=name, low_balance_alert=low_balance_alert)

    def delete_supplier(self, supplier_id: int) -> None:
        """Delete a supplier with all of its ledger entries, summaries and rate history.

        Raises:
            NotFoundError: If the supplier does not exist
        """
        self.require_supplier(supplier_id)
        self.db.delete_supplier(supplier_id)
        logger.info("Deleted supplier %s", supplier_id)

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValidationError(required_field("Supplier name"))
        return name.strip()

    @staticmethod
    def _validate_threshold(value: Decimal) -> Decimal:
        value = Decimal(value)
        if value < 0:
            raise ValidationError("Low balance alert must not be negative")
        return value
