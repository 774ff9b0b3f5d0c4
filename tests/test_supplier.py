"""Tests for supplier domain service."""

from decimal import Decimal

import pytest

from fxledger.domain.errors import ConflictError, NotFoundError, ValidationError


class TestSupplierService:
    """Test SupplierService."""

    def test_create_supplier(self, supplier_service):
        supplier_id = supplier_service.create_supplier("Bridge Till", low_balance_alert=Decimal("5000"))

        supplier = supplier_service.get_supplier(supplier_id)
        assert supplier.name == "Bridge Till"
        assert supplier.low_balance_alert == Decimal("5000.00")
        assert supplier.created_at.tzinfo is not None

    def test_default_alert_threshold(self, supplier_service):
        supplier_id = supplier_service.create_supplier("Bridge Till")
        assert supplier_service.get_supplier(supplier_id).low_balance_alert == Decimal("10000")

    def test_name_is_trimmed(self, supplier_service):
        supplier_id = supplier_service.create_supplier("  Bridge Till  ")
        assert supplier_service.get_supplier(supplier_id).name == "Bridge Till"

    def test_duplicate_name(self, supplier_service, sample_supplier):
        with pytest.raises(ConflictError, match="already exists"):
            supplier_service.create_supplier(sample_supplier.name)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name(self, supplier_service, name):
        with pytest.raises(ValidationError, match="Supplier name is required"):
            supplier_service.create_supplier(name)

    def test_negative_threshold(self, supplier_service):
        with pytest.raises(ValidationError):
            supplier_service.create_supplier("Bridge Till", low_balance_alert=Decimal("-1"))

    def test_get_missing_supplier(self, supplier_service):
        assert supplier_service.get_supplier(999) is None
        with pytest.raises(NotFoundError, match="Supplier 999 not found"):
            supplier_service.require_supplier(999)

    def test_require_by_name(self, supplier_service, sample_supplier):
        assert supplier_service.require_supplier_by_name("Bridge Till").id == sample_supplier.id
        with pytest.raises(NotFoundError, match="Supplier 'Nowhere' not found"):
            supplier_service.require_supplier_by_name("Nowhere")

    def test_list_suppliers(self, supplier_service):
        supplier_service.create_supplier("Bridge Till")
        supplier_service.create_supplier("Market Till")

        names = {s.name for s in supplier_service.list_suppliers()}
        assert names == {"Bridge Till", "Market Till"}

    def test_update_supplier(self, supplier_service, sample_supplier):
        supplier_service.update_supplier(sample_supplier.id, name="Border Till", low_balance_alert=Decimal("250"))

        supplier = supplier_service.get_supplier(sample_supplier.id)
        assert supplier.name == "Border Till"
        assert supplier.low_balance_alert == Decimal("250.00")

    def test_update_keeps_unspecified_fields(self, supplier_service, sample_supplier):
        supplier_service.update_supplier(sample_supplier.id, low_balance_alert=Decimal("5"))
        assert supplier_service.get_supplier(sample_supplier.id).name == "Bridge Till"

    def test_update_to_own_name_is_allowed(self, supplier_service, sample_supplier):
        supplier_service.update_supplier(sample_supplier.id, name="Bridge Till")
        assert supplier_service.get_supplier(sample_supplier.id).name == "Bridge Till"

    def test_update_to_taken_name(self, supplier_service, sample_supplier):
        other_id = supplier_service.create_supplier("Market Till")
        with pytest.raises(ConflictError):
            supplier_service.update_supplier(other_id, name="Bridge Till")

    def test_update_missing_supplier(self, supplier_service):
        with pytest.raises(NotFoundError):
            supplier_service.update_supplier(999, name="Anything")

    def test_delete_supplier_cascades(self, supplier_service, ledger_service, rate_service, sample_supplier, temp_db):
        ledger_service.record_purchase(sample_supplier.id, Decimal("100"), Decimal("1"))
        ledger_service.record_sale(sample_supplier.id, "A", Decimal("10"), Decimal("1"))

        supplier_service.delete_supplier(sample_supplier.id)

        assert supplier_service.get_supplier(sample_supplier.id) is None
        assert ledger_service.list_purchases() == []
        assert ledger_service.list_sales() == []
        assert temp_db.list_daily_summaries() == []
        assert rate_service.list_observations() == []

    def test_delete_missing_supplier(self, supplier_service):
        with pytest.raises(NotFoundError):
            supplier_service.delete_supplier(999)
