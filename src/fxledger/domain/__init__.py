"""Domain layer for fxledger."""

import importlib

_SERVICES = {
    "SupplierService": "fxledger.domain.supplier",
    "LedgerService": "fxledger.domain.ledger",
    "RolloverEngine": "fxledger.domain.rollover",
    "RateHistoryService": "fxledger.domain.rate_history",
    "ReceiptNumberer": "fxledger.domain.receipts",
    "ReportService": "fxledger.domain.reports",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain entities; resolve
# them lazily so importing any domain submodule does not pull in the database.
def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
