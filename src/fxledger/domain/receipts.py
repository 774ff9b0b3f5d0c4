"""Receipt number generation for sales."""

from typing import Optional

from fxledger.database.base import Database
from fxledger.utils.clock import BangkokClock, Clock

RECEIPT_PREFIX = "MS"


def format_receipt_no(day, supplier_id: int, sequence: int) -> str:
    """Format a receipt number, e.g. ``MS20240102-3-0001``."""
    return f"{RECEIPT_PREFIX}{day:%Y%m%d}-{supplier_id}-{sequence:04d}"


class ReceiptNumberer:
    """Issues per-supplier, per-day sequential receipt numbers.

    Sequences come from an atomic counter in the store, so concurrent sales
    never share a number and numbers of deleted sales are not reissued.
    """

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or BangkokClock()

    def generate_receipt_no(self, supplier_id: int) -> str:
        """Return the next receipt number for today's Bangkok date."""
        today = self.clock.today()
        sequence = self.db.next_receipt_sequence(supplier_id, today)
        return format_receipt_no(today, supplier_id, sequence)
