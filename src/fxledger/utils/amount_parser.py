"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")
RATE_PLACES = Decimal("0.00000001")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "฿123.45" or "123.45 THB"
    - "1,234.56"
    - "-123.45"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and codes
    amount_str = re.sub(r"[฿$]|\b(THB|MMK|Ks)\b", "", amount_str, flags=re.IGNORECASE)

    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse an amount string and require it to be greater than zero."""
    amount = parse_amount(amount_str)
    if amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got {amount}")
    return amount


def quantize_money(value: Decimal) -> Decimal:
    """Round a THB or MMK amount half-up to two places."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def quantize_rate(value: Decimal) -> Decimal:
    """Round an exchange rate half-up to eight places."""
    return Decimal(value).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)
