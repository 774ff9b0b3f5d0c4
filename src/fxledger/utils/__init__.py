"""Utility functions for fxledger."""

from fxledger.utils.date_parser import parse_date
from fxledger.utils.amount_parser import parse_amount, parse_positive_amount

__all__ = ["parse_date", "parse_amount", "parse_positive_amount"]
