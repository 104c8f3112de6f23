"""Utility functions for fundledger."""

from fundledger.utils.date_parser import parse_date, get_date_range
from fundledger.utils.amount_parser import parse_amount, parse_percentage, parse_allocation

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_percentage", "parse_allocation"]
