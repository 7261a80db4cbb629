"""Utility functions for txledger."""

from txledger.utils.date_parser import parse_date, parse_timestamp
from txledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_timestamp", "parse_amount"]
