"""Utility functions for finledger."""

from finledger.utils.date_parser import parse_date
from finledger.utils.amount_parser import parse_amount, parse_positive_amount
from finledger.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "parse_positive_amount", "resolve_account"]
