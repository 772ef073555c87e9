"""Domain layer for finledger application."""

import importlib

# Services import the database layer, which imports domain.entities, so they
# are loaded on first access instead of at package import.
_SERVICES = {
    "TransactionService": "finledger.domain.transaction",
    "AccountService": "finledger.domain.account",
    "AccountTypeService": "finledger.domain.account_type",
    "PriceService": "finledger.domain.price",
    "ReportService": "finledger.domain.report",
    "TagService": "finledger.domain.tag",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
