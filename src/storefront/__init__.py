"""Storefront client core: cart quantity ledger and order lifecycle guards."""

__version__ = "1.0.0"
