"""Billing and ledger core for massage-therapy practices."""

__version__ = "0.1.0"
