"""Bakery Ledger - inventory, recipe and order bookkeeping for a small bakery."""

__version__ = "0.1.0"
