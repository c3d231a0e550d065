"""Retail ledger core package."""
