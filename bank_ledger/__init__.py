"""
Bank Ledger

An in-memory bank ledger with a dual-indexed account store, per-account
transaction history and a global undo of the most recent transaction.
All monetary values use Decimal.
"""

__version__ = "1.0.0"
