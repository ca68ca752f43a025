"""
Ledger Error Types

Typed failures raised by ledger operations. All of them derive from
ValueError so callers that only care about "bad input" can catch that.
"""

from typing import Optional


class LedgerError(ValueError):
    """Base class for all ledger failures"""


class AccountNotFound(LedgerError):
    """Raised when an operation names an account number that does not exist"""

    def __init__(self, account_number: Optional[str] = None):
        self.account_number = account_number
        super().__init__("Account not found.")


class InvalidAmount(LedgerError):
    """Raised when an amount is zero, negative or cannot be parsed"""

    def __init__(self, message: str = "Amount must be positive."):
        super().__init__(message)


class InsufficientFunds(LedgerError):
    """Raised when a withdrawal exceeds the current balance"""

    def __init__(self, account_number: Optional[str] = None):
        self.account_number = account_number
        super().__init__("Insufficient funds.")
