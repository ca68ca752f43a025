"""
Transaction History Module

Defines the immutable transaction record and the per-account transaction
log. The log is append-only and reads newest first.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, List, Optional, Set
from enum import Enum


class TransactionKind(Enum):
    """Kinds of balance-changing operations"""
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"


@dataclass(frozen=True)
class Transaction:
    """
    A single posted transaction

    balance_after is the owning account's balance immediately after the
    operation was applied.
    """
    id: str
    kind: TransactionKind
    amount: Decimal
    balance_after: Decimal
    note: str

    @property
    def is_deposit(self) -> bool:
        """Check if this transaction credited the account"""
        return self.kind == TransactionKind.DEPOSIT

    @property
    def signed_amount(self) -> Decimal:
        """Balance delta this transaction applied"""
        return self.amount if self.is_deposit else -self.amount

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON shape used by the API"""
        return {
            "id": self.id,
            "type": self.kind.value,
            "amount": str(self.amount),
            "balanceAfter": str(self.balance_after),
            "note": self.note,
        }


class TransactionLog:
    """
    Per-account transaction history, most recent first

    Entries are stored oldest to newest and read in reverse, so appending
    is amortized O(1). There is no removal.
    """

    def __init__(self):
        self._entries: List[Transaction] = []
        self._ids: Set[str] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, transaction_id: str) -> bool:
        return transaction_id in self._ids

    @property
    def size(self) -> int:
        """Number of entries ever appended"""
        return len(self._entries)

    def append(self, transaction: Transaction) -> None:
        """Record a transaction as the most recent entry"""
        self._entries.append(transaction)
        self._ids.add(transaction.id)

    def head(self) -> Optional[Transaction]:
        """Most recent entry, or None for an empty log"""
        if not self._entries:
            return None
        return self._entries[-1]

    def all_in_order(self) -> List[Transaction]:
        """All entries from most recent to oldest"""
        return list(reversed(self._entries))
