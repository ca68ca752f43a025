"""
Ledger Engine

Orchestrates the account index, per-account transaction logs and the
global undo stack. Every operation runs under a single re-entrant lock so
the ledger can be shared by concurrent request handlers.

The ledger never logs; callers decide how to report outcomes.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from enum import Enum
import threading

from .accounts import Account, AccountCategory, AccountIndex
from .config import LedgerConfig, get_config
from .errors import AccountNotFound, InsufficientFunds, InvalidAmount
from .money import AmountLike, to_decimal
from .transactions import Transaction, TransactionKind, TransactionLog
from .undo import UndoStack


OPENING_NOTE = "Account opened"


class UndoOutcome(Enum):
    """Result of an undo request"""
    REVERSED = "reversed"          # Balance effect of the top transaction reversed
    EMPTY = "empty"                # Nothing left to undo
    INCONSISTENT = "inconsistent"  # Popped transaction matched no account


@dataclass(frozen=True)
class UndoResult:
    """Outcome of Ledger.undo() with a human-readable message"""
    outcome: UndoOutcome
    message: str
    transaction: Optional[Transaction] = None
    account_number: Optional[str] = None

    @property
    def reversed(self) -> bool:
        return self.outcome == UndoOutcome.REVERSED


@dataclass(frozen=True)
class LedgerStats:
    """Point-in-time totals across the ledger"""
    account_count: int
    total_balance: Decimal
    undo_stack_size: int

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {
            "accountCount": self.account_count,
            "totalBalance": str(self.total_balance),
            "undoStackSize": self.undo_stack_size,
        }


class Ledger:
    """
    In-memory bank ledger with a single global undo
    """

    def __init__(
        self,
        account_number_prefix: str = "ACC",
        account_sequence_start: int = 1000,
        transaction_id_prefix: str = "TX",
        transaction_sequence_start: int = 1
    ):
        self._lock = threading.RLock()
        self._accounts = AccountIndex()
        self._histories: Dict[str, TransactionLog] = {}
        self._undo_stack = UndoStack()

        self.account_number_prefix = account_number_prefix
        self.transaction_id_prefix = transaction_id_prefix
        # Last account sequence value handed out
        self._account_sequence = account_sequence_start
        # Next transaction sequence value to hand out
        self._transaction_sequence = transaction_sequence_start

    @classmethod
    def from_config(cls, config: Optional[LedgerConfig] = None) -> "Ledger":
        """Build a ledger using configured prefixes and sequence starts"""
        config = config or get_config()
        return cls(
            account_number_prefix=config.account_number_prefix,
            account_sequence_start=config.account_sequence_start,
            transaction_id_prefix=config.transaction_id_prefix,
            transaction_sequence_start=config.transaction_sequence_start
        )

    def _next_account_number(self) -> str:
        self._account_sequence += 1
        return f"{self.account_number_prefix}{self._account_sequence}"

    def _next_transaction_id(self) -> str:
        transaction_id = f"{self.transaction_id_prefix}{self._transaction_sequence}"
        self._transaction_sequence += 1
        return transaction_id

    def _require_account(self, account_number: str) -> Account:
        account = self._accounts.lookup(account_number)
        if account is None:
            raise AccountNotFound(account_number)
        return account

    @staticmethod
    def _positive_amount(amount: AmountLike) -> Decimal:
        value = to_decimal(amount)
        if value <= Decimal('0'):
            raise InvalidAmount()
        return value

    def _post(self, account: Account, kind: TransactionKind, amount: Decimal, note: str) -> Transaction:
        """Append a transaction for an already-updated balance and make it undoable"""
        transaction = Transaction(
            id=self._next_transaction_id(),
            kind=kind,
            amount=amount,
            balance_after=account.balance,
            note=note
        )
        self._histories[account.account_number].append(transaction)
        self._undo_stack.push(transaction)
        return transaction

    def create_account(
        self,
        owner_name: str,
        email: str,
        initial_deposit: AmountLike,
        category: Union[AccountCategory, str] = AccountCategory.SAVINGS
    ) -> Account:
        """
        Open a new account

        The opening deposit is written straight to the account's history and
        is never undoable. Its sign is not validated.

        Args:
            owner_name: Account holder's name
            email: Contact email
            initial_deposit: Opening balance
            category: SAVINGS or CURRENT (enum member or name)

        Returns:
            Created Account object
        """
        category = AccountCategory.parse(category)
        opening_balance = to_decimal(initial_deposit)

        with self._lock:
            account = Account(
                account_number=self._next_account_number(),
                owner_name=owner_name,
                email=email,
                balance=opening_balance,
                category=category
            )
            self._accounts.insert(account)
            history = TransactionLog()
            self._histories[account.account_number] = history

            history.append(Transaction(
                id=self._next_transaction_id(),
                kind=TransactionKind.DEPOSIT,
                amount=opening_balance,
                balance_after=opening_balance,
                note=OPENING_NOTE
            ))
            return account

    def deposit(self, account_number: str, amount: AmountLike, note: str = "Deposit") -> Transaction:
        """
        Credit an account

        Raises:
            AccountNotFound: Unknown account number
            InvalidAmount: Amount is not positive
        """
        with self._lock:
            account = self._require_account(account_number)
            value = self._positive_amount(amount)

            account.balance += value
            return self._post(account, TransactionKind.DEPOSIT, value, note)

    def withdraw(self, account_number: str, amount: AmountLike, note: str = "Withdrawal") -> Transaction:
        """
        Debit an account

        Raises:
            AccountNotFound: Unknown account number
            InvalidAmount: Amount is not positive
            InsufficientFunds: Amount exceeds the current balance
        """
        with self._lock:
            account = self._require_account(account_number)
            value = self._positive_amount(amount)
            if account.balance < value:
                raise InsufficientFunds(account_number)

            account.balance -= value
            return self._post(account, TransactionKind.WITHDRAW, value, note)

    def undo(self) -> UndoResult:
        """
        Reverse the balance effect of the most recent deposit or withdrawal

        The transaction stays in the account's history; only the balance is
        adjusted. An empty stack is not an error.
        """
        with self._lock:
            transaction = self._undo_stack.pop()
            if transaction is None:
                return UndoResult(UndoOutcome.EMPTY, "Nothing to undo.")

            for account_number, history in self._histories.items():
                if transaction.id not in history:
                    continue
                account = self._accounts.lookup(account_number)
                account.balance -= transaction.signed_amount
                return UndoResult(
                    UndoOutcome.REVERSED,
                    f"Undid {transaction.kind.value} of {transaction.amount} on {account_number}",
                    transaction=transaction,
                    account_number=account_number
                )

            return UndoResult(
                UndoOutcome.INCONSISTENT,
                "Could not find account for undo.",
                transaction=transaction
            )

    def get_account(self, account_number: str) -> Optional[Account]:
        """Get account by number, or None"""
        with self._lock:
            return self._accounts.lookup(account_number)

    def get_all_accounts(self) -> List[Account]:
        """All accounts sorted by account number"""
        with self._lock:
            return self._accounts.list_sorted()

    def search_by_name(self, keyword: str) -> List[Account]:
        """Accounts whose owner name contains keyword (case-insensitive)"""
        with self._lock:
            return self._accounts.search_by_name(keyword)

    def get_history(self, account_number: str) -> List[Transaction]:
        """Transactions for an account, newest first; empty for unknown accounts"""
        with self._lock:
            history = self._histories.get(account_number)
            if history is None:
                return []
            return history.all_in_order()

    def get_stats(self) -> LedgerStats:
        """Account count, total balance and pending undo depth"""
        with self._lock:
            accounts = self._accounts.list_sorted()
            total = sum((account.balance for account in accounts), Decimal('0'))
            return LedgerStats(
                account_count=len(accounts),
                total_balance=total,
                undo_stack_size=len(self._undo_stack)
            )


def seed_demo_data(ledger: Ledger) -> List[Account]:
    """Load the demo accounts and a few transactions so history isn't empty"""
    accounts = [
        ledger.create_account("Alice Johnson", "alice@email.com", Decimal('5000'), AccountCategory.SAVINGS),
        ledger.create_account("Bob Smith", "bob@email.com", Decimal('8500'), AccountCategory.CURRENT),
        ledger.create_account("Carol Williams", "carol@email.com", Decimal('12000'), AccountCategory.SAVINGS),
        ledger.create_account("David Brown", "david@email.com", Decimal('3200'), AccountCategory.CURRENT),
    ]

    ledger.deposit(accounts[0].account_number, Decimal('2000'), "Initial top-up")
    ledger.withdraw(accounts[1].account_number, Decimal('500'), "ATM withdrawal")
    ledger.deposit(accounts[2].account_number, Decimal('1500'), "Salary credit")
    return accounts
