"""
Account Management Module

Holds the account record and the account index. The index keeps two views
over the same set of accounts: a dict for exact lookup by account number
and a binary search tree for listing in account-number order.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
from enum import Enum


class AccountCategory(Enum):
    """Banking product categories"""
    SAVINGS = "SAVINGS"
    CURRENT = "CURRENT"

    @classmethod
    def parse(cls, value: Union["AccountCategory", str]) -> "AccountCategory":
        """Resolve a category from an enum member or a case-insensitive name"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown account type '{value}'. Expected one of: {allowed}")


@dataclass
class Account:
    """
    Bank account record

    Only the balance changes after creation; it is mutated by the ledger
    under its lock.
    """
    account_number: str
    owner_name: str
    email: str
    balance: Decimal
    category: AccountCategory

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON shape used by the API"""
        return {
            "accountNumber": self.account_number,
            "ownerName": self.owner_name,
            "email": self.email,
            "balance": str(self.balance),
            "type": self.category.value,
        }


@dataclass
class _TreeNode:
    """Tree node: a key, the account's slot in the primary store, child indices"""
    key: str
    slot: int
    left: Optional[int] = None
    right: Optional[int] = None


class AccountTree:
    """
    Binary search tree over account numbers, stored as an arena

    Nodes live in a list and refer to their children by index. The tree
    never holds accounts, only the slot each key occupies in the owner's
    store. Insert and traversal are iterative.
    """

    def __init__(self):
        self._nodes: List[_TreeNode] = []
        self._root: Optional[int] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def insert(self, key: str, slot: int) -> bool:
        """
        Insert a key

        Returns:
            True if a node was added, False if the key was already present
            (the existing node is kept)
        """
        if self._root is None:
            self._root = self._new_node(key, slot)
            return True

        current = self._root
        while True:
            node = self._nodes[current]
            if key < node.key:
                if node.left is None:
                    node.left = self._new_node(key, slot)
                    return True
                current = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = self._new_node(key, slot)
                    return True
                current = node.right
            else:
                return False

    def find(self, key: str) -> Optional[int]:
        """Return the slot stored for key, or None"""
        current = self._root
        while current is not None:
            node = self._nodes[current]
            if key == node.key:
                return node.slot
            current = node.left if key < node.key else node.right
        return None

    def in_order(self) -> List[int]:
        """Slots in ascending key order"""
        slots: List[int] = []
        stack: List[int] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = self._nodes[current].left
            current = stack.pop()
            slots.append(self._nodes[current].slot)
            current = self._nodes[current].right
        return slots

    def _new_node(self, key: str, slot: int) -> int:
        self._nodes.append(_TreeNode(key=key, slot=slot))
        return len(self._nodes) - 1


class AccountIndex:
    """
    Dual index over accounts: O(1) lookup by number plus sorted traversal

    Accounts are kept in a primary slot list; the dict and the tree both
    refer to positions in it. Inserting a number that already exists is a
    no-op in both views.
    """

    def __init__(self):
        self._accounts: List[Account] = []
        self._by_number: Dict[str, int] = {}
        self._tree = AccountTree()

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_number: str) -> bool:
        return account_number in self._by_number

    def insert(self, account: Account) -> bool:
        """
        Register an account under its account number

        Returns:
            True if added, False if the number was already taken
        """
        if account.account_number in self._by_number:
            return False

        slot = len(self._accounts)
        self._tree.insert(account.account_number, slot)
        self._accounts.append(account)
        self._by_number[account.account_number] = slot
        return True

    def lookup(self, account_number: str) -> Optional[Account]:
        """Get account by account number"""
        slot = self._by_number.get(account_number)
        if slot is None:
            return None
        return self._accounts[slot]

    def list_sorted(self) -> List[Account]:
        """All accounts ordered by account number"""
        return [self._accounts[slot] for slot in self._tree.in_order()]

    def search_by_name(self, keyword: str) -> List[Account]:
        """Accounts whose owner name contains keyword, case-insensitive, in sorted order"""
        needle = keyword.lower()
        return [
            account for account in self.list_sorted()
            if needle in account.owner_name.lower()
        ]
