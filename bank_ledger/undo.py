"""
Undo Stack Module

Global LIFO of reversible transactions. The stack holds references to
transactions owned by their account's log; popping never deletes history.
"""

from typing import List, Optional

from .transactions import Transaction


class UndoStack:
    """Last-in, first-out history of undoable transactions"""

    def __init__(self):
        self._items: List[Transaction] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def push(self, transaction: Transaction) -> None:
        """Put a transaction on top"""
        self._items.append(transaction)

    def pop(self) -> Optional[Transaction]:
        """Remove and return the top transaction, or None when empty"""
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> Optional[Transaction]:
        """Top transaction without removing it"""
        if not self._items:
            return None
        return self._items[-1]
