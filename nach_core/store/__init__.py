"""Transaction stores."""

from nach_core.store.base import TransactionStore
from nach_core.store.memory import InMemoryTransactionStore

__all__ = ["InMemoryTransactionStore", "TransactionStore"]
