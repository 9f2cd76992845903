"""
Utility modules for customer service
"""

from .memory_store import InMemoryAccountStore, InMemoryItemStore
from .store import AccountStore, ItemStore

__all__ = [
    "AccountStore",
    "ItemStore",
    "InMemoryAccountStore",
    "InMemoryItemStore",
]
