"""
Store Interfaces
Persistence abstractions consumed by the account and item services
"""

from __future__ import annotations

from typing import AsyncContextManager, List, Optional, Protocol

from app.models import Account, Item, Profile


class AccountStore(Protocol):
    """
    Keyed-by-username persistence for accounts and their profiles.

    Implementations are responsible for:
    - Enforcing username uniqueness at the storage layer, raising
      `DuplicateKeyError` on a colliding insert or rename.
    - Returning None (never raising) for lookups on missing keys.
    - Raising `StoreError` for any other persistence failure.
    """

    def transaction(self) -> AsyncContextManager["AccountStore"]:
        """Yield a store whose writes commit together or not at all."""

        ...

    async def get_account(self, username: str) -> Optional[Account]:
        ...

    async def insert_account(self, account: Account) -> None:
        ...

    async def update_account(self, username: str, account: Account) -> bool:
        """
        Replace the account currently stored under `username`.

        `account.username` may differ from `username`, which renames the key.
        Returns False when nothing is stored under `username`.
        """

        ...

    async def delete_account(self, username: str) -> bool:
        ...

    async def get_profile(self, username: str) -> Optional[Profile]:
        ...

    async def list_profiles(self) -> List[Profile]:
        """Return all profiles in store (insertion) order."""

        ...

    async def insert_profile(self, profile: Profile) -> None:
        ...

    async def update_profile(self, username: str, profile: Profile) -> bool:
        ...

    async def delete_profile(self, username: str) -> bool:
        ...

    async def ping(self) -> None:
        """Raise `StoreError` when the backing store is unreachable."""

        ...


class ItemStore(Protocol):
    """Persistence for catalog items, keyed by a system-assigned id."""

    async def insert_item(self, item: Item) -> None:
        ...

    async def get_item(self, item_id: str) -> Optional[Item]:
        ...

    async def list_items(self) -> List[Item]:
        ...

    async def update_item(self, item: Item) -> bool:
        ...

    async def delete_item(self, item_id: str) -> bool:
        ...
