"""
In-memory stores
Dict-backed account and item stores for local runs and tests
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Optional

import structlog

from app.exceptions import DuplicateKeyError
from app.models import Account, Item, Profile

logger = structlog.get_logger(__name__)


def _rekey(records: Dict[str, object], old_key: str, new_key: str, value) -> Dict[str, object]:
    # rebuild so a renamed record keeps its position in listing order
    return {
        (new_key if key == old_key else key): (value if key == old_key else record)
        for key, record in records.items()
    }


class InMemoryAccountStore:
    """
    Account store held in process memory.

    Records are copied on the way in and out so callers never share
    mutable state with the store. None of the methods suspend, so a
    transaction body made only of store calls runs without interleaving.
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._profiles: Dict[str, Profile] = {}

    @asynccontextmanager
    async def transaction(self):
        accounts, profiles = dict(self._accounts), dict(self._profiles)
        try:
            yield self
        except BaseException:
            self._accounts, self._profiles = accounts, profiles
            logger.debug("In-memory transaction rolled back")
            raise

    async def ping(self) -> None:
        return None

    # ===== ACCOUNT OPERATIONS =====

    async def get_account(self, username: str) -> Optional[Account]:
        account = self._accounts.get(username)
        return account.copy() if account else None

    async def insert_account(self, account: Account) -> None:
        if account.username in self._accounts:
            raise DuplicateKeyError(f"Account '{account.username}' already exists")
        self._accounts[account.username] = account.copy()

    async def update_account(self, username: str, account: Account) -> bool:
        if username not in self._accounts:
            return False
        if account.username != username and account.username in self._accounts:
            raise DuplicateKeyError(f"Account '{account.username}' already exists")
        self._accounts = _rekey(self._accounts, username, account.username, account.copy())
        return True

    async def delete_account(self, username: str) -> bool:
        return self._accounts.pop(username, None) is not None

    # ===== PROFILE OPERATIONS =====

    async def get_profile(self, username: str) -> Optional[Profile]:
        profile = self._profiles.get(username)
        return profile.copy() if profile else None

    async def list_profiles(self) -> List[Profile]:
        return [profile.copy() for profile in self._profiles.values()]

    async def insert_profile(self, profile: Profile) -> None:
        if profile.username in self._profiles:
            raise DuplicateKeyError(f"Profile '{profile.username}' already exists")
        self._profiles[profile.username] = profile.copy()

    async def update_profile(self, username: str, profile: Profile) -> bool:
        if username not in self._profiles:
            return False
        if profile.username != username and profile.username in self._profiles:
            raise DuplicateKeyError(f"Profile '{profile.username}' already exists")
        self._profiles = _rekey(self._profiles, username, profile.username, profile.copy())
        return True

    async def delete_profile(self, username: str) -> bool:
        return self._profiles.pop(username, None) is not None


class InMemoryItemStore:
    """Item store held in process memory"""

    def __init__(self):
        self._items: Dict[str, Item] = {}

    async def insert_item(self, item: Item) -> None:
        if item.id in self._items:
            raise DuplicateKeyError(f"Item '{item.id}' already exists")
        self._items[item.id] = Item(**item.to_dict())

    async def get_item(self, item_id: str) -> Optional[Item]:
        item = self._items.get(item_id)
        return Item(**item.to_dict()) if item else None

    async def list_items(self) -> List[Item]:
        return [Item(**item.to_dict()) for item in self._items.values()]

    async def update_item(self, item: Item) -> bool:
        if item.id not in self._items:
            return False
        self._items[item.id] = Item(**item.to_dict())
        return True

    async def delete_item(self, item_id: str) -> bool:
        return self._items.pop(item_id, None) is not None
