"""
Item Service
Catalog item management; independent of the account subsystem
"""

import uuid
from typing import Dict, List, Optional

import structlog

from app.exceptions import NotFoundError
from app.models import Item
from app.utils.store import ItemStore

logger = structlog.get_logger(__name__)


class ItemService:
    """CRUD over catalog items"""

    def __init__(self, store: ItemStore):
        self.store = store

    async def create_item(self, path: Optional[str], fields: Dict[str, Optional[str]]) -> Item:
        """Create an item for a previously uploaded photo"""
        item = Item(id=uuid.uuid4().hex, path=path, **self._descriptive(fields))
        await self.store.insert_item(item)
        logger.info("Item created", item_id=item.id)
        return item

    async def list_items(self) -> List[Item]:
        return await self.store.list_items()

    async def update_item(self, item_id: str, fields: Dict[str, Optional[str]]) -> Item:
        """
        Replace an item's descriptive fields

        Fields left out of the request are cleared, matching a full
        replacement of the descriptive part of the record. The photo path
        is kept.
        """
        item = await self.store.get_item(item_id)
        if item is None:
            raise NotFoundError("Item not found")

        updated = Item(id=item.id, path=item.path, **self._descriptive(fields))
        if not await self.store.update_item(updated):
            raise NotFoundError("Item not found")

        logger.info("Item updated", item_id=item_id)
        return updated

    async def delete_item(self, item_id: str) -> None:
        deleted = await self.store.delete_item(item_id)
        logger.info("Item deleted", item_id=item_id, existed=deleted)

    @staticmethod
    def _descriptive(fields: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        return {name: fields.get(name) for name in Item.DESCRIPTIVE_FIELDS}
