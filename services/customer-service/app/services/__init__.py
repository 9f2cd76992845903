"""
Business services for customer service
"""

from .account_service import AccountService
from .item_service import ItemService

__all__ = ["AccountService", "ItemService"]
