"""
Record models for the customer service
"""

from .account import Account, AccountView, Item, Profile

__all__ = ["Account", "AccountView", "Item", "Profile"]
