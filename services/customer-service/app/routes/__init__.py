"""
API routes for customer service
"""

from . import accounts, health, items

__all__ = ["accounts", "health", "items"]
