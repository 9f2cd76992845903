"""
Shared data schemas for the Customer Portal

This package contains common data schemas used across services.
"""

from .account import (
    AccountCreateSchema,
    AccountLoginSchema,
    AccountUpdateSchema,
    AccountResponseSchema,
    ProfileResponseSchema,
    AccountEnvelopeSchema,
)
from .item import (
    ItemCreateSchema,
    ItemUpdateSchema,
    ItemResponseSchema,
    PhotoResponseSchema,
)

__all__ = [
    "AccountCreateSchema",
    "AccountLoginSchema",
    "AccountUpdateSchema",
    "AccountResponseSchema",
    "ProfileResponseSchema",
    "AccountEnvelopeSchema",
    "ItemCreateSchema",
    "ItemUpdateSchema",
    "ItemResponseSchema",
    "PhotoResponseSchema",
]

__version__ = "1.0.0"
