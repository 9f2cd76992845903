"""
Shared utilities for the Customer Portal

This package contains common utilities used across services.
"""

from .logger import setup_logging, get_logger, get_request_logger
from .security import (
    HashingError,
    hash_password,
    verify_password,
    hash_password_async,
    verify_password_async,
    password_too_long,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_request_logger",
    "HashingError",
    "hash_password",
    "verify_password",
    "hash_password_async",
    "verify_password_async",
    "password_too_long",
]

__version__ = "1.0.0"
