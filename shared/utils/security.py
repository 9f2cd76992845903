"""
Security utilities for the Customer Portal

Password hashing and verification with bcrypt.
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt ignores (or, in recent releases, rejects) input past this length
BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 12


class HashingError(Exception):
    """The hashing primitive itself failed"""


def password_too_long(password: str) -> bool:
    """Check whether a password exceeds what bcrypt can hash"""
    return len(password.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash password using bcrypt

    A fresh salt is generated on every call and embedded in the result,
    so hashing the same password twice gives two different tokens.

    Args:
        password: Plain text password
        rounds: bcrypt work factor

    Returns:
        Hash token safe to persist

    Raises:
        HashingError: If bcrypt fails to produce a hash
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')
    except Exception as e:
        logger.error(f"Failed to hash password: {e}")
        raise HashingError("Password hashing failed") from e


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify password against hash

    A malformed hash token is reported exactly like a wrong password.

    Args:
        password: Candidate plain text password
        hashed_password: Stored hash token

    Returns:
        True if password matches, False otherwise
    """
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification rejected stored hash: {type(e).__name__}")
        return False


async def hash_password_async(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash password in thread pool to avoid blocking the event loop"""
    return await asyncio.to_thread(hash_password, password, rounds)


async def verify_password_async(password: str, hashed_password: str) -> bool:
    """Verify password in thread pool to avoid blocking the event loop"""
    return await asyncio.to_thread(verify_password, password, hashed_password)
