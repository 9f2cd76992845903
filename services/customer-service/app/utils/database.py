"""
Database Connection Utilities
PostgreSQL-backed account and item stores built on an asyncpg pool
"""

import asyncio
from contextlib import asynccontextmanager
from typing import List, Optional, Tuple

import asyncpg
import structlog
from asyncpg import Connection, Pool

from app.config import Settings
from app.exceptions import DuplicateKeyError, StoreError
from app.models import Account, Item, Profile
from app.utils.memory_store import InMemoryAccountStore, InMemoryItemStore
from app.utils.store import AccountStore, ItemStore

logger = structlog.get_logger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id BIGSERIAL PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        first_name TEXT,
        last_name TEXT,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id BIGSERIAL PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS items (
        seq BIGSERIAL PRIMARY KEY,
        id TEXT NOT NULL UNIQUE,
        path TEXT,
        first_name TEXT,
        last_name TEXT,
        gender TEXT,
        membership TEXT,
        part TEXT,
        age TEXT
    )
    """,
)

_STORE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@asynccontextmanager
async def translate_errors(operation: str):
    """Map driver errors onto the service error taxonomy"""
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise DuplicateKeyError(f"{operation}: duplicate key") from e
    except _STORE_FAILURES as e:
        logger.error("Database operation failed", operation=operation, error=str(e))
        raise StoreError(f"{operation} failed") from e


def _rows_affected(status: str) -> int:
    # asyncpg returns command tags such as "UPDATE 1" / "DELETE 0"
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0


class _PostgresBase:
    def __init__(self, pool: Pool, conn: Optional[Connection] = None):
        self.pool = pool
        self._conn = conn

    @asynccontextmanager
    async def _connection(self):
        if self._conn is not None:
            yield self._conn
        else:
            async with self.pool.acquire() as conn:
                yield conn


class PostgresAccountStore(_PostgresBase):
    """Account and profile tables; uniqueness enforced by UNIQUE(username)"""

    @asynccontextmanager
    async def transaction(self):
        async with translate_errors("transaction"):
            async with self._connection() as conn:
                async with conn.transaction():
                    yield PostgresAccountStore(self.pool, conn)

    async def ping(self) -> None:
        async with translate_errors("ping"):
            async with self._connection() as conn:
                await conn.fetchval("SELECT 1")

    # ===== ACCOUNT OPERATIONS =====

    @staticmethod
    def _to_account(row) -> Account:
        return Account(
            username=row['username'],
            password_hash=row['password_hash'],
            first_name=row['first_name'],
            last_name=row['last_name'],
        )

    async def get_account(self, username: str) -> Optional[Account]:
        async with translate_errors("get_account"):
            async with self._connection() as conn:
                row = await conn.fetchrow(
                    """
                    SELECT username, password_hash, first_name, last_name
                    FROM accounts WHERE username = $1
                    """,
                    username,
                )
        return self._to_account(row) if row else None

    async def insert_account(self, account: Account) -> None:
        async with translate_errors("insert_account"):
            async with self._connection() as conn:
                await conn.execute(
                    """
                    INSERT INTO accounts (username, password_hash, first_name, last_name)
                    VALUES ($1, $2, $3, $4)
                    """,
                    account.username,
                    account.password_hash,
                    account.first_name,
                    account.last_name,
                )

    async def update_account(self, username: str, account: Account) -> bool:
        async with translate_errors("update_account"):
            async with self._connection() as conn:
                result = await conn.execute(
                    """
                    UPDATE accounts
                    SET username = $1, password_hash = $2, first_name = $3,
                        last_name = $4, updated_at = CURRENT_TIMESTAMP
                    WHERE username = $5
                    """,
                    account.username,
                    account.password_hash,
                    account.first_name,
                    account.last_name,
                    username,
                )
        return _rows_affected(result) == 1

    async def delete_account(self, username: str) -> bool:
        async with translate_errors("delete_account"):
            async with self._connection() as conn:
                result = await conn.execute("DELETE FROM accounts WHERE username = $1", username)
        return _rows_affected(result) > 0

    # ===== PROFILE OPERATIONS =====

    async def get_profile(self, username: str) -> Optional[Profile]:
        async with translate_errors("get_profile"):
            async with self._connection() as conn:
                row = await conn.fetchrow("SELECT username FROM profiles WHERE username = $1", username)
        return Profile(username=row['username']) if row else None

    async def list_profiles(self) -> List[Profile]:
        async with translate_errors("list_profiles"):
            async with self._connection() as conn:
                rows = await conn.fetch("SELECT username FROM profiles ORDER BY id")
        return [Profile(username=row['username']) for row in rows]

    async def insert_profile(self, profile: Profile) -> None:
        async with translate_errors("insert_profile"):
            async with self._connection() as conn:
                await conn.execute("INSERT INTO profiles (username) VALUES ($1)", profile.username)

    async def update_profile(self, username: str, profile: Profile) -> bool:
        async with translate_errors("update_profile"):
            async with self._connection() as conn:
                result = await conn.execute(
                    "UPDATE profiles SET username = $1 WHERE username = $2",
                    profile.username,
                    username,
                )
        return _rows_affected(result) == 1

    async def delete_profile(self, username: str) -> bool:
        async with translate_errors("delete_profile"):
            async with self._connection() as conn:
                result = await conn.execute("DELETE FROM profiles WHERE username = $1", username)
        return _rows_affected(result) > 0


class PostgresItemStore(_PostgresBase):
    """Catalog items table"""

    _COLUMNS = "id, path, first_name, last_name, gender, membership, part, age"

    async def insert_item(self, item: Item) -> None:
        async with translate_errors("insert_item"):
            async with self._connection() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO items ({self._COLUMNS})
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                    """,
                    item.id, item.path, item.first_name, item.last_name,
                    item.gender, item.membership, item.part, item.age,
                )

    async def get_item(self, item_id: str) -> Optional[Item]:
        async with translate_errors("get_item"):
            async with self._connection() as conn:
                row = await conn.fetchrow(f"SELECT {self._COLUMNS} FROM items WHERE id = $1", item_id)
        return Item(**dict(row)) if row else None

    async def list_items(self) -> List[Item]:
        async with translate_errors("list_items"):
            async with self._connection() as conn:
                rows = await conn.fetch(f"SELECT {self._COLUMNS} FROM items ORDER BY seq")
        return [Item(**dict(row)) for row in rows]

    async def update_item(self, item: Item) -> bool:
        async with translate_errors("update_item"):
            async with self._connection() as conn:
                result = await conn.execute(
                    """
                    UPDATE items
                    SET path = $2, first_name = $3, last_name = $4, gender = $5,
                        membership = $6, part = $7, age = $8
                    WHERE id = $1
                    """,
                    item.id, item.path, item.first_name, item.last_name,
                    item.gender, item.membership, item.part, item.age,
                )
        return _rows_affected(result) == 1

    async def delete_item(self, item_id: str) -> bool:
        async with translate_errors("delete_item"):
            async with self._connection() as conn:
                result = await conn.execute("DELETE FROM items WHERE id = $1", item_id)
        return _rows_affected(result) > 0


async def create_pool(settings: Settings) -> Pool:
    """Create the asyncpg pool and make sure the schema exists"""
    try:
        pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )
        logger.info("Database pool created", database=settings.db_name)

        async with pool.acquire() as conn:
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
        logger.info("Database schema ensured")
        return pool

    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise


async def init_stores(settings: Settings) -> Tuple[AccountStore, ItemStore, Optional[Pool]]:
    """Build the stores for the configured backend"""
    if settings.store_backend == "memory":
        logger.info("Using in-memory stores")
        return InMemoryAccountStore(), InMemoryItemStore(), None

    pool = await create_pool(settings)
    return PostgresAccountStore(pool), PostgresItemStore(pool), pool


async def close_pool(pool: Optional[Pool]) -> None:
    """Close database connection pool"""
    if pool is not None:
        await pool.close()
        logger.info("Database pool closed")
