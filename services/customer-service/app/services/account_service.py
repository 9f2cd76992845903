"""
Account Service
Registration, login, update and deletion of accounts and their profiles
"""

from typing import List, Optional, Tuple

import structlog

from shared.utils.security import (
    DEFAULT_BCRYPT_ROUNDS,
    hash_password_async,
    password_too_long,
    verify_password_async,
)

from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from app.models import Account, AccountView, Profile
from app.utils.store import AccountStore

logger = structlog.get_logger(__name__)

CREDENTIALS_REQUIRED = "username and password are required"
USERNAME_EXISTS = "username already exists"
WRONG_CREDENTIALS = "username or password is wrong"
PASSWORD_TOO_LONG = "password must be at most 72 bytes"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _missing_credentials(username: Optional[str], password: Optional[str]) -> bool:
    # usernames are stored stripped; passwords are taken verbatim
    return _blank(username) or not password


class AccountService:
    """
    Account orchestration over an injected store.

    This is the only place that decides when a password gets hashed.
    Account and Profile writes always go through one store transaction.
    """

    def __init__(self, store: AccountStore, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    async def _hash(self, password: str) -> str:
        if password_too_long(password):
            raise ValidationError(PASSWORD_TOO_LONG)
        return await hash_password_async(password, self.bcrypt_rounds)

    async def register(
        self,
        username: Optional[str],
        password: Optional[str],
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Tuple[AccountView, Profile]:
        """
        Register new account

        Args:
            username: Unique account name
            password: Plain text password; only its hash is stored
            first_name: Optional display name
            last_name: Optional display name

        Returns:
            tuple: Redacted account and its profile

        Raises:
            ValidationError: Missing username or password
            ConflictError: Username already taken
            StoreError: Persistence failure; nothing was written
        """
        if _missing_credentials(username, password):
            raise ValidationError(CREDENTIALS_REQUIRED)
        username = username.strip()

        if await self.store.get_account(username) is not None:
            raise ConflictError(USERNAME_EXISTS)

        account = Account(
            username=username,
            password_hash=await self._hash(password),
            first_name=first_name,
            last_name=last_name,
        )
        profile = Profile(username=username)

        try:
            async with self.store.transaction() as tx:
                await tx.insert_account(account)
                await tx.insert_profile(profile)
        except DuplicateKeyError:
            # lost a race with a concurrent registration
            logger.info("Registration collided at the store", username=username)
            raise ConflictError(USERNAME_EXISTS)

        logger.info("Account registered", username=username)
        return AccountView.from_account(account), profile

    async def login(
        self,
        username: Optional[str],
        password: Optional[str],
    ) -> Tuple[AccountView, Optional[Profile]]:
        """
        Check credentials and return the account with its profile

        Unknown usernames and wrong passwords raise the same error.
        No session or token is issued.
        """
        if _missing_credentials(username, password):
            raise ValidationError(CREDENTIALS_REQUIRED)
        username = username.strip()

        account = await self.store.get_account(username)
        if account is None:
            logger.info("Login failed", username=username)
            raise AuthenticationError(WRONG_CREDENTIALS)

        if not await verify_password_async(password, account.password_hash):
            logger.info("Login failed", username=username)
            raise AuthenticationError(WRONG_CREDENTIALS)

        profile = await self.store.get_profile(username)
        if profile is None:
            logger.warning(
                "Data integrity violation: account has no profile",
                username=username,
                operation="login",
            )

        logger.info("Login succeeded", username=username)
        return AccountView.from_account(account), profile

    async def list_profiles(self) -> List[Profile]:
        """Return every public profile in store order"""
        return await self.store.list_profiles()

    async def get_account(self, username: str) -> Tuple[AccountView, Optional[Profile]]:
        """Get one account and its profile"""
        account = await self.store.get_account(username)
        if account is None:
            raise NotFoundError("Account not found")
        profile = await self.store.get_profile(username)
        if profile is None:
            logger.warning(
                "Data integrity violation: account has no profile",
                username=username,
                operation="get_account",
            )
        return AccountView.from_account(account), profile

    async def update(
        self,
        username: str,
        new_username: Optional[str] = None,
        new_password: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> Tuple[AccountView, Profile]:
        """
        Update an account and keep its profile in step

        Args:
            username: Current username
            new_username: Rename target; must not belong to another account
            new_password: Replaces the stored hash
            first_name: New display name, if given
            last_name: New display name, if given

        Returns:
            tuple: Updated redacted account and profile

        Raises:
            NotFoundError: Account or profile is missing
            ConflictError: Rename target already taken
            StoreError: Persistence failure; nothing was written
        """
        account = await self.store.get_account(username)
        profile = await self.store.get_profile(username)
        if account is None or profile is None:
            if account is not None or profile is not None:
                logger.warning(
                    "Data integrity violation: account and profile out of step",
                    username=username,
                    has_account=account is not None,
                    has_profile=profile is not None,
                )
            raise NotFoundError("Account not found")

        changes = {}
        if not _blank(new_username):
            new_username = new_username.strip()
        renamed = not _blank(new_username) and new_username != username
        if renamed:
            if await self.store.get_account(new_username) is not None:
                raise ConflictError(USERNAME_EXISTS)
            changes['username'] = new_username
        if new_password:
            changes['password_hash'] = await self._hash(new_password)
        if first_name is not None:
            changes['first_name'] = first_name
        if last_name is not None:
            changes['last_name'] = last_name

        updated_account = account.copy(**changes)
        updated_profile = profile.copy(username=updated_account.username)

        try:
            async with self.store.transaction() as tx:
                found_account = await tx.update_account(username, updated_account)
                found_profile = await tx.update_profile(username, updated_profile)
                if not (found_account and found_profile):
                    # deleted between the read and the write
                    raise NotFoundError("Account not found")
        except DuplicateKeyError:
            raise ConflictError(USERNAME_EXISTS)

        logger.info(
            "Account updated",
            username=username,
            renamed_to=new_username if renamed else None,
            password_changed='password_hash' in changes,
        )
        return AccountView.from_account(updated_account), updated_profile

    async def delete(self, username: str) -> None:
        """
        Delete an account and its profile

        Each deletion runs on its own; a record that is already gone is
        skipped rather than reported.
        """
        account_deleted = await self.store.delete_account(username)
        profile_deleted = await self.store.delete_profile(username)
        if account_deleted != profile_deleted:
            logger.warning(
                "Deleted a partial account/profile pair",
                username=username,
                account_deleted=account_deleted,
                profile_deleted=profile_deleted,
            )
        logger.info("Account deleted", username=username, existed=account_deleted or profile_deleted)
