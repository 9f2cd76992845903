"""
Account Service Tests
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.models import Account, AccountView, Profile
from app.services.account_service import AccountService, WRONG_CREDENTIALS


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_account_and_profile(self, account_service, account_store):
        account, profile = await account_service.register("alice", "s3cret", "Alice", "Liddell")

        assert isinstance(account, AccountView)
        assert account.username == "alice"
        assert account.first_name == "Alice"
        assert not hasattr(account, "password_hash")
        assert profile == Profile(username="alice")

        stored = await account_store.get_account("alice")
        assert stored.password_hash != "s3cret"
        assert await account_store.get_profile("alice") == Profile(username="alice")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,password", [
        (None, "s3cret"),
        ("alice", None),
        ("", "s3cret"),
        ("alice", ""),
        ("   ", "s3cret"),
    ])
    async def test_register_requires_credentials(self, account_service, account_store, username, password):
        with pytest.raises(ValidationError):
            await account_service.register(username, password)
        assert await account_store.list_profiles() == []

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_not_part_of_the_username(self, account_service, account_store):
        account, profile = await account_service.register(" alice ", "s3cret")
        assert account.username == profile.username == "alice"
        assert await account_store.get_account("alice") is not None

        with pytest.raises(ConflictError):
            await account_service.register("alice", "other")

        account, _ = await account_service.login("  alice", "s3cret")
        assert account.username == "alice"

    @pytest.mark.asyncio
    async def test_register_rejects_overlong_password(self, account_service):
        with pytest.raises(ValidationError):
            await account_service.register("alice", "x" * 73)

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts_and_keeps_original(self, account_service, account_store):
        await account_service.register("alice", "s3cret", "Alice")
        original = await account_store.get_account("alice")

        with pytest.raises(ConflictError) as exc_info:
            await account_service.register("alice", "other", "Mallory")

        assert exc_info.value.message == "username already exists"
        assert await account_store.get_account("alice") == original
        assert await account_store.list_profiles() == [Profile(username="alice")]
        await account_service.login("alice", "s3cret")

    @pytest.mark.asyncio
    async def test_store_level_duplicate_maps_to_conflict(self, account_service, account_store):
        # Simulates losing the lookup-then-insert race
        with patch.object(account_store, "get_account", AsyncMock(return_value=None)):
            await account_service.register("alice", "s3cret")
            with pytest.raises(ConflictError):
                await account_service.register("alice", "other")

    @pytest.mark.asyncio
    async def test_profile_write_failure_leaves_nothing_behind(self, account_service, account_store):
        with patch.object(account_store, "insert_profile", AsyncMock(side_effect=StoreError("boom"))):
            with pytest.raises(StoreError):
                await account_service.register("alice", "s3cret")

        assert await account_store.get_account("alice") is None
        assert await account_store.get_profile("alice") is None


class TestLogin:
    @pytest.mark.asyncio
    async def test_register_then_login(self, account_service):
        await account_service.register("alice", "s3cret")
        account, profile = await account_service.login("alice", "s3cret")

        assert account.username == "alice"
        assert profile.username == "alice"
        assert "s3cret" not in repr(account)
        assert "$2b$" not in repr(account)

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_fail_identically(self, account_service):
        await account_service.register("alice", "s3cret")

        with pytest.raises(AuthenticationError) as wrong_password:
            await account_service.login("alice", "wrong")
        with pytest.raises(AuthenticationError) as unknown_user:
            await account_service.login("bob", "s3cret")

        assert wrong_password.value.message == unknown_user.value.message == WRONG_CREDENTIALS
        assert wrong_password.value.status_code == unknown_user.value.status_code

    @pytest.mark.asyncio
    async def test_corrupt_hash_fails_like_wrong_password(self, account_service, account_store):
        await account_store.insert_account(Account(username="alice", password_hash="garbage"))
        await account_store.insert_profile(Profile(username="alice"))

        with pytest.raises(AuthenticationError) as exc_info:
            await account_service.login("alice", "s3cret")
        assert exc_info.value.message == WRONG_CREDENTIALS

    @pytest.mark.asyncio
    async def test_login_requires_both_fields(self, account_service):
        with pytest.raises(ValidationError):
            await account_service.login("alice", None)
        with pytest.raises(ValidationError):
            await account_service.login(None, "s3cret")

    @pytest.mark.asyncio
    async def test_login_tolerates_missing_profile(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        await account_store.delete_profile("alice")

        account, profile = await account_service.login("alice", "s3cret")
        assert account.username == "alice"
        assert profile is None


class TestListProfiles:
    @pytest.mark.asyncio
    async def test_lists_profiles_in_registration_order(self, account_service):
        for name in ("carol", "alice", "bob"):
            await account_service.register(name, "pw")

        profiles = await account_service.list_profiles()
        assert [p.username for p in profiles] == ["carol", "alice", "bob"]
        assert all(isinstance(p, Profile) for p in profiles)


class TestUpdate:
    @pytest.mark.asyncio
    async def test_password_change(self, account_service):
        await account_service.register("alice", "s3cret")
        await account_service.update("alice", new_password="n3w")

        with pytest.raises(AuthenticationError):
            await account_service.login("alice", "s3cret")
        account, _ = await account_service.login("alice", "n3w")
        assert account.username == "alice"

    @pytest.mark.asyncio
    async def test_rename_moves_account_and_profile(self, account_service, account_store):
        await account_service.register("alice", "s3cret", "Alice")
        account, profile = await account_service.update("alice", new_username="alicia")

        assert account.username == "alicia"
        assert account.first_name == "Alice"
        assert profile.username == "alicia"
        assert await account_store.get_account("alice") is None
        assert await account_store.get_profile("alice") is None
        assert [p.username for p in await account_service.list_profiles()] == ["alicia"]
        await account_service.login("alicia", "s3cret")

    @pytest.mark.asyncio
    async def test_rename_onto_existing_username_conflicts(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        await account_service.register("bob", "hunter2")

        with pytest.raises(ConflictError):
            await account_service.update("alice", new_username="bob", new_password="changed")

        await account_service.login("alice", "s3cret")
        await account_service.login("bob", "hunter2")
        assert [p.username for p in await account_service.list_profiles()] == ["alice", "bob"]

    @pytest.mark.asyncio
    async def test_rename_to_same_name_is_not_a_conflict(self, account_service):
        await account_service.register("alice", "s3cret")
        account, profile = await account_service.update("alice", new_username="alice")
        assert account.username == profile.username == "alice"

    @pytest.mark.asyncio
    async def test_rename_target_is_stripped(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        await account_service.register("bob", "hunter2")

        with pytest.raises(ConflictError):
            await account_service.update("alice", new_username=" bob ")

        account, profile = await account_service.update("alice", new_username=" alicia ")
        assert account.username == profile.username == "alicia"

    @pytest.mark.asyncio
    async def test_display_fields_update(self, account_service):
        await account_service.register("alice", "s3cret", "Alice", "Liddell")
        account, _ = await account_service.update("alice", last_name="Hargreaves")
        assert account.first_name == "Alice"
        assert account.last_name == "Hargreaves"

    @pytest.mark.asyncio
    async def test_blank_fields_are_ignored(self, account_service):
        await account_service.register("alice", "s3cret")
        account, _ = await account_service.update("alice", new_username="", new_password="")
        assert account.username == "alice"
        await account_service.login("alice", "s3cret")

    @pytest.mark.asyncio
    async def test_update_missing_account(self, account_service):
        with pytest.raises(NotFoundError):
            await account_service.update("ghost", new_password="pw")

    @pytest.mark.asyncio
    async def test_update_account_without_profile(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        await account_store.delete_profile("alice")

        with pytest.raises(NotFoundError):
            await account_service.update("alice", new_password="n3w")
        await account_service.login("alice", "s3cret")

    @pytest.mark.asyncio
    async def test_store_level_rename_collision_maps_to_conflict(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        with patch.object(
            account_store, "update_account", AsyncMock(side_effect=DuplicateKeyError("dup"))
        ):
            with pytest.raises(ConflictError):
                await account_service.update("alice", new_username="bob")


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_then_login_fails(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        await account_service.delete("alice")

        with pytest.raises(AuthenticationError):
            await account_service.login("alice", "s3cret")
        assert await account_store.get_profile("alice") is None

    @pytest.mark.asyncio
    async def test_second_delete_is_a_noop(self, account_service):
        await account_service.register("alice", "s3cret")
        await account_service.delete("alice")
        await account_service.delete("alice")

    @pytest.mark.asyncio
    async def test_delete_removes_orphan_profile(self, account_service, account_store):
        await account_store.insert_profile(Profile(username="orphan"))
        await account_service.delete("orphan")
        assert await account_store.list_profiles() == []

    @pytest.mark.asyncio
    async def test_delete_surfaces_store_errors(self, account_service, account_store):
        await account_service.register("alice", "s3cret")
        with patch.object(account_store, "delete_account", AsyncMock(side_effect=StoreError("down"))):
            with pytest.raises(StoreError):
                await account_service.delete("alice")


class TestInjection:
    @pytest.mark.asyncio
    async def test_service_uses_the_store_it_was_given(self, account_store):
        service = AccountService(account_store, bcrypt_rounds=4)
        other = AccountService(type(account_store)(), bcrypt_rounds=4)

        await service.register("alice", "s3cret")
        assert [p.username for p in await service.list_profiles()] == ["alice"]
        assert await other.list_profiles() == []
