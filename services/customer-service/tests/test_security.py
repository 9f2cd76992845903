"""
Password Hashing Tests
"""

from unittest.mock import patch

import pytest

from shared.utils.security import (
    HashingError,
    hash_password,
    hash_password_async,
    password_too_long,
    verify_password,
    verify_password_async,
)


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("test123", rounds=4)
        assert hashed != "test123"
        assert "test123" not in hashed

    def test_same_password_gives_different_tokens(self):
        first = hash_password("s3cret", rounds=4)
        second = hash_password("s3cret", rounds=4)
        assert first != second
        assert verify_password("s3cret", first)
        assert verify_password("s3cret", second)

    def test_wrong_password_does_not_verify(self):
        hashed = hash_password("s3cret", rounds=4)
        assert verify_password("wrong", hashed) is False

    @pytest.mark.parametrize("corrupt", ["", "not-a-hash", "$2b$04$tooshort"])
    def test_malformed_hash_is_reported_as_mismatch(self, corrupt):
        assert verify_password("s3cret", corrupt) is False

    def test_empty_candidate_does_not_verify(self):
        hashed = hash_password("s3cret", rounds=4)
        assert verify_password("", hashed) is False

    def test_unicode_password(self):
        hashed = hash_password("pässwörd✓", rounds=4)
        assert verify_password("pässwörd✓", hashed)
        assert not verify_password("passwörd✓", hashed)

    def test_primitive_failure_raises_hashing_error(self):
        with patch("shared.utils.security.bcrypt.hashpw", side_effect=MemoryError()):
            with pytest.raises(HashingError):
                hash_password("s3cret", rounds=4)

    def test_password_length_limit(self):
        assert not password_too_long("a" * 72)
        assert password_too_long("a" * 73)
        # multi-byte characters count by encoded length
        assert password_too_long("é" * 37)

    @pytest.mark.asyncio
    async def test_async_wrappers(self):
        hashed = await hash_password_async("s3cret", rounds=4)
        assert await verify_password_async("s3cret", hashed)
        assert not await verify_password_async("nope", hashed)
