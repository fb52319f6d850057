"""Unit tests for BcryptHasher."""

import pytest

from authkit_core.hasher import BcryptHasher


class TestBcryptHasher:
    """Tests for password hashing and comparison."""

    def setup_method(self):
        """Set up test fixtures (low cost factor keeps tests fast)."""
        self.hasher = BcryptHasher(rounds=4)

    @pytest.mark.asyncio
    async def test_hash_is_bcrypt_format(self):
        hashed = await self.hasher.hash("my_secure_password")

        assert hashed.startswith("$2b$04$")
        assert hashed != "my_secure_password"

    @pytest.mark.asyncio
    async def test_hash_is_salted(self):
        """Test that the same password hashes differently each time."""
        first = await self.hasher.hash("my_secure_password")
        second = await self.hasher.hash("my_secure_password")

        assert first != second

    @pytest.mark.asyncio
    async def test_compare_matching_password(self):
        hashed = await self.hasher.hash("my_secure_password")

        assert await self.hasher.compare("my_secure_password", hashed) is True

    @pytest.mark.asyncio
    async def test_compare_wrong_password(self):
        hashed = await self.hasher.hash("my_secure_password")

        assert await self.hasher.compare("wrong_password", hashed) is False

    @pytest.mark.asyncio
    async def test_compare_malformed_hash_returns_false(self):
        """Test that a corrupt stored hash is a mismatch, not an error."""
        assert await self.hasher.compare("password", "not-a-bcrypt-hash") is False
