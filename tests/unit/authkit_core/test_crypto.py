"""Unit tests for CryptoTokenGenerator."""

import re
import uuid

import pytest

from authkit_core.crypto import CryptoTokenGenerator


class TestCryptoTokenGenerator:
    """Tests for opaque token generation."""

    def setup_method(self):
        self.generator = CryptoTokenGenerator()

    def test_base64url_token_is_url_safe_and_unpadded(self):
        token = self.generator.generate_base64url_token(40)

        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)
        assert "=" not in token
        # 40 bytes -> ceil(40 * 4 / 3) = 54 characters
        assert len(token) == 54

    def test_base64url_tokens_are_unique(self):
        tokens = {self.generator.generate_base64url_token(40) for _ in range(100)}
        assert len(tokens) == 100

    def test_hex_token_length(self):
        token = self.generator.generate_hex_token(16)

        assert re.fullmatch(r"[0-9a-f]{32}", token)

    def test_uuid_is_valid(self):
        value = self.generator.generate_uuid()

        assert str(uuid.UUID(value)) == value

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_length_raises(self, length):
        with pytest.raises(ValueError, match="must be positive"):
            self.generator.generate_base64url_token(length)
        with pytest.raises(ValueError, match="must be positive"):
            self.generator.generate_hex_token(length)
