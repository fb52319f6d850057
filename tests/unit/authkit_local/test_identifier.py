"""Unit tests for identifier parsing."""

import pytest

from authkit_core.exceptions import AuthDomainError, DomainErrorCode, ErrorKind
from authkit_local import IdentifierType, parse_identifier


class TestParseIdentifier:
    """Tests for parse_identifier."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("user@example.com", "user@example.com"),
            ("  User@Example.COM ", "user@example.com"),
            ("first.last+tag@sub.example.org", "first.last+tag@sub.example.org"),
        ],
    )
    def test_email_is_normalized(self, value, expected):
        identifier = parse_identifier(value)

        assert identifier.type == IdentifierType.EMAIL
        assert identifier.value == expected
        assert str(identifier) == expected

    @pytest.mark.parametrize("value", ["+4915112345678", "+12025550123", " +33612345678 "])
    def test_e164_phone(self, value):
        identifier = parse_identifier(value)

        assert identifier.type == IdentifierType.PHONE
        assert identifier.value == value.strip()

    @pytest.mark.parametrize(
        "value",
        ["", "not-an-identifier", "user@", "@example.com", "015112345678", "+0123", "+1234567890123456"],
    )
    def test_invalid_identifier_raises(self, value):
        with pytest.raises(AuthDomainError) as exc_info:
            parse_identifier(value)

        assert exc_info.value.kind == ErrorKind.DOMAIN
        assert exc_info.value.code == DomainErrorCode.INVALID_IDENTIFIER.value
