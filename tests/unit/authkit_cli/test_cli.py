"""Unit tests for the authkit CLI."""

import re
import sqlite3
import time

from typer.testing import CliRunner

from authkit_cli.app import app
from authkit_core.token import JwtCodec

runner = CliRunner()

TEST_SECRET = "cli-test-secret"


class TestSecretsGenerate:
    """Tests for `authkit secrets generate`."""

    def test_prints_jwt_secret(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        match = re.search(r"AUTHKIT_JWT_SECRET_KEY=([A-Za-z0-9_-]+)", result.output)
        assert match is not None
        # 64 random bytes -> 86 base64url characters
        assert len(match.group(1)) == 86

    def test_secrets_differ_between_runs(self):
        first = runner.invoke(app, ["secrets", "generate"]).output
        second = runner.invoke(app, ["secrets", "generate"]).output

        assert first != second


class TestDbInit:
    """Tests for `authkit db init`."""

    def test_creates_refresh_tokens_table(self, tmp_path):
        db_path = tmp_path / "authkit.db"

        result = runner.invoke(
            app,
            ["db", "init", "--database-url", f"sqlite+aiosqlite:///{db_path}"],
        )

        assert result.exit_code == 0, result.output
        assert "refresh_tokens" in result.output
        with sqlite3.connect(db_path) as conn:
            tables = {
                row[0]
                for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            }
        assert "refresh_tokens" in tables

    def test_is_idempotent(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'authkit.db'}"

        assert runner.invoke(app, ["db", "init", "--database-url", url]).exit_code == 0
        assert runner.invoke(app, ["db", "init", "--database-url", url]).exit_code == 0

    def test_bad_url_fails(self):
        result = runner.invoke(app, ["db", "init", "--database-url", "nosuchdriver://x"])

        assert result.exit_code == 1
        assert "Schema creation failed" in result.output


class TestTokensInspect:
    """Tests for `authkit tokens inspect`."""

    def setup_method(self):
        self.codec = JwtCodec(TEST_SECRET)

    def test_shows_claims_without_verification(self, monkeypatch):
        monkeypatch.delenv("AUTHKIT_JWT_SECRET_KEY", raising=False)
        token = self.codec.sign({"userId": "user-1"}, expires_in="10m")

        result = runner.invoke(app, ["tokens", "inspect", token])

        assert result.exit_code == 0
        assert "userId" in result.output
        assert "user-1" in result.output
        assert "not verified" in result.output

    def test_verifies_with_secret(self):
        token = self.codec.sign({"userId": "user-1"}, expires_in="10m")

        result = runner.invoke(app, ["tokens", "inspect", token, "--secret", TEST_SECRET])

        assert result.exit_code == 0
        assert "Signature valid." in result.output

    def test_wrong_secret_fails(self):
        token = self.codec.sign({"userId": "user-1"}, expires_in="10m")

        result = runner.invoke(app, ["tokens", "inspect", token, "--secret", "other"])

        assert result.exit_code == 1
        assert "Verification failed" in result.output

    def test_expired_token_is_reported(self):
        token = self.codec.sign({"userId": "user-1"}, expires_in="1ms")
        time.sleep(0.01)

        result = runner.invoke(app, ["tokens", "inspect", token, "--secret", TEST_SECRET])

        assert result.exit_code == 1
        assert "expired" in result.output

    def test_garbage_token_fails(self):
        result = runner.invoke(app, ["tokens", "inspect", "garbage"])

        assert result.exit_code == 1
        assert "Invalid token" in result.output
