from authkit_tokens.persistence.memory.refresh_token_repository import (
    InMemoryRefreshTokenRepository,
)

__all__ = ["InMemoryRefreshTokenRepository"]
