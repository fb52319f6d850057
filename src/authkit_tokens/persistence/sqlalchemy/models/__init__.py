from authkit_tokens.persistence.sqlalchemy.models.refresh_token_model import (
    RefreshTokenModel,
)

__all__ = ["RefreshTokenModel"]
