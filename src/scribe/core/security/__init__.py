"""Security utilities - access tokens and input validators."""

from src.scribe.core.security.crypto import (
    TokenType,
    create_access_token,
    decode_token,
)
from src.scribe.core.security.validators import (
    COMMIT_HASH_PATTERN,
    REPO_URL_PATTERN,
    is_commit_hash,
    normalize_repo_url,
    parse_repo_url,
    validate_commit_count,
)

__all__ = [
    # Crypto
    "TokenType",
    "create_access_token",
    "decode_token",
    # Validators
    "COMMIT_HASH_PATTERN",
    "REPO_URL_PATTERN",
    "is_commit_hash",
    "normalize_repo_url",
    "parse_repo_url",
    "validate_commit_count",
]
