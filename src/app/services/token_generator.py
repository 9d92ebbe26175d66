import hashlib
import secrets

# 32 random bytes, 256 bits of entropy
TOKEN_BYTES = 32


def generate_token() -> str:
    """Return an unguessable URL-safe token for single-use links"""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest stored in place of the raw token"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
