"""Hashing for bearer secrets stored at rest (API tokens, signup and reset links)."""

import hashlib


def hash_token(token: str) -> str:
    """Return the hex SHA-256 digest used as the lookup key for a raw token."""
    return hashlib.sha256(token.encode()).hexdigest()
