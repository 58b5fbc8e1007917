"""Security primitives: password hashing, session JWTs, token digests."""

from mailrelay.infrastructure.security.jwt import create_session_token, decode_session_token
from mailrelay.infrastructure.security.password import get_password_hash, verify_password
from mailrelay.infrastructure.security.tokens import hash_token

__all__ = [
    "create_session_token",
    "decode_session_token",
    "get_password_hash",
    "hash_token",
    "verify_password",
]
