"""Password hashing (Argon2id via argon2-cffi).

Hashes are self-describing PHC strings carrying their own salt and cost
parameters, so verification needs no extra configuration.
"""

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher(type=Type.ID)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return _hasher.verify(hashed_password, plain_password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def get_password_hash(password: str) -> str:
    """Return an Argon2id hash of password with a fresh random salt."""
    return _hasher.hash(password)
