"""ID and secret generators (CUID, API token secrets, link tokens)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

API_TOKEN_LENGTH = 64
_API_TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_api_token_secret() -> str:
    """Return a 64-character alphanumeric secret for an API token."""
    return "".join(secrets.choice(_API_TOKEN_ALPHABET) for _ in range(API_TOKEN_LENGTH))


def generate_url_token() -> str:
    """Return a URL-safe secret for verification and reset links."""
    return secrets.token_urlsafe(32)
