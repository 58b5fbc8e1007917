"""Reset a user's password from the command line.

Usage:
    python -m scripts.reset_password <email> <new_password>
Clears must_change_password and removes outstanding reset tokens.
All imports use mailrelay.*.
"""

import asyncio
import sys

from mailrelay.core.config import get_settings
from mailrelay.domain.value_objects import normalize_email
from mailrelay.infrastructure.persistence.database import dispose_engine, get_session_factory
from mailrelay.infrastructure.persistence.repositories import (
    PasswordResetTokenStore,
    UserRepository,
)


async def reset(email: str, new_password: str) -> bool:
    """Return False when no user has this email."""
    factory = get_session_factory()
    async with factory() as session:
        async with session.begin():
            user_repo = UserRepository(session)
            user = await user_repo.get_by_email(normalize_email(email))
            if user is None:
                return False
            await user_repo.update_password(user, new_password)
            await PasswordResetTokenStore(session).delete_for_user(user.id)
            return True


async def main() -> None:
    """Reset password for the given email."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.reset_password <email> <new_password>",
            file=sys.stderr,
        )
        sys.exit(1)
    email, new_password = sys.argv[1], sys.argv[2]

    settings = get_settings()
    if len(new_password) < settings.min_password_length:
        print(
            f"Password must be at least {settings.min_password_length} characters",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        found = await reset(email, new_password)
    finally:
        await dispose_engine()
    if not found:
        print(f"User not found: {email}", file=sys.stderr)
        sys.exit(1)
    print(f"Password reset for {normalize_email(email)}")


if __name__ == "__main__":
    asyncio.run(main())
