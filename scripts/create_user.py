"""Create a user with a role (e.g. the first admin).

Usage:
    python -m scripts.create_user <email> <password> [admin|dev|user] [--must-change-password]
All imports use mailrelay.*.
"""

import asyncio
import sys

from mailrelay.core.config import get_settings
from mailrelay.domain.enums import UserRole
from mailrelay.infrastructure.persistence.bootstrap import create_user_with_role
from mailrelay.infrastructure.persistence.database import dispose_engine

USAGE = (
    "Usage: python -m scripts.create_user <email> <password> "
    "[admin|dev|user] [--must-change-password]"
)


async def main() -> None:
    """Create the user; exits non-zero if the email is taken or arguments are invalid."""
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    must_change = "--must-change-password" in sys.argv[1:]
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    email, password = args[0], args[1]
    role_name = args[2] if len(args) > 2 else UserRole.USER.value
    if role_name not in UserRole.values():
        print(f"Unknown role: {role_name}", file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    if len(password) < settings.min_password_length:
        print(
            f"Password must be at least {settings.min_password_length} characters",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        user = await create_user_with_role(email, password, UserRole(role_name), must_change)
    finally:
        await dispose_engine()
    if user is None:
        print(f"User already exists: {email}", file=sys.stderr)
        sys.exit(1)
    print(f"Created user: {user.id} ({user.email}) role={user.role}")


if __name__ == "__main__":
    asyncio.run(main())
