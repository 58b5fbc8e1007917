"""User repository with authentication and password helpers."""

from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.enums import UserRole
from mailrelay.domain.exceptions import ConflictException, EmailAlreadyRegisteredException
from mailrelay.infrastructure.persistence.models.user import User
from mailrelay.infrastructure.persistence.repositories.base import BaseRepository
from mailrelay.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
# Computed on first use in a thread to avoid blocking the event loop at import.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid Argon2 hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


class UserRepository(BaseRepository[User]):
    """User repository. Authenticate, create_user, update_password, listing."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    def _conflict(self) -> ConflictException:
        return EmailAlreadyRegisteredException()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when email and password match; same cost when the email is unknown."""
        user = await self.get_by_email(email)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            return None
        return user

    async def create_user(
        self,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
        must_change_password: bool = False,
    ) -> User:
        """Create user; raise EmailAlreadyRegisteredException on unique constraint violation."""
        user = User(
            email=email,
            password_hash=password_hash,
            role=role.value,
            must_change_password=must_change_password,
        )
        return await self.create(user)

    async def update_password(self, user: User, new_password: str) -> User:
        """Replace the hash and clear must_change_password."""
        user.password_hash = await asyncio.to_thread(get_password_hash, new_password)
        user.must_change_password = False
        return await self.update(user)
