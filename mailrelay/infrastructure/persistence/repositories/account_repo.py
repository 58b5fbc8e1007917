"""Account repository: mailbox credentials and their lookup by address."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import ConflictException, EmailAlreadyRegisteredException
from mailrelay.infrastructure.persistence.models.account import Account
from mailrelay.infrastructure.persistence.models.alias import Alias
from mailrelay.infrastructure.persistence.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Account repository. Deleting an account removes its aliases first."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Account)

    def _conflict(self) -> ConflictException:
        return EmailAlreadyRegisteredException()

    async def get_by_email(self, email: str) -> Account | None:
        result = await self.db.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()

    async def get_active_by_email(self, email: str) -> Account | None:
        result = await self.db.execute(
            select(Account).where(Account.email == email, Account.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def _on_before_delete(self, obj: Account) -> None:
        await self.db.execute(
            delete(Alias)
            .where(Alias.account_id == obj.id)
            .execution_options(synchronize_session=False)
        )

    async def create_account(
        self,
        email: str,
        display_name: str,
        encrypted_password: str,
        is_active: bool,
        is_public: bool,
        owner_id: str | None,
    ) -> Account:
        """Create account; raise EmailAlreadyRegisteredException on unique constraint violation."""
        return await self.create(
            Account(
                email=email,
                display_name=display_name,
                encrypted_password=encrypted_password,
                is_active=is_active,
                is_public=is_public,
                owner_id=owner_id,
            )
        )
