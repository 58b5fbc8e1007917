"""Alias repository. Reads are joined with the parent account."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.domain.exceptions import ConflictException, EmailAlreadyRegisteredException
from mailrelay.infrastructure.persistence.models.account import Account
from mailrelay.infrastructure.persistence.models.alias import Alias
from mailrelay.infrastructure.persistence.repositories.base import BaseRepository


class AliasRepository(BaseRepository[Alias]):
    """Alias repository. get_with_account and list_with_accounts return (Alias, Account) pairs."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Alias)

    def _conflict(self) -> ConflictException:
        return EmailAlreadyRegisteredException()

    async def get_by_email(self, alias_email: str) -> Alias | None:
        result = await self.db.execute(
            select(Alias).where(Alias.alias_email == alias_email)
        )
        return result.scalar_one_or_none()

    async def get_with_account(self, alias_id: str) -> tuple[Alias, Account] | None:
        result = await self.db.execute(
            select(Alias, Account)
            .join(Account, Alias.account_id == Account.id)
            .where(Alias.id == alias_id)
        )
        row = result.one_or_none()
        return (row[0], row[1]) if row else None

    async def get_active_with_account_by_email(
        self, alias_email: str
    ) -> tuple[Alias, Account] | None:
        """Return the alias and its account only when both are active."""
        result = await self.db.execute(
            select(Alias, Account)
            .join(Account, Alias.account_id == Account.id)
            .where(
                Alias.alias_email == alias_email,
                Alias.is_active.is_(True),
                Account.is_active.is_(True),
            )
        )
        row = result.one_or_none()
        return (row[0], row[1]) if row else None

    async def list_with_accounts(self) -> list[tuple[Alias, Account]]:
        result = await self.db.execute(
            select(Alias, Account)
            .join(Account, Alias.account_id == Account.id)
            .order_by(Alias.created_at.desc(), Alias.id)
        )
        return [(alias, account) for alias, account in result.all()]

    async def list_ids_for_account(self, account_id: str) -> list[str]:
        result = await self.db.execute(
            select(Alias.id).where(Alias.account_id == account_id)
        )
        return list(result.scalars().all())

    async def create_alias(
        self,
        alias_email: str,
        display_name: str | None,
        account_id: str,
        is_active: bool,
        is_public: bool,
        owner_id: str | None,
    ) -> Alias:
        """Create alias; raise EmailAlreadyRegisteredException on unique constraint violation."""
        return await self.create(
            Alias(
                alias_email=alias_email,
                display_name=display_name,
                account_id=account_id,
                is_active=is_active,
                is_public=is_public,
                owner_id=owner_id,
            )
        )
