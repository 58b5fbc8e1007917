"""Alias ORM model: send-as address backed by an Account's credentials."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Alias(CuidMixin, TimestampMixin, Base):
    """Alias. Deleting the parent account cascades to its aliases."""

    __tablename__ = "alias"

    alias_email: Mapped[str] = mapped_column(
        String, nullable=False, unique=True, index=True
    )
    display_name: Mapped[str | None] = mapped_column(String, nullable=True)
    account_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    owner_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
