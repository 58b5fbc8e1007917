"""Account ORM model: a Microsoft 365 mailbox credential used for SMTP auth."""

from sqlalchemy import Boolean, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Account(CuidMixin, TimestampMixin, Base):
    """Mailbox account. Password is Fernet-encrypted; owner_id NULL means admin-managed."""

    __tablename__ = "account"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    display_name: Mapped[str] = mapped_column(String, nullable=False)
    encrypted_password: Mapped[str] = mapped_column(Text, nullable=False)
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
