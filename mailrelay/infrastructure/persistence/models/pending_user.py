"""Pending signup awaiting email verification. Stored by token_hash; consumed once."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class PendingUser(CuidMixin, CreatedAtMixin, Base):
    """Signup row for POST /auth/signup/verify. The password is already hashed."""

    __tablename__ = "pending_user"

    token_hash: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
