"""One-time password reset token. Stored by token_hash; consumed once."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class PasswordResetToken(CuidMixin, CreatedAtMixin, Base):
    """Token for POST /auth/password-reset/confirm."""

    __tablename__ = "password_reset_token"

    token_hash: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
