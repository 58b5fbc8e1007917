"""API token ORM model. Only the SHA-256 hash of the secret is stored."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class ApiToken(CuidMixin, CreatedAtMixin, Base):
    """Long-lived bearer token owned by a user. Never expires; revoked by delete."""

    __tablename__ = "api_token"

    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    token_hash: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, index=True
    )
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
