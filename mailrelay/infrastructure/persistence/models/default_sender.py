"""Default sender setting: a single versioned row used for system mail."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import VersionedMixin
from mailrelay.shared.utils.datetime import utc_now

SINGLETON_ID = 1


class DefaultSender(VersionedMixin, Base):
    """Singleton row (id = 1). sender_type/sender_id are NULL once cleared.

    The row is kept after a clear so version keeps increasing.
    """

    __tablename__ = "default_sender"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    sender_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    sender_id: Mapped[str | None] = mapped_column(String, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
    updated_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        CheckConstraint("id = 1", name="default_sender_singleton_check"),
        CheckConstraint(
            "sender_type IS NULL OR sender_type IN ('account', 'alias')",
            name="default_sender_type_check",
        ),
    )
