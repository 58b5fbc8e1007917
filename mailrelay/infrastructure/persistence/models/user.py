"""User ORM model for authentication."""

from sqlalchemy import Boolean, CheckConstraint, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mailrelay.infrastructure.persistence.database import Base
from mailrelay.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Email is unique (stored normalized)."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="user")
    must_change_password: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'dev', 'user')", name="app_user_role_check"),
    )
