"""ORM models. Importing this package registers every table on Base.metadata."""

from mailrelay.infrastructure.persistence.models.account import Account
from mailrelay.infrastructure.persistence.models.alias import Alias
from mailrelay.infrastructure.persistence.models.api_token import ApiToken
from mailrelay.infrastructure.persistence.models.default_sender import DefaultSender
from mailrelay.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from mailrelay.infrastructure.persistence.models.pending_user import PendingUser
from mailrelay.infrastructure.persistence.models.user import User

__all__ = [
    "Account",
    "Alias",
    "ApiToken",
    "DefaultSender",
    "PasswordResetToken",
    "PendingUser",
    "User",
]
