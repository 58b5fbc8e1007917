"""Repositories and token stores over the async SQLAlchemy session."""

from mailrelay.infrastructure.persistence.repositories.account_repo import AccountRepository
from mailrelay.infrastructure.persistence.repositories.alias_repo import AliasRepository
from mailrelay.infrastructure.persistence.repositories.api_token_repo import (
    ApiTokenRepository,
)
from mailrelay.infrastructure.persistence.repositories.base import BaseRepository
from mailrelay.infrastructure.persistence.repositories.default_sender_repo import (
    DefaultSenderRepository,
)
from mailrelay.infrastructure.persistence.repositories.password_reset_token_repo import (
    PasswordResetTokenStore,
)
from mailrelay.infrastructure.persistence.repositories.pending_user_repo import (
    PendingSignup,
    PendingUserStore,
)
from mailrelay.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AccountRepository",
    "AliasRepository",
    "ApiTokenRepository",
    "BaseRepository",
    "DefaultSenderRepository",
    "PasswordResetTokenStore",
    "PendingSignup",
    "PendingUserStore",
    "UserRepository",
]
