"""Domain value objects for the relay.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime

from mailrelay.domain.enums import CredentialKind, ResourceType, UserRole


def normalize_email(value: str) -> str:
    """Trim and lower-case an email address for storage and lookup."""
    return value.strip().lower()


def parse_address_list(value: str | None) -> list[str]:
    """Split a comma-separated recipient list; blank entries are dropped.

    No RFC 5322 validation happens here; the SMTP server decides.
    """
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class SessionCredential:
    """Bearer string recognized as a signed session token."""

    user_id: str
    role: UserRole
    expires_at: datetime

    kind = CredentialKind.SESSION


@dataclass(frozen=True)
class ApiTokenCredential:
    """Bearer string recognized as a stored API token."""

    user_id: str
    token_id: str

    kind = CredentialKind.API_TOKEN


Credential = SessionCredential | ApiTokenCredential


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, resolved once per request.

    Role and must_change_password always come from the current user row,
    never from the token, so role changes apply immediately.
    """

    user_id: str
    email: str
    role: UserRole
    must_change_password: bool
    credential_kind: CredentialKind

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_session(self) -> bool:
        return self.credential_kind == CredentialKind.SESSION

    @property
    def password_change_pending(self) -> bool:
        """True when the password-change gate applies (API tokens are exempt)."""
        return self.must_change_password and self.is_session


@dataclass(frozen=True)
class ResourceRef:
    """Target of an authorization decision.

    resource_id is None for create and list decisions; owner_id None means
    the resource is unowned (admin-managed).
    """

    resource_type: ResourceType
    resource_id: str | None = None
    owner_id: str | None = None
    is_public: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.resource_type, ResourceType):
            raise ValueError(f"Unknown resource type: {self.resource_type!r}")
