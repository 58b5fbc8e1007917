"""Domain enumerations for the relay.

Enums represent fixed sets of domain values (roles, actions, resource kinds).
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a relay user.

    admin manages identities and settings but does not send traffic;
    dev manages the mailboxes it owns; user composes mail only.
    """

    ADMIN = "admin"
    DEV = "dev"
    USER = "user"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [role.value for role in cls]


class Action(str, Enum):
    """Action requested against a resource."""

    READ = "read"
    CREATE = "create"
    UPDATE_OWN_FIELDS = "update_own_fields"
    UPDATE_PRIVILEGED_FIELDS = "update_privileged_fields"
    DELETE = "delete"


class ResourceType(str, Enum):
    """Kinds of resource guarded by the authorization engine."""

    ACCOUNT = "account"
    ALIAS = "alias"
    USER = "user"
    DEFAULT_SENDER = "default_sender"


class SenderType(str, Enum):
    """Entity a sender address resolves to."""

    ACCOUNT = "account"
    ALIAS = "alias"


class CredentialKind(str, Enum):
    """How the bearer string on a request was recognized."""

    SESSION = "session"
    API_TOKEN = "api_token"
