"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from mailrelay.domain.enums import (
    Action,
    CredentialKind,
    ResourceType,
    SenderType,
    UserRole,
)
from mailrelay.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DeliveryFailedException,
    InvalidCredentialsException,
    PasswordChangeRequiredException,
    RelayException,
    ResourceNotFoundException,
    SenderInactiveException,
    SenderNotFoundException,
    TokenExpiredException,
    ValidationException,
)
from mailrelay.domain.value_objects import (
    ApiTokenCredential,
    Credential,
    Principal,
    ResourceRef,
    SessionCredential,
    normalize_email,
    parse_address_list,
)

__all__ = [
    # Enums
    "Action",
    "CredentialKind",
    "ResourceType",
    "SenderType",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "DeliveryFailedException",
    "InvalidCredentialsException",
    "PasswordChangeRequiredException",
    "RelayException",
    "ResourceNotFoundException",
    "SenderInactiveException",
    "SenderNotFoundException",
    "TokenExpiredException",
    "ValidationException",
    # Value objects
    "ApiTokenCredential",
    "Credential",
    "Principal",
    "ResourceRef",
    "SessionCredential",
    "normalize_email",
    "parse_address_list",
]
