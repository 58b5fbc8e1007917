"""Domain exceptions for the relay.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RelayException(Exception):
    """Base exception for all relay errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RelayException):
    """Raised when input validation fails (e.g. weak password, empty update)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidCredentialsException(RelayException):
    """Raised when email/password do not match a user (same message either way)."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, "INVALID_CREDENTIALS")


class AuthenticationException(RelayException):
    """Raised when the bearer credential is missing, garbled, expired or revoked."""

    def __init__(self, message: str = "Not authenticated") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "UNAUTHENTICATED")


class AuthorizationException(RelayException):
    """Raised when an authenticated principal is not permitted to act."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Forbidden",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'account', 'user').
            action: Optional action that was attempted (e.g. 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action and message == "Forbidden":
            message = f"Forbidden: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "FORBIDDEN", details)


class PasswordChangeRequiredException(RelayException):
    """Raised while a session principal still has to change its password."""

    def __init__(self) -> None:
        super().__init__(
            "Password change required before continuing",
            "PASSWORD_CHANGE_REQUIRED",
        )


class ResourceNotFoundException(RelayException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier.

        Args:
            resource_type: Kind of resource (e.g. 'account', 'api_token').
            resource_id: The identifier that was not found.
        """
        super().__init__(
            f"{resource_type.replace('_', ' ').capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TokenExpiredException(RelayException):
    """Raised when a single-use token is unknown, already consumed or past its TTL.

    The three cases share one message so callers cannot tell them apart.
    """

    def __init__(self) -> None:
        super().__init__("Token is invalid or has expired", "TOKEN_EXPIRED")


class ConflictException(RelayException):
    """Raised when a write violates a uniqueness rule or a concurrent update won."""

    def __init__(
        self, message: str, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, "CONFLICT", details)


class EmailAlreadyRegisteredException(ConflictException):
    """Raised when a user, account or alias email is already taken."""

    def __init__(self, email: str | None = None) -> None:
        """Initialize with the duplicate email (kept out of the message).

        Args:
            email: Optional email address that collided.
        """
        super().__init__("Email is already registered", {})
        self.email = email


class DefaultSenderInUseException(ConflictException):
    """Raised when deleting an account or alias that is the default sender."""

    def __init__(self, sender_type: str, sender_id: str) -> None:
        super().__init__(
            "Sender is the default sender; re-point or clear the default sender first",
            {"sender_type": sender_type, "sender_id": sender_id},
        )


class DefaultSenderVersionConflictException(ConflictException):
    """Raised when the default sender changed since the caller last read it."""

    def __init__(self, expected_version: int, current_version: int) -> None:
        super().__init__(
            "Default sender was modified concurrently",
            {
                "expected_version": expected_version,
                "current_version": current_version,
            },
        )


class SenderNotFoundException(RelayException):
    """Raised when an address does not resolve to an active account or alias."""

    def __init__(self, address: str) -> None:
        super().__init__(
            "Sender address not found or inactive",
            "SENDER_NOT_FOUND",
            {"address": address},
        )


class SenderInactiveException(RelayException):
    """Raised when system mail is needed but the default sender is unset or inactive."""

    def __init__(self, message: str = "System mail is temporarily unavailable") -> None:
        super().__init__(message, "SENDER_INACTIVE")


class DeliveryFailedException(RelayException):
    """Raised when the SMTP collaborator rejects or times out; its text is passed through."""

    def __init__(self, reason: str) -> None:
        """Initialize with the collaborator's failure text.

        Args:
            reason: Error message reported by the SMTP client.
        """
        super().__init__(f"Delivery failed: {reason}", "DELIVERY_FAILED", {"reason": reason})


class CaptchaUnavailableException(RelayException):
    """Raised when the captcha verifier could not be reached."""

    def __init__(self) -> None:
        super().__init__("Captcha verification unavailable", "CAPTCHA_UNAVAILABLE")


class CredentialException(RelayException):
    """Raised when a stored mailbox password cannot be decrypted."""

    def __init__(self, message: str = "Stored mailbox credential is unreadable") -> None:
        super().__init__(message, "CREDENTIAL_ERROR")
