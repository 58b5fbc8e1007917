"""Tests for domain exceptions (error_code, message, details)."""

from mailrelay.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DefaultSenderInUseException,
    DefaultSenderVersionConflictException,
    DeliveryFailedException,
    EmailAlreadyRegisteredException,
    InvalidCredentialsException,
    RelayException,
    ResourceNotFoundException,
    SenderNotFoundException,
    TokenExpiredException,
    ValidationException,
)


def test_relay_exception_default_error_code() -> None:
    """Base RelayException uses class name as error_code when not provided."""
    exc = RelayException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "RelayException"
    assert exc.details == {}


def test_to_dict_shape() -> None:
    exc = RelayException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_with_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Invalid").details == {}


def test_credential_errors_share_one_message() -> None:
    assert InvalidCredentialsException().message == "Invalid credentials"
    assert AuthenticationException().error_code == "UNAUTHENTICATED"


def test_authorization_exception_builds_message_from_resource_and_action() -> None:
    exc = AuthorizationException(resource="account", action="delete")
    assert exc.message == "Forbidden: delete on account"
    assert exc.error_code == "FORBIDDEN"


def test_authorization_exception_keeps_custom_message() -> None:
    exc = AuthorizationException(resource="send", message="Admins cannot send")
    assert exc.message == "Admins cannot send"
    assert exc.details == {"resource": "send"}


def test_resource_not_found_message() -> None:
    exc = ResourceNotFoundException("api_token", "t1")
    assert exc.message == "Api token not found"
    assert exc.details == {"resource_type": "api_token", "resource_id": "t1"}


def test_token_expired_is_uniform() -> None:
    assert TokenExpiredException().message == "Token is invalid or has expired"


def test_conflicts_share_error_code() -> None:
    for exc in (
        EmailAlreadyRegisteredException("a@example.com"),
        DefaultSenderInUseException("account", "a1"),
        DefaultSenderVersionConflictException(1, 2),
    ):
        assert isinstance(exc, ConflictException)
        assert exc.error_code == "CONFLICT"


def test_email_already_registered_keeps_email_out_of_message() -> None:
    exc = EmailAlreadyRegisteredException("a@example.com")
    assert "a@example.com" not in exc.message
    assert exc.email == "a@example.com"


def test_sender_not_found_and_delivery_failed() -> None:
    assert SenderNotFoundException("x@example.com").details == {"address": "x@example.com"}
    exc = DeliveryFailedException("535 auth failed")
    assert exc.message == "Delivery failed: 535 auth failed"
    assert exc.details == {"reason": "535 auth failed"}
