"""SignupService, PasswordResetService and SystemMailService with mocked collaborators."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from mailrelay.application.dtos.sender import ResolvedSender
from mailrelay.application.services.password_reset_service import PasswordResetService
from mailrelay.application.services.signup_service import SignupService
from mailrelay.application.services.system_mail_service import SystemMailService
from mailrelay.domain.enums import SenderType
from mailrelay.domain.exceptions import (
    DeliveryFailedException,
    EmailAlreadyRegisteredException,
    SenderInactiveException,
    TokenExpiredException,
    ValidationException,
)


class AtomicTokenStore:
    """In-memory reset store: consume hands each token to exactly one caller."""

    def __init__(self, tokens: dict[str, str]) -> None:
        self._tokens = dict(tokens)
        self.deleted_for: list[str] = []

    async def consume(self, token: str) -> str:
        await asyncio.sleep(0)
        user_id = self._tokens.pop(token, None)
        if user_id is None:
            raise TokenExpiredException()
        return user_id

    async def delete_for_user(self, user_id: str) -> None:
        self.deleted_for.append(user_id)


@pytest.fixture
def captcha():
    return AsyncMock()


@pytest.fixture
def uow():
    return AsyncMock()


@pytest.fixture
def system_mail():
    mail = AsyncMock()
    mail.ensure_available = AsyncMock()
    return mail


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=None)
    return repo


def _signup_service(user_repo, pending_store, captcha, uow, system_mail, **kwargs) -> SignupService:
    security = MagicMock()
    security.hash_password = MagicMock(return_value="hashed")
    return SignupService(user_repo, pending_store, security, captcha, uow, system_mail, **kwargs)


async def test_signup_commits_before_mailing(user_repo, captcha, uow, system_mail) -> None:
    """The pending row is committed before the verification mail goes out."""
    calls: list[str] = []
    pending_store = AsyncMock()
    pending_store.create = AsyncMock(return_value=("raw", "row-1", None))
    uow.commit = AsyncMock(side_effect=lambda: calls.append("commit"))
    system_mail.send_verification = AsyncMock(side_effect=lambda *a: calls.append("send"))

    svc = _signup_service(user_repo, pending_store, captcha, uow, system_mail)
    result = await svc.signup(" New@Example.com ", "Password123")

    assert result.status == "pending"
    pending_store.create.assert_awaited_once_with("new@example.com", "hashed")
    system_mail.send_verification.assert_awaited_once_with("new@example.com", "raw", 30)
    assert calls == ["commit", "send"]


async def test_signup_delivery_failure_removes_pending(user_repo, captcha, uow, system_mail) -> None:
    pending_store = AsyncMock()
    pending_store.create = AsyncMock(return_value=("raw", "row-1", None))
    system_mail.send_verification = AsyncMock(side_effect=DeliveryFailedException("boom"))

    svc = _signup_service(user_repo, pending_store, captcha, uow, system_mail)
    with pytest.raises(DeliveryFailedException):
        await svc.signup("new@example.com", "Password123")
    pending_store.delete.assert_awaited_once_with("row-1")
    assert uow.commit.await_count == 2


async def test_signup_sender_deactivated_before_send_removes_pending(
    user_repo, captcha, uow, system_mail
) -> None:
    pending_store = AsyncMock()
    pending_store.create = AsyncMock(return_value=("raw", "row-1", None))
    system_mail.send_verification = AsyncMock(side_effect=SenderInactiveException())

    svc = _signup_service(user_repo, pending_store, captcha, uow, system_mail)
    with pytest.raises(SenderInactiveException):
        await svc.signup("new@example.com", "Password123")
    pending_store.delete.assert_awaited_once_with("row-1")
    assert uow.commit.await_count == 2


async def test_signup_inactive_sender_writes_nothing(user_repo, captcha, uow, system_mail) -> None:
    pending_store = AsyncMock()
    system_mail.ensure_available = AsyncMock(side_effect=SenderInactiveException())
    svc = _signup_service(user_repo, pending_store, captcha, uow, system_mail)
    with pytest.raises(SenderInactiveException):
        await svc.signup("new@example.com", "Password123")
    pending_store.create.assert_not_called()


async def test_signup_existing_email(user_repo, captcha, uow, system_mail) -> None:
    user_repo.get_by_email = AsyncMock(return_value=SimpleNamespace(id="u1"))
    svc = _signup_service(user_repo, AsyncMock(), captcha, uow, system_mail)
    with pytest.raises(EmailAlreadyRegisteredException):
        await svc.signup("taken@example.com", "Password123")


async def test_signup_existing_email_concealed(user_repo, captcha, uow, system_mail) -> None:
    """With concealment on, a taken email gets the normal pending answer and no mail."""
    user_repo.get_by_email = AsyncMock(return_value=SimpleNamespace(id="u1"))
    svc = _signup_service(
        user_repo, AsyncMock(), captcha, uow, system_mail, conceal_existing_email=True
    )
    result = await svc.signup("taken@example.com", "Password123")
    assert result.status == "pending"
    system_mail.send_verification.assert_not_called()


async def test_signup_respects_min_password_length(user_repo, captcha, uow, system_mail) -> None:
    svc = _signup_service(
        user_repo, AsyncMock(), captcha, uow, system_mail, min_password_length=12
    )
    with pytest.raises(ValidationException):
        await svc.signup("new@example.com", "elevenchars")


async def test_signup_rejected_captcha_stops_early(user_repo, captcha, uow, system_mail) -> None:
    captcha.verify = AsyncMock(side_effect=ValidationException("Captcha verification failed"))
    svc = _signup_service(user_repo, AsyncMock(), captcha, uow, system_mail)
    with pytest.raises(ValidationException):
        await svc.signup("new@example.com", "Password123")
    user_repo.get_by_email.assert_not_called()


async def test_concurrent_confirm_reset_has_one_winner(user_repo, captcha, uow) -> None:
    """Two confirms racing on one token: exactly one succeeds, the other sees TokenExpired."""
    user = SimpleNamespace(id="u1")
    user_repo.get_by_id = AsyncMock(return_value=user)
    store = AtomicTokenStore({"tok": "u1"})
    svc = PasswordResetService(user_repo, store, captcha, uow)

    results = await asyncio.gather(
        svc.confirm_reset("tok", "FirstPass123"),
        svc.confirm_reset("tok", "SecondPass123"),
        return_exceptions=True,
    )
    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, TokenExpiredException)]
    assert len(successes) == 1
    assert len(failures) == 1
    user_repo.update_password.assert_awaited_once()
    assert store.deleted_for == ["u1"]


async def test_confirm_reset_validates_before_consuming(user_repo, captcha, uow) -> None:
    store = AtomicTokenStore({"tok": "u1"})
    svc = PasswordResetService(user_repo, store, captcha, uow)
    with pytest.raises(ValidationException):
        await svc.confirm_reset("tok", "short")
    user_repo.get_by_id = AsyncMock(return_value=SimpleNamespace(id="u1"))
    result = await svc.confirm_reset("tok", "LongEnough123")
    assert result.status == "success"


async def test_request_reset_swallows_delivery_failure(user_repo, captcha, uow, system_mail) -> None:
    user_repo.get_by_email = AsyncMock(return_value=SimpleNamespace(id="u1"))
    store = AsyncMock()
    store.create = AsyncMock(return_value=("raw", None))
    system_mail.send_password_reset = AsyncMock(side_effect=DeliveryFailedException("down"))
    svc = PasswordResetService(user_repo, store, captcha, uow, system_mail)
    result = await svc.request_reset("u1@example.com")
    assert result.status == "ok"
    uow.commit.assert_awaited_once()


async def test_request_reset_unknown_email_touches_nothing(
    user_repo, captcha, uow, system_mail
) -> None:
    store = AsyncMock()
    svc = PasswordResetService(user_repo, store, captcha, uow, system_mail)
    result = await svc.request_reset("ghost@example.com")
    assert result.message == "If the email exists, a reset link was sent."
    store.create.assert_not_called()
    system_mail.ensure_available.assert_not_called()


async def test_system_mail_ends_read_transaction_before_smtp(uow) -> None:
    calls: list[str] = []
    sender_service = AsyncMock()
    sender_service.resolve_system_sender = AsyncMock(
        return_value=ResolvedSender(
            sender_type=SenderType.ACCOUNT,
            sender_id="a1",
            header_from="noreply@example.com",
            display_name=None,
            auth_email="noreply@example.com",
            auth_password="m365-secret",
            owner_id=None,
            is_public=True,
        )
    )
    transport = AsyncMock()
    transport.send = AsyncMock(side_effect=lambda mail: calls.append("send"))
    uow.rollback = AsyncMock(side_effect=lambda: calls.append("rollback"))

    mail = SystemMailService(sender_service, transport, uow, "mailrelay", "http://app.test/")
    await mail.send_password_reset("u1@example.com", "tok", 30)

    assert calls == ["rollback", "send"]
    sent = transport.send.await_args.args[0]
    assert sent.header_from == "noreply@example.com"
    assert sent.display_name == "mailrelay"
    assert sent.to == ["u1@example.com"]
    assert "http://app.test/reset-password?token=tok" in sent.body
