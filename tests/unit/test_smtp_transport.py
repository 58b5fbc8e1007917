"""MIME building and the SMTP hand-off."""

from unittest.mock import AsyncMock

from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.infrastructure.external.smtp import transport as transport_module
from mailrelay.infrastructure.external.smtp.transport import SmtpMailTransport, build_message


def _mail(**overrides) -> OutgoingMail:
    fields = {
        "header_from": "sales@example.com",
        "auth_email": "shared@example.com",
        "auth_password": "m365-secret",
        "to": ["a@example.org"],
        "subject": "Quarterly numbers",
        "body": "See attached.",
        "display_name": "Sales Team",
        "cc": ["c@example.org"],
        "bcc": ["hidden@example.org"],
    }
    fields.update(overrides)
    return OutgoingMail(**fields)


def test_build_message_headers() -> None:
    message = build_message(_mail())
    assert message["From"] == "Sales Team <sales@example.com>"
    assert message["To"] == "a@example.org"
    assert message["Cc"] == "c@example.org"
    assert message["Subject"] == "Quarterly numbers"
    assert message["Message-ID"].endswith("@example.com>")


def test_bcc_never_appears_in_headers() -> None:
    message = build_message(_mail())
    assert message["Bcc"] is None
    assert "hidden@example.org" not in message.as_string()


def test_from_without_display_name() -> None:
    message = build_message(_mail(display_name=None))
    assert message["From"] == "sales@example.com"


def test_html_body() -> None:
    message = build_message(_mail(body="<p>Hi</p>", is_html=True))
    assert message.get_content_type() == "text/html"
    plain = build_message(_mail())
    assert plain.get_content_type() == "text/plain"


async def test_send_authenticates_with_account_credential(monkeypatch) -> None:
    """The envelope sender is the visible address; auth uses the parent account."""
    fake_send = AsyncMock()
    monkeypatch.setattr(transport_module.aiosmtplib, "send", fake_send)
    await SmtpMailTransport("smtp.office365.com", 587).send(_mail())

    kwargs = fake_send.await_args.kwargs
    assert kwargs["sender"] == "sales@example.com"
    assert kwargs["recipients"] == ["a@example.org", "c@example.org", "hidden@example.org"]
    assert kwargs["username"] == "shared@example.com"
    assert kwargs["password"] == "m365-secret"
    assert kwargs["start_tls"] is True
    assert kwargs["use_tls"] is False


async def test_port_465_uses_implicit_tls(monkeypatch) -> None:
    fake_send = AsyncMock()
    monkeypatch.setattr(transport_module.aiosmtplib, "send", fake_send)
    await SmtpMailTransport("smtp.example.com", 465).send(_mail())
    kwargs = fake_send.await_args.kwargs
    assert kwargs["use_tls"] is True
    assert kwargs["start_tls"] is False
