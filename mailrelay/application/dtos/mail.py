"""DTOs for outbound mail (no dependency on the SMTP library)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutgoingMail:
    """Message handed to the SMTP collaborator.

    header_from is the visible sender (alias or account address);
    auth_email/auth_password are the mailbox credential that logs in.
    """

    header_from: str
    auth_email: str
    auth_password: str
    to: list[str]
    subject: str
    body: str
    display_name: str | None = None
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    is_html: bool = False

    @property
    def recipients(self) -> list[str]:
        return [*self.to, *self.cc, *self.bcc]
