"""Mailbox credential encryption and system mail templates."""

from mailrelay.infrastructure.external.email.encryption import CredentialEncryptor
from mailrelay.infrastructure.external.email.templates import build_system_email_html

__all__ = ["CredentialEncryptor", "build_system_email_html"]
