"""Outbound SMTP collaborator."""

from mailrelay.infrastructure.external.smtp.transport import SmtpMailTransport, build_message

__all__ = ["SmtpMailTransport", "build_message"]
