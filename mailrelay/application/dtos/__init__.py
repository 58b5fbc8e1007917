"""Application DTOs (read-models and command results)."""

from mailrelay.application.dtos.account import AccountResult, AliasResult
from mailrelay.application.dtos.api_token import ApiTokenResult, CreatedApiToken
from mailrelay.application.dtos.mail import OutgoingMail
from mailrelay.application.dtos.sender import DefaultSenderSummary, ResolvedSender
from mailrelay.application.dtos.user import FlowResult, LoginResult, UserResult

__all__ = [
    "AccountResult",
    "AliasResult",
    "ApiTokenResult",
    "CreatedApiToken",
    "DefaultSenderSummary",
    "FlowResult",
    "LoginResult",
    "OutgoingMail",
    "ResolvedSender",
    "UserResult",
]
