"""Application ports."""

from mailrelay.application.interfaces.services import (
    IAuthSecurity,
    ICaptchaVerifier,
    ICredentialEncryptor,
    IMailTransport,
    IUnitOfWork,
)

__all__ = [
    "IAuthSecurity",
    "ICaptchaVerifier",
    "ICredentialEncryptor",
    "IMailTransport",
    "IUnitOfWork",
]
