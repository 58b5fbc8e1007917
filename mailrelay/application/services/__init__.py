"""Application services (use cases). No FastAPI or HTTP types here."""

from mailrelay.application.services.account_service import AccountService
from mailrelay.application.services.alias_service import AliasService
from mailrelay.application.services.api_token_service import ApiTokenService
from mailrelay.application.services.authentication_service import AuthenticationService
from mailrelay.application.services.authorization_service import AuthorizationService
from mailrelay.application.services.dispatch_service import DispatchService
from mailrelay.application.services.password_reset_service import PasswordResetService
from mailrelay.application.services.sender_service import SenderService
from mailrelay.application.services.session_service import SessionService
from mailrelay.application.services.signup_service import SignupService
from mailrelay.application.services.system_mail_service import SystemMailService
from mailrelay.application.services.user_admin_service import UserAdminService

__all__ = [
    "AccountService",
    "AliasService",
    "ApiTokenService",
    "AuthenticationService",
    "AuthorizationService",
    "DispatchService",
    "PasswordResetService",
    "SenderService",
    "SessionService",
    "SignupService",
    "SystemMailService",
    "UserAdminService",
]
