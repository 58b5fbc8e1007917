"""Mailbox password encryption at rest (Fernet)."""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from mailrelay.core.config import get_settings
from mailrelay.domain.exceptions import CredentialException

DECRYPTION_ERROR_MSG = "Failed to decrypt mailbox password - invalid or corrupted data"


class CredentialEncryptor:
    """Encrypt/decrypt account passwords using Fernet (key derived from app secret)."""

    def __init__(self) -> None:
        self._fernet = Fernet(self._get_encryption_key())

    def _get_encryption_key(self) -> bytes:
        """Derive 32-byte key from secret_key + encryption_salt via PBKDF2-HMAC-SHA256."""
        settings = get_settings()
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=settings.encryption_salt.get_secret_value().encode(),
            iterations=100_000,
        )
        key_material = settings.secret_key.get_secret_value().encode()
        derived = kdf.derive(key_material)
        return base64.urlsafe_b64encode(derived)

    def encrypt(self, password: str) -> str:
        """Encrypt a mailbox password to a string safe for storage."""
        return self._fernet.encrypt(password.encode()).decode()

    def decrypt(self, encrypted_str: str) -> str:
        """Decrypt a stored mailbox password.

        Raises:
            CredentialException: If the value was not produced with the current key.
        """
        try:
            return self._fernet.decrypt(encrypted_str.encode()).decode()
        except InvalidToken as e:
            raise CredentialException(DECRYPTION_ERROR_MSG) from e
