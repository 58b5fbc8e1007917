"""Cloudflare Turnstile verification over the shared httpx client."""

from __future__ import annotations

import logging

import httpx

from mailrelay.core.config import Settings
from mailrelay.domain.exceptions import CaptchaUnavailableException, ValidationException

logger = logging.getLogger(__name__)


class TurnstileVerifier:
    """Verify captcha tokens. A verifier without a secret accepts everything."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None,
        secret: str | None,
        verify_url: str,
    ) -> None:
        self._http_client = http_client
        self._secret = secret
        self._verify_url = verify_url

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.AsyncClient | None
    ) -> TurnstileVerifier:
        secret = (
            settings.turnstile_secret.get_secret_value()
            if settings.turnstile_secret
            else None
        )
        return cls(http_client, secret, settings.turnstile_verify_url)

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    async def verify(self, token: str | None, remote_ip: str | None = None) -> None:
        """Raise ValidationException on a missing/rejected token when enabled.

        Raises:
            ValidationException: Token missing or rejected by Cloudflare.
            CaptchaUnavailableException: Cloudflare could not be reached.
        """
        if not self.enabled:
            return
        if not token or not token.strip():
            raise ValidationException("Captcha verification required", field="turnstileToken")
        data = {"secret": self._secret, "response": token.strip()}
        if remote_ip:
            data["remoteip"] = remote_ip
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self._verify_url, data=data)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.post(self._verify_url, data=data)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Turnstile verification unavailable: %s", e)
            raise CaptchaUnavailableException() from e
        if not payload.get("success"):
            raise ValidationException("Captcha verification failed", field="turnstileToken")
