"""Captcha verification collaborator."""

from mailrelay.infrastructure.external.captcha.turnstile import TurnstileVerifier

__all__ = ["TurnstileVerifier"]
