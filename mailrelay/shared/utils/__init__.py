"""Shared utilities: datetime and generators."""

from mailrelay.shared.utils.datetime import ensure_utc, utc_now
from mailrelay.shared.utils.generators import (
    generate_api_token_secret,
    generate_cuid,
    generate_url_token,
)

__all__ = [
    "generate_api_token_secret",
    "generate_cuid",
    "generate_url_token",
    "utc_now",
    "ensure_utc",
]
