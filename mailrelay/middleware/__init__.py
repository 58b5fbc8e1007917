"""HTTP middleware: timeout, request ID, security headers.

Applied in create_app(); order matters (last added = outermost).
"""

from mailrelay.middleware.request_id import RequestIDMiddleware
from mailrelay.middleware.security_headers import SecurityHeadersMiddleware
from mailrelay.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
