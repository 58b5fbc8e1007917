"""Security headers middleware for a JSON-only API. Raw ASGI.

Responses can carry session tokens and API token secrets, so they are
marked non-cacheable.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Cache-Control": "no-store",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def SecurityHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Add headers that the route did not set itself."""
    extra = [
        (name.lower().encode(), value.encode())
        for name, value in (headers or DEFAULT_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(item for item in extra if item[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app
