"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from mailrelay.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from mailrelay.api.v1.endpoints import (
    accounts,
    aliases,
    api_tokens,
    auth,
    health,
    send,
    settings,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
api_router.include_router(aliases.router, prefix="/aliases", tags=["aliases"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(api_tokens.router, prefix="/api-tokens", tags=["api-tokens"])
api_router.include_router(send.router, prefix="/send", tags=["send"])
