"""Database session dependencies (composition root).

Read paths use get_db; write paths share the request's transactional
session (commit on success, rollback on error).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mailrelay.infrastructure.persistence.database import get_db, get_db_transactional

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]
