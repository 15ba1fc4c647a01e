# caminho: timeline_app/infrastructure/db/utils.py
# Funções:
# - try_commit(): commit com rollback seguro

from __future__ import annotations

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


async def try_commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except (DBAPIError, SQLAlchemyError):
        await session.rollback()
        raise
