# caminho: timeline_app/infrastructure/cache/redis.py
# Funções:
# - get_redis_client(): fornece instância Redis assíncrona via FastAPI Depends
#   (None quando REDIS_URL não está configurado)

from __future__ import annotations

from collections.abc import AsyncGenerator

import redis.asyncio as redis

from timeline_app.config import get_settings


async def get_redis_client() -> AsyncGenerator[redis.Redis | None, None]:
    settings = get_settings()
    if not settings.REDIS_URL:
        yield None
        return

    client = redis.from_url(settings.REDIS_URL, encoding='utf-8', decode_responses=True)
    try:
        yield client
    finally:
        await client.aclose()
