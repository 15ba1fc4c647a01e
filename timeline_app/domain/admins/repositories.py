# caminho: timeline_app/domain/admins/repositories.py
# Funções:
# - LocalAdminRepository: protocolo de persistência dos administradores locais
# - OAuthUserRepository: protocolo de persistência dos usuários OAuth

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from timeline_app.domain.admins.entities import LocalAdmin, OAuthUser


class LocalAdminRepository(Protocol):
    async def add(self, admin: LocalAdmin) -> LocalAdmin: ...
    async def get_by_id(self, admin_id: int) -> Optional[LocalAdmin]: ...
    async def get_by_username(self, username: str) -> Optional[LocalAdmin]: ...
    async def list(self, offset: int, limit: int) -> Sequence[LocalAdmin]: ...
    async def exists_any(self) -> bool: ...
    async def update(self, admin_id: int, **values) -> Optional[LocalAdmin]: ...
    async def touch_last_login(self, admin_id: int, when: datetime) -> None: ...
    async def remove(self, admin_id: int) -> bool: ...


class OAuthUserRepository(Protocol):
    async def upsert(self, user: OAuthUser) -> OAuthUser: ...
    async def get_by_open_id(self, open_id: str) -> Optional[OAuthUser]: ...
