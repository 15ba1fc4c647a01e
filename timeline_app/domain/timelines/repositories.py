# caminho: timeline_app/domain/timelines/repositories.py
# Funções:
# - TimelineRepository, GestaoRepository, MemberRepository, PermissionRepository:
#   protocolos de persistência do contexto de Timelines

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from timeline_app.domain.timelines.entities import Gestao, Member, Permission, Timeline


class TimelineRepository(Protocol):
    async def add(self, timeline: Timeline) -> Timeline: ...
    async def get_by_id(self, timeline_id: int) -> Optional[Timeline]: ...
    async def get_by_slug(self, slug: str) -> Optional[Timeline]: ...
    async def list(self, offset: int, limit: int, ids: Sequence[int] | None = None) -> Sequence[Timeline]: ...
    async def list_ids_by_owner(self, owner_id: int) -> Sequence[int]: ...
    async def update(self, timeline_id: int, **values) -> Optional[Timeline]: ...
    async def remove(self, timeline_id: int) -> bool: ...


class GestaoRepository(Protocol):
    async def add(self, gestao: Gestao) -> Gestao: ...
    async def get_by_id(self, gestao_id: int) -> Optional[Gestao]: ...
    async def list_by_timeline(self, timeline_id: int) -> Sequence[Gestao]: ...
    async def count_by_timeline(self, timeline_id: int) -> int: ...
    async def update(self, gestao_id: int, **values) -> Optional[Gestao]: ...
    async def clear_start_active(self, timeline_id: int) -> None: ...
    async def set_display_order(self, gestao_id: int, timeline_id: int, display_order: int) -> bool: ...
    async def remove(self, gestao_id: int) -> bool: ...


class MemberRepository(Protocol):
    async def add(self, member: Member) -> Member: ...
    async def get_by_id(self, member_id: int) -> Optional[Member]: ...
    async def list_by_gestao(self, gestao_id: int) -> Sequence[Member]: ...
    async def count_by_gestao(self, gestao_id: int) -> int: ...
    async def update(self, member_id: int, **values) -> Optional[Member]: ...
    async def set_display_order(self, member_id: int, gestao_id: int, display_order: int) -> bool: ...
    async def remove(self, member_id: int) -> bool: ...
    async def remove_by_gestao(self, gestao_id: int) -> int: ...


class PermissionRepository(Protocol):
    async def get(self, admin_id: int, timeline_id: int) -> Optional[Permission]: ...
    async def upsert(self, permission: Permission) -> Permission: ...
    async def remove(self, admin_id: int, timeline_id: int) -> bool: ...
    async def list_by_timeline(self, timeline_id: int) -> Sequence[Permission]: ...
    async def list_timeline_ids_by_admin(self, admin_id: int) -> Sequence[int]: ...
    async def remove_by_timeline(self, timeline_id: int) -> int: ...
    async def remove_by_admin(self, admin_id: int) -> int: ...
