# caminho: timeline_app/application/permissions/use_cases.py
# Funções:
# - OwnershipService: decide se um ator pode agir sobre uma Timeline
#   (admin global, dono ou concessão explícita), resolve a Timeline de
#   gestões/membros, concede/revoga permissões e transfere a propriedade

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from timeline_app.application.permissions.dto import (
    PermissionGrantInput,
    PermissionOutput,
    PermissionRevokeInput,
)
from timeline_app.domain.admins.repositories import LocalAdminRepository
from timeline_app.domain.timelines.entities import Gestao, Member, Permission, Timeline
from timeline_app.domain.timelines.enums import ACTION_DELETE, ACTION_EDIT, ACTION_READ, TimelineAction
from timeline_app.domain.timelines.repositories import (
    GestaoRepository,
    MemberRepository,
    PermissionRepository,
    TimelineRepository,
)
from timeline_app.shared.errors import ForbiddenError, NotFoundError
from timeline_app.shared.identity import Identity, LocalAdminPrincipal, describe
from timeline_app.shared.logging import log_info, log_warning


@dataclass(slots=True)
class OwnershipAdapters:
    admins: LocalAdminRepository
    timelines: TimelineRepository
    gestoes: GestaoRepository
    members: MemberRepository
    permissions: PermissionRepository


def grant_allows(permission: Permission | None, action: TimelineAction) -> bool:
    if permission is None:
        return False
    if action == ACTION_READ:
        return True
    if action == ACTION_EDIT:
        return permission.can_edit
    if action == ACTION_DELETE:
        return permission.can_delete
    return False


class OwnershipService:
    def __init__(self, adapters: OwnershipAdapters) -> None:
        self._admins = adapters.admins
        self._timelines = adapters.timelines
        self._gestoes = adapters.gestoes
        self._members = adapters.members
        self._permissions = adapters.permissions

    async def is_authorized(self, actor: Identity, timeline_id: int, action: TimelineAction) -> bool:
        timeline = await self._timelines.get_by_id(timeline_id)
        if timeline is None:
            return False
        return await self._check(actor, timeline, action)

    async def ensure_authorized(self, actor: Identity, timeline_id: int, action: TimelineAction) -> Timeline:
        """Retorna a Timeline ou lança NotFound/Forbidden."""
        timeline = await self._timelines.get_by_id(timeline_id)
        if timeline is None:
            raise NotFoundError('TIMELINE_NOT_FOUND', 'Timeline não encontrada.')

        if not await self._check(actor, timeline, action):
            log_warning(
                'OWNERSHIP_FORBIDDEN',
                {**describe(actor), 'timeline_id': timeline_id, 'action': action},
            )
            raise ForbiddenError('TIMELINE_FORBIDDEN', 'Você não tem permissão para esta timeline.')
        return timeline

    async def ensure_gestao_authorized(
        self, actor: Identity, gestao_id: int, action: TimelineAction
    ) -> tuple[Gestao, Timeline]:
        gestao = await self._gestoes.get_by_id(gestao_id)
        if gestao is None:
            raise NotFoundError('GESTAO_NOT_FOUND', 'Gestão não encontrada.')
        timeline = await self.ensure_authorized(actor, gestao.timeline_id, action)
        return gestao, timeline

    async def ensure_member_authorized(
        self, actor: Identity, member_id: int, action: TimelineAction
    ) -> tuple[Member, Gestao, Timeline]:
        member = await self._members.get_by_id(member_id)
        if member is None:
            raise NotFoundError('MEMBER_NOT_FOUND', 'Membro não encontrado.')
        gestao, timeline = await self.ensure_gestao_authorized(actor, member.gestao_id, action)
        return member, gestao, timeline

    async def accessible_timeline_ids(self, actor: Identity) -> Sequence[int] | None:
        """None significa acesso a todas as timelines."""
        if actor.is_global_admin:
            return None
        if not isinstance(actor, LocalAdminPrincipal):
            return []
        owned = await self._timelines.list_ids_by_owner(actor.admin_id)
        granted = await self._permissions.list_timeline_ids_by_admin(actor.admin_id)
        return sorted(set(owned) | set(granted))

    # -- Concessões explícitas --------------------------------------------------

    async def grant(self, actor: Identity, payload: PermissionGrantInput) -> PermissionOutput:
        await self._ensure_owner_or_global(actor, payload.timeline_id)
        if await self._admins.get_by_id(payload.admin_id) is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Administrador não encontrado.')

        permission = await self._permissions.upsert(
            Permission(
                admin_id=payload.admin_id,
                timeline_id=payload.timeline_id,
                can_edit=payload.can_edit,
                can_delete=payload.can_delete,
            )
        )
        log_info(
            'PERMISSION_GRANTED',
            {
                **describe(actor),
                'target_admin_id': payload.admin_id,
                'timeline_id': payload.timeline_id,
                'can_edit': payload.can_edit,
                'can_delete': payload.can_delete,
            },
        )
        return PermissionOutput.model_validate(permission)

    async def revoke(self, actor: Identity, payload: PermissionRevokeInput) -> None:
        await self._ensure_owner_or_global(actor, payload.timeline_id)
        removed = await self._permissions.remove(payload.admin_id, payload.timeline_id)
        if not removed:
            raise NotFoundError('PERMISSION_NOT_FOUND', 'Permissão não encontrada.')
        log_info(
            'PERMISSION_REVOKED',
            {**describe(actor), 'target_admin_id': payload.admin_id, 'timeline_id': payload.timeline_id},
        )

    async def list_permissions(self, actor: Identity, timeline_id: int) -> list[PermissionOutput]:
        await self._ensure_owner_or_global(actor, timeline_id)
        permissions = await self._permissions.list_by_timeline(timeline_id)
        return [PermissionOutput.model_validate(permission) for permission in permissions]

    # -- Propriedade ------------------------------------------------------------

    async def transfer_ownership(self, actor: Identity, timeline_id: int, new_owner_id: int) -> Timeline:
        """Troca o dono; concessões explícitas existentes permanecem."""
        timeline = await self._ensure_owner_or_global(actor, timeline_id)
        if await self._admins.get_by_id(new_owner_id) is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Novo dono não encontrado.')

        updated = await self._timelines.update(timeline_id, owner_id=new_owner_id)
        if updated is None:
            raise NotFoundError('TIMELINE_NOT_FOUND', 'Timeline não encontrada.')
        log_info(
            'TIMELINE_OWNERSHIP_TRANSFERRED',
            {
                **describe(actor),
                'timeline_id': timeline_id,
                'previous_owner_id': timeline.owner_id,
                'new_owner_id': new_owner_id,
            },
        )
        return updated

    # -- Helpers ----------------------------------------------------------------

    async def _check(self, actor: Identity, timeline: Timeline, action: TimelineAction) -> bool:
        if actor.is_global_admin:
            return True
        if not isinstance(actor, LocalAdminPrincipal):
            return False
        if timeline.owner_id == actor.admin_id:
            return True
        permission = await self._permissions.get(actor.admin_id, timeline.id)
        return grant_allows(permission, action)

    async def _ensure_owner_or_global(self, actor: Identity, timeline_id: int) -> Timeline:
        timeline = await self._timelines.get_by_id(timeline_id)
        if timeline is None:
            raise NotFoundError('TIMELINE_NOT_FOUND', 'Timeline não encontrada.')
        if actor.is_global_admin:
            return timeline
        if isinstance(actor, LocalAdminPrincipal) and timeline.owner_id == actor.admin_id:
            return timeline
        log_warning('TIMELINE_OWNER_REQUIRED', {**describe(actor), 'timeline_id': timeline_id})
        raise ForbiddenError('TIMELINE_OWNER_REQUIRED', 'Apenas o dono da timeline pode realizar esta ação.')
