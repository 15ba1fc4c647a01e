# caminho: timeline_app/application/timelines/use_cases.py
# Funções:
# - TimelineService: CRUD de timelines (exclusão em cascata manual), exportação
#   (legado/completa), importação, transferência de propriedade e visões públicas

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from timeline_app.application.gestoes.use_cases import delete_gestao_cascade, to_gestao_output
from timeline_app.application.members.use_cases import create_members
from timeline_app.application.permissions.use_cases import OwnershipService
from timeline_app.application.timelines.dto import (
    ExportFormat,
    FullExport,
    FullSnapshotGestao,
    ImportRequest,
    ImportResult,
    LegacyExport,
    LegacySnapshotGestao,
    PublicTimelineDetail,
    PublicTimelineOutput,
    SnapshotMember,
    SnapshotTimeline,
    TimelineCreateInput,
    TimelineListResponse,
    TimelineOutput,
    TimelineUpdateInput,
)
from timeline_app.config.constants import EXPORT_FORMAT_FULL, EXPORT_FORMAT_LEGACY
from timeline_app.domain.admins.repositories import LocalAdminRepository
from timeline_app.domain.timelines.entities import Gestao, Timeline
from timeline_app.domain.timelines.enums import ACTION_DELETE, ACTION_EDIT, ACTION_READ
from timeline_app.domain.timelines.repositories import (
    GestaoRepository,
    MemberRepository,
    PermissionRepository,
    TimelineRepository,
)
from timeline_app.shared.errors import ConflictError, NotFoundError, ValidationError
from timeline_app.shared.identity import Identity, LocalAdminPrincipal, describe
from timeline_app.shared.logging import log_info, log_warning


@dataclass(slots=True)
class TimelineAdapters:
    admins: LocalAdminRepository
    timelines: TimelineRepository
    gestoes: GestaoRepository
    members: MemberRepository
    permissions: PermissionRepository


class TimelineService:
    def __init__(self, adapters: TimelineAdapters, ownership: OwnershipService) -> None:
        self._admins = adapters.admins
        self._timelines = adapters.timelines
        self._gestoes = adapters.gestoes
        self._members = adapters.members
        self._permissions = adapters.permissions
        self._ownership = ownership

    # -- CRUD -------------------------------------------------------------------

    async def list(self, actor: Identity, offset: int, limit: int) -> TimelineListResponse:
        """Admin global vê todas; admin local vê as próprias e as concedidas."""
        ids = await self._ownership.accessible_timeline_ids(actor)
        timelines = await self._timelines.list(offset, limit, ids=ids)
        return TimelineListResponse(
            offset=offset,
            limit=limit,
            items=[TimelineOutput.model_validate(timeline) for timeline in timelines],
        )

    async def get(self, actor: Identity, timeline_id: int) -> TimelineOutput:
        timeline = await self._ownership.ensure_authorized(actor, timeline_id, ACTION_READ)
        return TimelineOutput.model_validate(timeline)

    async def create(self, actor: Identity, payload: TimelineCreateInput) -> TimelineOutput:
        owner_id = self._resolve_owner(actor, payload.owner_id)
        if await self._admins.get_by_id(owner_id) is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Dono informado não encontrado.')
        await self._ensure_unique_slug(payload.slug)

        timeline = await self._timelines.add(
            Timeline(
                name=payload.name,
                slug=payload.slug,
                description=payload.description or None,
                owner_id=owner_id,
            )
        )
        log_info('TIMELINE_CREATED', {**describe(actor), 'timeline_id': timeline.id, 'owner_id': owner_id})
        return TimelineOutput.model_validate(timeline)

    async def update(self, actor: Identity, timeline_id: int, payload: TimelineUpdateInput) -> TimelineOutput:
        timeline = await self._ownership.ensure_authorized(actor, timeline_id, ACTION_EDIT)

        values = payload.model_dump(exclude_unset=True)
        for key in ('name', 'slug'):
            if key in values and values[key] is None:
                raise ValidationError(f'TIMELINE_{key.upper()}_REQUIRED', 'Campo obrigatório não pode ser vazio.')
        if 'slug' in values and values['slug'] != timeline.slug:
            await self._ensure_unique_slug(values['slug'])

        if not values:
            return TimelineOutput.model_validate(timeline)

        updated = await self._timelines.update(timeline_id, **values)
        if updated is None:
            raise NotFoundError('TIMELINE_NOT_FOUND', 'Timeline não encontrada.')
        log_info('TIMELINE_UPDATED', {**describe(actor), 'timeline_id': timeline_id, 'fields': sorted(values)})
        return TimelineOutput.model_validate(updated)

    async def delete(self, actor: Identity, timeline_id: int) -> None:
        """Membros -> gestões -> permissões -> timeline; etapas já concluídas não são desfeitas."""
        timeline = await self._ownership.ensure_authorized(actor, timeline_id, ACTION_DELETE)

        removed_gestoes = 0
        removed_members = 0
        for gestao in await self._gestoes.list_by_timeline(timeline.id):
            removed_members += await delete_gestao_cascade(self._gestoes, self._members, gestao.id)
            removed_gestoes += 1
        removed_permissions = await self._permissions.remove_by_timeline(timeline.id)
        await self._timelines.remove(timeline.id)

        log_info(
            'TIMELINE_DELETED',
            {
                **describe(actor),
                'timeline_id': timeline.id,
                'gestoes': removed_gestoes,
                'members': removed_members,
                'permissions': removed_permissions,
            },
        )

    async def transfer(self, actor: Identity, timeline_id: int, new_owner_id: int) -> TimelineOutput:
        timeline = await self._ownership.transfer_ownership(actor, timeline_id, new_owner_id)
        return TimelineOutput.model_validate(timeline)

    # -- Exportação / importação ------------------------------------------------

    async def export(
        self, actor: Identity, timeline_id: int, export_format: ExportFormat = EXPORT_FORMAT_FULL
    ) -> Union[FullExport, LegacyExport]:
        timeline = await self._ownership.ensure_authorized(actor, timeline_id, ACTION_READ)
        gestoes = await self._gestoes.list_by_timeline(timeline.id)

        if export_format == EXPORT_FORMAT_LEGACY:
            snapshot: Union[FullExport, LegacyExport] = LegacyExport(
                gestoes=[
                    LegacySnapshotGestao(
                        period=gestao.period,
                        members=[member.name for member in await self._members.list_by_gestao(gestao.id)],
                        start_active=gestao.start_active,
                    )
                    for gestao in gestoes
                ]
            )
        else:
            snapshot = FullExport(
                timeline=SnapshotTimeline(name=timeline.name, slug=timeline.slug, description=timeline.description),
                gestoes=[await self._full_snapshot_gestao(gestao) for gestao in gestoes],
            )

        log_info(
            'TIMELINE_EXPORTED',
            {**describe(actor), 'timeline_id': timeline.id, 'format': export_format, 'gestoes': len(gestoes)},
        )
        return snapshot

    async def import_snapshot(self, actor: Identity, timeline_id: int, payload: ImportRequest) -> ImportResult:
        """Sempre insere: reimportar o mesmo arquivo duplica as gestões."""
        timeline = await self._ownership.ensure_authorized(actor, timeline_id, ACTION_EDIT)

        detected = EXPORT_FORMAT_LEGACY
        base_order = await self._gestoes.count_by_timeline(timeline.id)
        gestoes_created = 0
        members_created = 0

        for index, item in enumerate(payload.gestoes):
            if item.members and isinstance(item.members[0], SnapshotMember):
                detected = EXPORT_FORMAT_FULL
            if item.start_active:
                await self._gestoes.clear_start_active(timeline.id)

            # A ordem do arquivo é relativa: importados entram depois das gestões existentes
            gestao = await self._gestoes.add(
                Gestao(
                    timeline_id=timeline.id,
                    period=item.period,
                    start_active=item.start_active,
                    display_order=base_order + (item.display_order if item.display_order is not None else index),
                )
            )
            members = await create_members(self._members, gestao.id, item.members)
            gestoes_created += 1
            members_created += len(members)

        log_info(
            'TIMELINE_IMPORTED',
            {
                **describe(actor),
                'timeline_id': timeline.id,
                'format': detected,
                'gestoes': gestoes_created,
                'members': members_created,
            },
        )
        return ImportResult(
            timeline_id=timeline.id,
            format=detected,
            gestoes_created=gestoes_created,
            members_created=members_created,
        )

    # -- Visões públicas ----------------------------------------------------------

    async def list_public(self, offset: int, limit: int) -> list[PublicTimelineOutput]:
        timelines = await self._timelines.list(offset, limit)
        return [PublicTimelineOutput.model_validate(timeline) for timeline in timelines]

    async def public_detail(self, slug: str) -> PublicTimelineDetail:
        timeline = await self._timelines.get_by_slug(slug)
        if timeline is None:
            raise NotFoundError('TIMELINE_NOT_FOUND', 'Timeline não encontrada.')

        gestoes = []
        active_gestao_id = None
        for gestao in await self._gestoes.list_by_timeline(timeline.id):
            members = await self._members.list_by_gestao(gestao.id)
            gestoes.append(to_gestao_output(gestao, members))
            if gestao.start_active and active_gestao_id is None:
                active_gestao_id = gestao.id

        return PublicTimelineDetail(
            timeline=PublicTimelineOutput.model_validate(timeline),
            gestoes=gestoes,
            active_gestao_id=active_gestao_id,
        )

    # -- Helpers ----------------------------------------------------------------

    def _resolve_owner(self, actor: Identity, requested_owner_id: int | None) -> int:
        if requested_owner_id is not None and actor.is_global_admin:
            return requested_owner_id
        if isinstance(actor, LocalAdminPrincipal):
            return actor.admin_id
        log_warning('TIMELINE_OWNER_REQUIRED', describe(actor))
        raise ValidationError('TIMELINE_OWNER_REQUIRED', 'Informe o administrador local que será dono da timeline.')

    async def _ensure_unique_slug(self, slug: str) -> None:
        if await self._timelines.get_by_slug(slug) is not None:
            log_warning('TIMELINE_SLUG_EXISTS', {'slug': slug})
            raise ConflictError('TIMELINE_SLUG_EXISTS', 'Já existe uma timeline com este slug.')

    async def _full_snapshot_gestao(self, gestao: Gestao) -> FullSnapshotGestao:
        members = await self._members.list_by_gestao(gestao.id)
        return FullSnapshotGestao(
            period=gestao.period,
            start_active=gestao.start_active,
            display_order=gestao.display_order,
            members=[
                SnapshotMember(
                    name=member.name,
                    role=member.role,
                    photo_url=member.photo_url,
                    display_order=member.display_order,
                )
                for member in members
            ],
        )
