# caminho: timeline_app/application/gestoes/use_cases.py
# Funções:
# - delete_gestao_cascade(): remove os membros e depois a gestão (sem FK em cascata)
# - GestaoService: leitura pública, CRUD e reordenação de gestões

from __future__ import annotations

from typing import Sequence

from timeline_app.application.gestoes.dto import (
    GestaoCreateInput,
    GestaoOutput,
    GestaoReorderRequest,
    GestaoUpdateInput,
)
from timeline_app.application.members.use_cases import create_members, to_member_output
from timeline_app.application.permissions.use_cases import OwnershipService
from timeline_app.domain.timelines.entities import Gestao, Member
from timeline_app.domain.timelines.enums import ACTION_EDIT
from timeline_app.domain.timelines.ordering import ReorderBatchError, ReorderEntry, check_reorder_batch
from timeline_app.domain.timelines.repositories import GestaoRepository, MemberRepository
from timeline_app.shared.errors import NotFoundError, ValidationError
from timeline_app.shared.identity import Identity, describe
from timeline_app.shared.logging import log_info, log_warning


async def delete_gestao_cascade(gestoes: GestaoRepository, members: MemberRepository, gestao_id: int) -> int:
    """Não transacional: se a segunda etapa falhar, os membros já foram removidos."""
    removed_members = await members.remove_by_gestao(gestao_id)
    await gestoes.remove(gestao_id)
    return removed_members


def to_gestao_output(gestao: Gestao, members: Sequence[Member] = ()) -> GestaoOutput:
    return GestaoOutput(
        id=gestao.id,
        timeline_id=gestao.timeline_id,
        period=gestao.period,
        start_active=gestao.start_active,
        display_order=gestao.display_order,
        created_at=gestao.created_at,
        updated_at=gestao.updated_at,
        members=[to_member_output(member) for member in members],
    )


class GestaoService:
    def __init__(
        self,
        ownership: OwnershipService,
        gestoes: GestaoRepository,
        members: MemberRepository,
    ) -> None:
        self._ownership = ownership
        self._gestoes = gestoes
        self._members = members

    async def list_by_timeline(self, timeline_id: int) -> list[GestaoOutput]:
        gestoes = await self._gestoes.list_by_timeline(timeline_id)
        return [await self._with_members(gestao) for gestao in gestoes]

    async def get(self, gestao_id: int) -> GestaoOutput:
        gestao = await self._gestoes.get_by_id(gestao_id)
        if gestao is None:
            raise NotFoundError('GESTAO_NOT_FOUND', 'Gestão não encontrada.')
        return await self._with_members(gestao)

    async def create(self, actor: Identity, payload: GestaoCreateInput) -> GestaoOutput:
        timeline = await self._ownership.ensure_authorized(actor, payload.timeline_id, ACTION_EDIT)

        display_order = payload.display_order
        if display_order is None:
            display_order = await self._gestoes.count_by_timeline(timeline.id)
        if payload.start_active:
            await self._gestoes.clear_start_active(timeline.id)

        gestao = await self._gestoes.add(
            Gestao(
                timeline_id=timeline.id,
                period=payload.period,
                start_active=payload.start_active,
                display_order=display_order,
            )
        )
        members = await create_members(self._members, gestao.id, payload.members)
        log_info(
            'GESTAO_CREATED',
            {**describe(actor), 'gestao_id': gestao.id, 'timeline_id': timeline.id, 'members': len(members)},
        )
        return to_gestao_output(gestao, members)

    async def update(self, actor: Identity, gestao_id: int, payload: GestaoUpdateInput) -> GestaoOutput:
        gestao, timeline = await self._ownership.ensure_gestao_authorized(actor, gestao_id, ACTION_EDIT)

        values = payload.model_dump(exclude_unset=True)
        if 'period' in values and values['period'] is None:
            raise ValidationError('GESTAO_PERIOD_REQUIRED', 'O período não pode ser vazio.')
        for key in ('start_active', 'display_order'):
            if key in values and values[key] is None:
                values.pop(key)

        if values.get('start_active') is True:
            await self._gestoes.clear_start_active(timeline.id)

        if values:
            updated = await self._gestoes.update(gestao.id, **values)
            if updated is None:
                raise NotFoundError('GESTAO_NOT_FOUND', 'Gestão não encontrada.')
            gestao = updated

        log_info('GESTAO_UPDATED', {**describe(actor), 'gestao_id': gestao.id, 'fields': sorted(values)})
        return await self._with_members(gestao)

    async def delete(self, actor: Identity, gestao_id: int) -> None:
        gestao, timeline = await self._ownership.ensure_gestao_authorized(actor, gestao_id, ACTION_EDIT)
        removed_members = await delete_gestao_cascade(self._gestoes, self._members, gestao.id)
        log_info(
            'GESTAO_DELETED',
            {**describe(actor), 'gestao_id': gestao.id, 'timeline_id': timeline.id, 'members': removed_members},
        )

    async def reorder(self, actor: Identity, payload: GestaoReorderRequest) -> list[GestaoOutput]:
        timeline = await self._ownership.ensure_authorized(actor, payload.timeline_id, ACTION_EDIT)

        entries = [ReorderEntry(id=item.id, display_order=item.display_order) for item in payload.items]
        siblings = await self._gestoes.list_by_timeline(timeline.id)
        try:
            check_reorder_batch(entries, [gestao.id for gestao in siblings])
        except ReorderBatchError as exc:
            log_warning(
                'GESTAO_REORDER_REJECTED',
                {**describe(actor), 'timeline_id': timeline.id, 'code': exc.code, 'ids': exc.ids},
            )
            raise ValidationError(exc.code, 'Itens inválidos para esta timeline.', ids=exc.ids) from exc

        # Escritas independentes por linha, sempre restritas à timeline informada
        for entry in entries:
            await self._gestoes.set_display_order(entry.id, timeline.id, entry.display_order)

        log_info('GESTAO_REORDERED', {**describe(actor), 'timeline_id': timeline.id, 'count': len(entries)})
        return await self.list_by_timeline(timeline.id)

    async def _with_members(self, gestao: Gestao) -> GestaoOutput:
        members = await self._members.list_by_gestao(gestao.id)
        return to_gestao_output(gestao, members)
