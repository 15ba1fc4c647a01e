# caminho: timeline_app/application/members/use_cases.py
# Funções:
# - create_members(): insere uma lista de membros (nomes ou objetos) sob uma gestão
# - MemberService: leitura pública, CRUD e reordenação de membros; toda mutação
#   passa pela cadeia Membro -> Gestão -> Timeline

from __future__ import annotations

from typing import Sequence, Union

from timeline_app.application.members.dto import (
    MemberCreateInput,
    MemberFields,
    MemberOutput,
    MemberReorderRequest,
    MemberUpdateInput,
)
from timeline_app.application.permissions.use_cases import OwnershipService
from timeline_app.domain.timelines.entities import Member
from timeline_app.domain.timelines.enums import ACTION_EDIT
from timeline_app.domain.timelines.ordering import ReorderBatchError, ReorderEntry, check_reorder_batch
from timeline_app.domain.timelines.repositories import MemberRepository
from timeline_app.shared.errors import NotFoundError, ValidationError
from timeline_app.shared.identity import Identity, describe
from timeline_app.shared.logging import log_info, log_warning

MemberEntry = Union[str, MemberFields]


async def create_members(
    repository: MemberRepository, gestao_id: int, entries: Sequence[MemberEntry]
) -> list[Member]:
    """Nomes simples recebem display_order = posição na lista."""
    created: list[Member] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, str):
            name = entry.strip()
            if not name:
                continue
            member = Member(gestao_id=gestao_id, name=name, display_order=index)
        else:
            member = Member(
                gestao_id=gestao_id,
                name=entry.name,
                role=entry.role or None,
                photo_url=entry.photo_url or None,
                display_order=entry.display_order if entry.display_order is not None else index,
            )
        created.append(await repository.add(member))
    return created


def to_member_output(member: Member) -> MemberOutput:
    return MemberOutput.model_validate(member)


class MemberService:
    def __init__(self, ownership: OwnershipService, members: MemberRepository) -> None:
        self._ownership = ownership
        self._members = members

    async def list_by_gestao(self, gestao_id: int) -> list[MemberOutput]:
        members = await self._members.list_by_gestao(gestao_id)
        return [to_member_output(member) for member in members]

    async def get(self, member_id: int) -> MemberOutput:
        member = await self._members.get_by_id(member_id)
        if member is None:
            raise NotFoundError('MEMBER_NOT_FOUND', 'Membro não encontrado.')
        return to_member_output(member)

    async def create(self, actor: Identity, payload: MemberCreateInput) -> MemberOutput:
        gestao, _ = await self._ownership.ensure_gestao_authorized(actor, payload.gestao_id, ACTION_EDIT)

        display_order = payload.display_order
        if display_order is None:
            display_order = await self._members.count_by_gestao(gestao.id)

        member = await self._members.add(
            Member(
                gestao_id=gestao.id,
                name=payload.name,
                role=payload.role or None,
                photo_url=payload.photo_url or None,
                display_order=display_order,
            )
        )
        log_info('MEMBER_CREATED', {**describe(actor), 'member_id': member.id, 'gestao_id': gestao.id})
        return to_member_output(member)

    async def update(self, actor: Identity, member_id: int, payload: MemberUpdateInput) -> MemberOutput:
        await self._ownership.ensure_member_authorized(actor, member_id, ACTION_EDIT)

        values = payload.model_dump(exclude_unset=True)
        if 'name' in values and values['name'] is None:
            raise ValidationError('MEMBER_NAME_REQUIRED', 'O nome do membro não pode ser vazio.')
        if 'display_order' in values and values['display_order'] is None:
            values.pop('display_order')

        member = await self._members.update(member_id, **values)
        if member is None:
            raise NotFoundError('MEMBER_NOT_FOUND', 'Membro não encontrado.')
        log_info('MEMBER_UPDATED', {**describe(actor), 'member_id': member_id})
        return to_member_output(member)

    async def delete(self, actor: Identity, member_id: int) -> None:
        await self._ownership.ensure_member_authorized(actor, member_id, ACTION_EDIT)
        await self._members.remove(member_id)
        log_info('MEMBER_DELETED', {**describe(actor), 'member_id': member_id})

    async def reorder(self, actor: Identity, payload: MemberReorderRequest) -> list[MemberOutput]:
        gestao, _ = await self._ownership.ensure_gestao_authorized(actor, payload.gestao_id, ACTION_EDIT)

        entries = [ReorderEntry(id=item.id, display_order=item.display_order) for item in payload.items]
        siblings = await self._members.list_by_gestao(gestao.id)
        try:
            check_reorder_batch(entries, [member.id for member in siblings])
        except ReorderBatchError as exc:
            log_warning('MEMBER_REORDER_REJECTED', {**describe(actor), 'gestao_id': gestao.id, 'code': exc.code, 'ids': exc.ids})
            raise ValidationError(exc.code, 'Itens inválidos para esta gestão.', ids=exc.ids) from exc

        for entry in entries:
            await self._members.set_display_order(entry.id, gestao.id, entry.display_order)

        log_info('MEMBER_REORDERED', {**describe(actor), 'gestao_id': gestao.id, 'count': len(entries)})
        return await self.list_by_gestao(gestao.id)
