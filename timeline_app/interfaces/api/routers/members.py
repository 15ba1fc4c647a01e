# caminho: timeline_app/interfaces/api/routers/members.py
# Funções:
# - Leitura pública de membros
# - Criação/edição/remoção/reordenação (autorizadas via Membro -> Gestão -> Timeline)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from timeline_app.application.members.dto import (
    MemberCreateInput,
    MemberOutput,
    MemberReorderRequest,
    MemberUpdateInput,
)
from timeline_app.application.members.use_cases import MemberService
from timeline_app.interfaces.api.dependencies import get_member_service
from timeline_app.shared.auth_dependencies import AdminIdentity

router = APIRouter(prefix='/members', tags=['members'])


@router.get('/', response_model=list[MemberOutput], summary='Listar membros da gestão')
async def list_members(
    gestao_id: int = Query(..., gt=0),
    service: MemberService = Depends(get_member_service),
) -> list[MemberOutput]:
    return await service.list_by_gestao(gestao_id)


@router.get('/{member_id}', response_model=MemberOutput, summary='Detalhar membro')
async def get_member(
    member_id: int,
    service: MemberService = Depends(get_member_service),
) -> MemberOutput:
    return await service.get(member_id)


@router.post('/', response_model=MemberOutput, status_code=status.HTTP_201_CREATED, summary='Criar membro')
async def create_member(
    payload: MemberCreateInput,
    identity: AdminIdentity,
    service: MemberService = Depends(get_member_service),
) -> MemberOutput:
    return await service.create(identity, payload)


@router.patch('/{member_id}', response_model=MemberOutput, summary='Editar membro')
async def update_member(
    member_id: int,
    payload: MemberUpdateInput,
    identity: AdminIdentity,
    service: MemberService = Depends(get_member_service),
) -> MemberOutput:
    return await service.update(identity, member_id, payload)


@router.delete('/{member_id}', status_code=status.HTTP_204_NO_CONTENT, summary='Remover membro')
async def delete_member(
    member_id: int,
    identity: AdminIdentity,
    service: MemberService = Depends(get_member_service),
) -> None:
    await service.delete(identity, member_id)


@router.post(
    '/reorder',
    response_model=list[MemberOutput],
    summary='Reordenar membros',
    description='Mesmo contrato da reordenação de gestões, restrito aos membros de `gestao_id`.',
)
async def reorder_members(
    payload: MemberReorderRequest,
    identity: AdminIdentity,
    service: MemberService = Depends(get_member_service),
) -> list[MemberOutput]:
    return await service.reorder(identity, payload)
