# caminho: timeline_app/interfaces/api/routers/permissions.py
# Funções:
# - Concessões explícitas de permissão sobre timelines (dono ou admin global)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from timeline_app.application.permissions.dto import (
    PermissionGrantInput,
    PermissionOutput,
    PermissionRevokeInput,
)
from timeline_app.application.permissions.use_cases import OwnershipService
from timeline_app.interfaces.api.dependencies import get_ownership_service
from timeline_app.shared.auth_dependencies import AdminIdentity

router = APIRouter(prefix='/permissions', tags=['permissions'])


@router.get('/', response_model=list[PermissionOutput], summary='Listar permissões da timeline')
async def list_permissions(
    identity: AdminIdentity,
    timeline_id: int = Query(..., gt=0),
    service: OwnershipService = Depends(get_ownership_service),
) -> list[PermissionOutput]:
    return await service.list_permissions(identity, timeline_id)


@router.post(
    '/',
    response_model=PermissionOutput,
    summary='Conceder permissão',
    description="""Cria ou atualiza a concessão (admin, timeline).

`can_edit` libera edições da timeline e de suas gestões/membros; `can_delete` libera a remoção da timeline.
Qualquer concessão existente libera a leitura e a exportação.
""",
)
async def grant_permission(
    payload: PermissionGrantInput,
    identity: AdminIdentity,
    service: OwnershipService = Depends(get_ownership_service),
) -> PermissionOutput:
    return await service.grant(identity, payload)


@router.post('/revoke', status_code=status.HTTP_204_NO_CONTENT, summary='Revogar permissão')
async def revoke_permission(
    payload: PermissionRevokeInput,
    identity: AdminIdentity,
    service: OwnershipService = Depends(get_ownership_service),
) -> None:
    await service.revoke(identity, payload)
