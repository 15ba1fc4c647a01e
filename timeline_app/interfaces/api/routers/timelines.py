# caminho: timeline_app/interfaces/api/routers/timelines.py
# Funções:
# - CRUD de timelines (nível admin + checagem de propriedade/permissão)
# - Exportação, importação e transferência de propriedade

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from timeline_app.application.permissions.dto import TransferOwnershipRequest
from timeline_app.application.timelines.dto import (
    ExportFormat,
    ImportRequest,
    ImportResult,
    TimelineCreateInput,
    TimelineListResponse,
    TimelineOutput,
    TimelineUpdateInput,
)
from timeline_app.application.timelines.use_cases import TimelineService
from timeline_app.config.constants import EXPORT_FORMAT_FULL
from timeline_app.interfaces.api.dependencies import Pagination, get_pagination, get_timeline_service
from timeline_app.shared.auth_dependencies import AdminIdentity

router = APIRouter(prefix='/timelines', tags=['timelines'])


@router.get(
    '/',
    response_model=TimelineListResponse,
    summary='Listar timelines',
    description="""Admins globais (OAuth `admin` ou `superadmin` local) veem todas as timelines.

Admins locais veem as timelines de que são donos e as que receberam por concessão explícita.
""",
)
async def list_timelines(
    identity: AdminIdentity,
    pagination: Pagination = Depends(get_pagination),
    service: TimelineService = Depends(get_timeline_service),
) -> TimelineListResponse:
    return await service.list(identity, pagination.offset, pagination.limit)


@router.get('/{timeline_id}', response_model=TimelineOutput, summary='Detalhar timeline')
async def get_timeline(
    timeline_id: int,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> TimelineOutput:
    return await service.get(identity, timeline_id)


@router.post(
    '/',
    response_model=TimelineOutput,
    status_code=status.HTTP_201_CREATED,
    summary='Criar timeline',
    description="""O admin local que cria a timeline passa a ser o dono.

`slug` é único (409 `TIMELINE_SLUG_EXISTS`). Admins globais sem conta local precisam informar `owner_id`.
""",
)
async def create_timeline(
    payload: TimelineCreateInput,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> TimelineOutput:
    return await service.create(identity, payload)


@router.patch('/{timeline_id}', response_model=TimelineOutput, summary='Editar timeline')
async def update_timeline(
    timeline_id: int,
    payload: TimelineUpdateInput,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> TimelineOutput:
    return await service.update(identity, timeline_id, payload)


@router.delete(
    '/{timeline_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Remover timeline',
    description="""Remove a timeline, todas as suas gestões, os membros dessas gestões e as permissões explícitas.

A remoção é sequencial e não transacional: uma falha no meio do caminho não desfaz as etapas anteriores.
""",
)
async def delete_timeline(
    timeline_id: int,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> None:
    await service.delete(identity, timeline_id)


@router.get(
    '/{timeline_id}/export',
    response_model=None,
    summary='Exportar timeline',
    description="""`format=full` (padrão) inclui cargo, foto e ordem de cada membro.

`format=legacy` gera `{gestoes: [{period, members: [nomes], startActive}]}`.
""",
)
async def export_timeline(
    timeline_id: int,
    identity: AdminIdentity,
    export_format: ExportFormat = Query(EXPORT_FORMAT_FULL, alias='format'),
    service: TimelineService = Depends(get_timeline_service),
) -> dict[str, Any]:
    snapshot = await service.export(identity, timeline_id, export_format)
    return snapshot.model_dump(by_alias=True, mode='json')


@router.post(
    '/{timeline_id}/import',
    response_model=ImportResult,
    status_code=status.HTTP_201_CREATED,
    summary='Importar gestões',
    description="""Recria gestões e membros a partir de um arquivo exportado (legado ou completo).

O formato é detectado pelos itens de `members` (nomes ou objetos). Sempre insere: importar o mesmo
arquivo duas vezes duplica as gestões.
""",
)
async def import_timeline(
    timeline_id: int,
    payload: ImportRequest,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> ImportResult:
    return await service.import_snapshot(identity, timeline_id, payload)


@router.post(
    '/{timeline_id}/transfer',
    response_model=TimelineOutput,
    summary='Transferir propriedade',
    description='Somente o dono atual ou um admin global. Permissões explícitas existentes não são alteradas.',
)
async def transfer_timeline(
    timeline_id: int,
    payload: TransferOwnershipRequest,
    identity: AdminIdentity,
    service: TimelineService = Depends(get_timeline_service),
) -> TimelineOutput:
    return await service.transfer(identity, timeline_id, payload.new_owner_id)
