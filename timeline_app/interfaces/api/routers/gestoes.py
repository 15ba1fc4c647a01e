# caminho: timeline_app/interfaces/api/routers/gestoes.py
# Funções:
# - Leitura pública de gestões
# - Criação/edição/remoção/reordenação (nível admin + permissão na timeline)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from timeline_app.application.gestoes.dto import (
    GestaoCreateInput,
    GestaoOutput,
    GestaoReorderRequest,
    GestaoUpdateInput,
)
from timeline_app.application.gestoes.use_cases import GestaoService
from timeline_app.interfaces.api.dependencies import get_gestao_service
from timeline_app.shared.auth_dependencies import AdminIdentity

router = APIRouter(prefix='/gestoes', tags=['gestoes'])


@router.get(
    '/',
    response_model=list[GestaoOutput],
    summary='Listar gestões da timeline',
    description='Público. Ordenadas por `display_order` e depois por `period`, cada uma com seus membros.',
)
async def list_gestoes(
    timeline_id: int = Query(..., gt=0),
    service: GestaoService = Depends(get_gestao_service),
) -> list[GestaoOutput]:
    return await service.list_by_timeline(timeline_id)


@router.get('/{gestao_id}', response_model=GestaoOutput, summary='Detalhar gestão')
async def get_gestao(
    gestao_id: int,
    service: GestaoService = Depends(get_gestao_service),
) -> GestaoOutput:
    return await service.get(gestao_id)


@router.post(
    '/',
    response_model=GestaoOutput,
    status_code=status.HTTP_201_CREATED,
    summary='Criar gestão',
    description="""Cria a gestão e, opcionalmente, seus membros (lista de nomes ou de objetos).

**Regras**:
- Sem `display_order`, a gestão entra depois das existentes.
- Com `start_active=true`, as demais gestões da timeline deixam de ser a inicial.
""",
)
async def create_gestao(
    payload: GestaoCreateInput,
    identity: AdminIdentity,
    service: GestaoService = Depends(get_gestao_service),
) -> GestaoOutput:
    return await service.create(identity, payload)


@router.patch('/{gestao_id}', response_model=GestaoOutput, summary='Editar gestão')
async def update_gestao(
    gestao_id: int,
    payload: GestaoUpdateInput,
    identity: AdminIdentity,
    service: GestaoService = Depends(get_gestao_service),
) -> GestaoOutput:
    return await service.update(identity, gestao_id, payload)


@router.delete(
    '/{gestao_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Remover gestão',
    description='Remove primeiro os membros e depois a gestão.',
)
async def delete_gestao(
    gestao_id: int,
    identity: AdminIdentity,
    service: GestaoService = Depends(get_gestao_service),
) -> None:
    await service.delete(identity, gestao_id)


@router.post(
    '/reorder',
    response_model=list[GestaoOutput],
    summary='Reordenar gestões',
    description="""Aplica `display_order` a cada item do lote e devolve a lista atualizada.

Todos os ids precisam pertencer a `timeline_id` e aparecer uma única vez; caso contrário responde 422
sem gravar nada. Não há transação entre as linhas: em caso de erro o cliente deve recarregar a lista.
""",
)
async def reorder_gestoes(
    payload: GestaoReorderRequest,
    identity: AdminIdentity,
    service: GestaoService = Depends(get_gestao_service),
) -> list[GestaoOutput]:
    return await service.reorder(identity, payload)
