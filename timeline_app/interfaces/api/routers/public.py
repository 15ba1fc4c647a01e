# caminho: timeline_app/interfaces/api/routers/public.py
# Funções:
# - Visões públicas (sem autenticação) usadas pela página da linha do tempo

from __future__ import annotations

from fastapi import APIRouter, Depends

from timeline_app.application.timelines.dto import PublicTimelineDetail, PublicTimelineOutput
from timeline_app.application.timelines.use_cases import TimelineService
from timeline_app.interfaces.api.dependencies import Pagination, get_pagination, get_timeline_service

router = APIRouter(prefix='/public/timelines', tags=['public'])


@router.get('/', response_model=list[PublicTimelineOutput], summary='Listar timelines públicas')
async def list_public_timelines(
    pagination: Pagination = Depends(get_pagination),
    service: TimelineService = Depends(get_timeline_service),
) -> list[PublicTimelineOutput]:
    return await service.list_public(pagination.offset, pagination.limit)


@router.get(
    '/{slug}',
    response_model=PublicTimelineDetail,
    summary='Linha do tempo completa',
    description="""Timeline com as gestões ordenadas e seus membros.

`active_gestao_id` aponta a gestão marcada com `start_active`, por onde a animação começa.
""",
)
async def get_public_timeline(
    slug: str,
    service: TimelineService = Depends(get_timeline_service),
) -> PublicTimelineDetail:
    return await service.public_detail(slug)
