# caminho: timeline_app/interfaces/api/routers/users.py
# Funções:
# - Gestão de administradores locais (somente superadmin, papel relido do banco)

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from timeline_app.application.admins.dto import (
    AdminCreateInput,
    AdminListResponse,
    AdminOutput,
    AdminSetActiveRequest,
    AdminSetPasswordRequest,
    AdminUpdateInput,
    MessageResponse,
)
from timeline_app.application.admins.use_cases import AdminService
from timeline_app.interfaces.api.dependencies import Pagination, get_admin_service, get_pagination
from timeline_app.shared.auth_dependencies import SuperAdmin
from timeline_app.shared.logging import log_info

router = APIRouter(prefix='/admin/users', tags=['admin-users'])


@router.get(
    '/',
    response_model=AdminListResponse,
    summary='Listar administradores',
    description="""Retorna administradores locais paginados em ordem crescente de `id`.

**Proteções**:
- Exige sessão local de `superadmin`; o papel é conferido no banco a cada chamada.
""",
)
async def list_admins(
    acting: SuperAdmin,
    pagination: Pagination = Depends(get_pagination),
    service: AdminService = Depends(get_admin_service),
) -> AdminListResponse:
    admins = await service.list_admins(pagination.offset, pagination.limit)
    return AdminListResponse(offset=pagination.offset, limit=pagination.limit, items=list(admins))


@router.get('/{admin_id}', response_model=AdminOutput, summary='Detalhar administrador')
async def get_admin(
    admin_id: int,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> AdminOutput:
    return await service.get_admin(admin_id)


@router.post(
    '/',
    response_model=AdminOutput,
    status_code=status.HTTP_201_CREATED,
    summary='Criar administrador',
    description='Cria um admin local com papel `admin` ou `superadmin`. Nome de usuário repetido responde 409.',
)
async def create_admin(
    payload: AdminCreateInput,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> AdminOutput:
    log_info('create_admin', {'username': payload.username, 'role': payload.role, 'acting_admin_id': acting.id})
    admin = await service.create_admin(payload)
    return service.to_output(admin)


@router.patch('/{admin_id}', response_model=AdminOutput, summary='Editar administrador')
async def update_admin(
    admin_id: int,
    payload: AdminUpdateInput,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> AdminOutput:
    return await service.update_admin(admin_id, payload, acting)


@router.patch(
    '/{admin_id}/active',
    response_model=AdminOutput,
    summary='Ativar/desativar administrador',
    description="""Contas inativas não conseguem mais fazer login.

**Regras**:
- Não é possível desativar a própria conta (403 `ADMIN_SELF_DEACTIVATE_FORBIDDEN`).
""",
)
async def set_active(
    admin_id: int,
    payload: AdminSetActiveRequest,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> AdminOutput:
    return await service.toggle_active(admin_id, payload.is_active, acting)


@router.patch('/{admin_id}/password', response_model=MessageResponse, summary='Redefinir senha de outro admin')
async def reset_password(
    admin_id: int,
    payload: AdminSetPasswordRequest,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    return await service.reset_password(admin_id, payload.new_password, acting)


@router.delete(
    '/{admin_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    summary='Remover administrador',
    description="""Exclui o administrador e as permissões explícitas concedidas a ele.

**Regras**:
- Não é possível remover a própria conta (403).
- Enquanto o alvo for dono de alguma timeline, responde 409 `ADMIN_OWNS_TIMELINES`.
""",
)
async def delete_admin(
    admin_id: int,
    acting: SuperAdmin,
    service: AdminService = Depends(get_admin_service),
) -> None:
    await service.remove_admin(admin_id, acting)
