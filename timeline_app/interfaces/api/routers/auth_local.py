# caminho: timeline_app/interfaces/api/routers/auth_local.py
# Funções:
# - Autenticação local (usuário/senha): primeiro acesso, login, sessão, logout e troca de senha

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from timeline_app.application.admins.dto import (
    AdminChangePasswordRequest,
    AdminLoginRequest,
    AdminOutput,
    FirstAdminInput,
    HasAdminsResponse,
    LocalSessionOutput,
    MessageResponse,
)
from timeline_app.application.admins.use_cases import AdminService
from timeline_app.config import get_settings
from timeline_app.interfaces.api.dependencies import get_admin_service
from timeline_app.shared.auth_dependencies import CurrentIdentity, LocalAdminIdentity
from timeline_app.shared.identity import LocalAdminPrincipal

router = APIRouter(prefix='/auth/local', tags=['auth-local'])


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite='lax',
        path='/',
    )


@router.get(
    '/has-admins',
    response_model=HasAdminsResponse,
    summary='Existe algum administrador?',
    description='Usado pela tela inicial para decidir entre o cadastro do primeiro admin e o login.',
)
async def has_admins(service: AdminService = Depends(get_admin_service)) -> HasAdminsResponse:
    return HasAdminsResponse(has_admins=await service.has_any_admins())


@router.post(
    '/first-admin',
    response_model=AdminOutput,
    status_code=status.HTTP_201_CREATED,
    summary='Cadastrar o primeiro administrador',
    description="""Cria o primeiro administrador local, sempre com papel `superadmin`.

**Regras**:
- Disponível sem autenticação somente enquanto não existir nenhum administrador.
- Depois disso responde 403 `ADMINS_ALREADY_EXIST`.
""",
)
async def create_first_admin(
    payload: FirstAdminInput,
    service: AdminService = Depends(get_admin_service),
) -> AdminOutput:
    admin = await service.create_first_admin(payload)
    return service.to_output(admin)


@router.post(
    '/login',
    response_model=LocalSessionOutput,
    summary='Login local',
    description="""Valida usuário e senha e grava o cookie de sessão assinado.

Usuário inexistente, conta inativa e senha incorreta produzem a mesma resposta 401
`ADMIN_INVALID_CREDENTIALS`.

**Proteções**:
- Intervalo mínimo entre tentativas por usuário (`LOGIN_RATE_LIMIT_INTERVAL_SECONDS`) quando há Redis.
""",
)
async def login(
    payload: AdminLoginRequest,
    response: Response,
    service: AdminService = Depends(get_admin_service),
) -> LocalSessionOutput:
    admin, token = await service.login(payload.username, payload.password)
    _set_session_cookie(response, token)
    return LocalSessionOutput(
        admin_id=admin.id,
        username=admin.username,
        full_name=admin.full_name,
        email=admin.email,
        role=admin.role,
    )


@router.get(
    '/me',
    response_model=Optional[LocalSessionOutput],
    summary='Sessão local atual',
    description='Retorna as claims da sessão local com papel e e-mail relidos do banco, ou `null`.',
)
async def me(
    identity: CurrentIdentity,
    service: AdminService = Depends(get_admin_service),
) -> Optional[LocalSessionOutput]:
    if not isinstance(identity, LocalAdminPrincipal):
        return None
    return await service.current_session(identity)


@router.post('/logout', response_model=MessageResponse, summary='Encerrar sessão local')
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME, path='/')
    return MessageResponse(message='Sessão encerrada.')


@router.patch(
    '/password',
    response_model=MessageResponse,
    summary='Alterar a própria senha',
    description="""Troca a senha do administrador da sessão atual.

**Regras**:
- A senha atual precisa conferir (422 `ADMIN_INVALID_CURRENT_PASSWORD`).
- O alvo é sempre o próprio admin da sessão.
""",
)
async def change_password(
    payload: AdminChangePasswordRequest,
    principal: LocalAdminIdentity,
    service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    return await service.change_own_password(principal, payload)
