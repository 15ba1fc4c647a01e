# caminho: timeline_app/interfaces/api/routers/auth.py
# Funções:
# - Sessão do provedor de identidade externo (OAuth): usuário atual e logout

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Response

from timeline_app.application.admins.dto import MessageResponse, OAuthUserOutput
from timeline_app.config import get_settings
from timeline_app.shared.auth_dependencies import CurrentIdentity
from timeline_app.shared.identity import OAuthPrincipal

router = APIRouter(prefix='/auth', tags=['auth'])


@router.get(
    '/me',
    response_model=Optional[OAuthUserOutput],
    summary='Usuário OAuth atual',
    description="""Retorna o usuário resolvido pelo provedor externo, ou `null`.

Uma sessão de admin local no cookie tem prioridade: nesse caso o provedor externo nem é consultado
e a resposta é `null` (use `/auth/local/me`).
""",
)
async def me(identity: CurrentIdentity) -> Optional[OAuthUserOutput]:
    if not isinstance(identity, OAuthPrincipal):
        return None
    return OAuthUserOutput(
        id=identity.user_id,
        open_id=identity.open_id,
        name=identity.name,
        email=identity.email,
        role=identity.role,
    )


@router.post('/logout', response_model=MessageResponse, summary='Encerrar sessão')
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME, path='/')
    return MessageResponse(message='Sessão encerrada.')
