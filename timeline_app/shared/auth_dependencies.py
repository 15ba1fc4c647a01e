# caminho: timeline_app/shared/auth_dependencies.py
# Funções:
# - resolve_identity(): resolve a identidade uma vez por requisição
#   (sessão local tem prioridade e dispensa o provedor externo)
# - require_authenticated(): nível autenticado (401)
# - require_admin(): nível admin, com papel do cookie (401/403)
# - require_superadmin(): gestão de usuários, papel relido do banco (401/403)

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from timeline_app.application.admins.use_cases import AdminService
from timeline_app.config import get_settings
from timeline_app.domain.admins.entities import LocalAdmin
from timeline_app.domain.admins.enums import OAUTH_USER_ROLE_DEFAULT
from timeline_app.infrastructure.security.identity_provider import IdentityProvider
from timeline_app.infrastructure.security.session_codec import SessionCodec
from timeline_app.interfaces.api.dependencies import (
    get_admin_service,
    get_identity_provider,
    get_session_codec,
)
from timeline_app.shared.errors import ForbiddenError, UnauthorizedError
from timeline_app.shared.identity import (
    ANONYMOUS,
    Anonymous,
    Identity,
    LocalAdminPrincipal,
    OAuthPrincipal,
    describe,
)
from timeline_app.shared.logging import log_warning


async def resolve_identity(
    request: Request,
    session_codec: SessionCodec = Depends(get_session_codec),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> Identity:
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    claims = session_codec.decode_local_admin(token)
    if claims is not None:
        return LocalAdminPrincipal(
            admin_id=claims.admin_id,
            username=claims.username,
            role=claims.role,
            full_name=claims.full_name,
        )

    user = await identity_provider.authenticate_request(request)
    if user is None:
        return ANONYMOUS
    return OAuthPrincipal(
        user_id=user.id,
        open_id=user.open_id,
        role=user.role or OAUTH_USER_ROLE_DEFAULT,
        name=user.name,
        email=user.email,
    )


async def require_authenticated(identity: Identity = Depends(resolve_identity)) -> Identity:
    if isinstance(identity, Anonymous):
        raise UnauthorizedError('NOT_AUTHENTICATED', 'Faça login para continuar.')
    return identity


async def require_admin(identity: Identity = Depends(require_authenticated)) -> Identity:
    if not identity.is_admin:
        log_warning('ADMIN_TIER_FORBIDDEN', describe(identity))
        raise ForbiddenError('NOT_ADMIN', 'Acesso restrito a administradores.')
    return identity


async def require_local_admin(identity: Identity = Depends(require_admin)) -> LocalAdminPrincipal:
    if not isinstance(identity, LocalAdminPrincipal):
        log_warning('LOCAL_ADMIN_REQUIRED', describe(identity))
        raise ForbiddenError('LOCAL_ADMIN_REQUIRED', 'Sessão de administrador local necessária.')
    return identity


async def require_superadmin(
    identity: Identity = Depends(resolve_identity),
    service: AdminService = Depends(get_admin_service),
) -> LocalAdmin:
    return await service.require_superadmin(identity)


CurrentIdentity = Annotated[Identity, Depends(resolve_identity)]
AuthenticatedIdentity = Annotated[Identity, Depends(require_authenticated)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
LocalAdminIdentity = Annotated[LocalAdminPrincipal, Depends(require_local_admin)]
SuperAdmin = Annotated[LocalAdmin, Depends(require_superadmin)]
