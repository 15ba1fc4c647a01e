# caminho: timeline_app/interfaces/api/dependencies.py
# Funções:
# - get_session_codec(): codec do cookie de sessão local
# - get_identity_provider(): adaptador do provedor de identidade externo
# - get_admin_service(), get_ownership_service(), get_timeline_service(),
#   get_gestao_service(), get_member_service(): serviços com adapters concretos
# - get_pagination(): offset/limit padronizados

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Query
from pwdlib import PasswordHash

from timeline_app.application.admins.use_cases import AdminAdapters, AdminService
from timeline_app.application.gestoes.use_cases import GestaoService
from timeline_app.application.members.use_cases import MemberService
from timeline_app.application.permissions.use_cases import OwnershipAdapters, OwnershipService
from timeline_app.application.timelines.use_cases import TimelineAdapters, TimelineService
from timeline_app.config import get_settings
from timeline_app.infrastructure.cache.redis import get_redis_client
from timeline_app.infrastructure.db.base import get_session
from timeline_app.infrastructure.repositories.admin_repository import (
    LocalAdminRepositoryImpl,
    OAuthUserRepositoryImpl,
)
from timeline_app.infrastructure.repositories.timeline_repository import (
    GestaoRepositoryImpl,
    MemberRepositoryImpl,
    PermissionRepositoryImpl,
    TimelineRepositoryImpl,
)
from timeline_app.infrastructure.security.identity_provider import IdentityProvider, SignedTokenIdentityProvider
from timeline_app.infrastructure.security.session_codec import SessionCodec
from timeline_app.shared.rate_limit import NullLoginRateLimiter, RedisLoginRateLimiter

_password_hasher = PasswordHash.recommended()


@dataclass(slots=True, frozen=True)
class Pagination:
    offset: int
    limit: int


def get_pagination(
    offset: int = Query(0, ge=0),
    limit: int = Query(get_settings().PAGINATION_LIMIT, ge=1, le=get_settings().PAGINATION_MAX_LIMIT),
) -> Pagination:
    return Pagination(offset=offset, limit=limit)


def get_session_codec() -> SessionCodec:
    settings = get_settings()
    return SessionCodec(settings.SESSION_SECRET_KEY, settings.SESSION_ALGORITHM, settings.SESSION_EXPIRE_SECONDS)


async def get_identity_provider(session=Depends(get_session)) -> IdentityProvider:
    settings = get_settings()
    return SignedTokenIdentityProvider(
        secret_key=settings.OAUTH_PROVIDER_SECRET,
        algorithm=settings.OAUTH_PROVIDER_ALGORITHM,
        cookie_name=settings.SESSION_COOKIE_NAME,
        users=OAuthUserRepositoryImpl(session),
        owner_open_id=settings.OAUTH_OWNER_OPEN_ID,
    )


async def get_admin_service(
    session=Depends(get_session),
    redis_client=Depends(get_redis_client),
    session_codec: SessionCodec = Depends(get_session_codec),
) -> AdminService:
    settings = get_settings()
    adapters = AdminAdapters(
        admins=LocalAdminRepositoryImpl(session),
        timelines=TimelineRepositoryImpl(session),
        permissions=PermissionRepositoryImpl(session),
    )
    if redis_client is None:
        login_rate_limiter = NullLoginRateLimiter()
    else:
        login_rate_limiter = RedisLoginRateLimiter(
            redis_client,
            interval_seconds=settings.LOGIN_RATE_LIMIT_INTERVAL_SECONDS,
            prefix='auth:local:login',
        )
    return AdminService(
        adapters=adapters,
        password_hasher=_password_hasher,
        session_codec=session_codec,
        login_rate_limiter=login_rate_limiter,
    )


async def get_ownership_service(session=Depends(get_session)) -> OwnershipService:
    return OwnershipService(
        OwnershipAdapters(
            admins=LocalAdminRepositoryImpl(session),
            timelines=TimelineRepositoryImpl(session),
            gestoes=GestaoRepositoryImpl(session),
            members=MemberRepositoryImpl(session),
            permissions=PermissionRepositoryImpl(session),
        )
    )


async def get_timeline_service(
    session=Depends(get_session),
    ownership: OwnershipService = Depends(get_ownership_service),
) -> TimelineService:
    adapters = TimelineAdapters(
        admins=LocalAdminRepositoryImpl(session),
        timelines=TimelineRepositoryImpl(session),
        gestoes=GestaoRepositoryImpl(session),
        members=MemberRepositoryImpl(session),
        permissions=PermissionRepositoryImpl(session),
    )
    return TimelineService(adapters, ownership)


async def get_gestao_service(
    session=Depends(get_session),
    ownership: OwnershipService = Depends(get_ownership_service),
) -> GestaoService:
    return GestaoService(ownership, GestaoRepositoryImpl(session), MemberRepositoryImpl(session))


async def get_member_service(
    session=Depends(get_session),
    ownership: OwnershipService = Depends(get_ownership_service),
) -> MemberService:
    return MemberService(ownership, MemberRepositoryImpl(session))
