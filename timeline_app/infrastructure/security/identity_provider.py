# caminho: timeline_app/infrastructure/security/identity_provider.py
# Funções:
# - IdentityProvider: protocolo do provedor de identidade externo (OAuth)
# - SignedTokenIdentityProvider: valida o token assinado pelo provedor e faz upsert do usuário

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from fastapi import Request
from jwt import PyJWTError, decode
from pydantic import SecretStr

from timeline_app.domain.admins.entities import OAuthUser
from timeline_app.domain.admins.enums import OAUTH_USER_ROLE_ADMIN
from timeline_app.domain.admins.repositories import OAuthUserRepository
from timeline_app.shared.logging import log_info


class IdentityProvider(Protocol):
    async def authenticate_request(self, request: Request) -> OAuthUser | None: ...


def _bearer_token(request: Request) -> str | None:
    authorization = request.headers.get('authorization') or ''
    scheme, _, value = authorization.partition(' ')
    if scheme.lower() == 'bearer' and value.strip():
        return value.strip()
    return None


class SignedTokenIdentityProvider:
    """Lê o token do provedor (Bearer ou cookie de sessão) e sincroniza o usuário local."""

    def __init__(
        self,
        *,
        secret_key: SecretStr,
        algorithm: str,
        cookie_name: str,
        users: OAuthUserRepository,
        owner_open_id: str | None = None,
    ) -> None:
        self._secret = secret_key
        self._algorithm = algorithm
        self._cookie_name = cookie_name
        self._users = users
        self._owner_open_id = owner_open_id

    async def authenticate_request(self, request: Request) -> OAuthUser | None:
        token = _bearer_token(request) or request.cookies.get(self._cookie_name)
        if not token:
            return None
        try:
            payload = decode(token, self._secret.get_secret_value(), algorithms=[self._algorithm])
        except PyJWTError:
            return None

        open_id = payload.get('open_id') or payload.get('sub')
        if not isinstance(open_id, str) or not open_id:
            return None

        role = OAUTH_USER_ROLE_ADMIN if self._owner_open_id and open_id == self._owner_open_id else None
        user = await self._users.upsert(
            OAuthUser(
                open_id=open_id,
                name=payload.get('name'),
                email=payload.get('email'),
                login_method=payload.get('login_method'),
                role=role,
                last_signed_in=datetime.now(timezone.utc),
            )
        )
        log_info('OAUTH_USER_RESOLVED', {'user_id': user.id, 'role': user.role})
        return user
