# caminho: timeline_app/infrastructure/security/session_codec.py
# Funções:
# - LocalAdminClaims: claims da sessão do administrador local
# - SessionCodec: codifica/decodifica o token opaco guardado no cookie de sessão

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jwt import PyJWTError, decode, encode
from pydantic import SecretStr

# Discriminador que separa a sessão local da sessão do provedor externo
LOCAL_ADMIN_CLAIM = 'is_local_admin'


@dataclass(slots=True, frozen=True)
class LocalAdminClaims:
    admin_id: int
    username: str
    role: str
    full_name: str | None = None


class SessionCodec:
    """Assina as claims do admin local (JWT HS256) e as lê de volta sem lançar exceções."""

    def __init__(self, secret_key: SecretStr, algorithm: str, expires_seconds: int) -> None:
        self._secret = secret_key
        self._algorithm = algorithm
        self._expires_seconds = expires_seconds

    def encode(self, claims: LocalAdminClaims) -> str:
        payload = {
            LOCAL_ADMIN_CLAIM: True,
            'sub': claims.username,
            'admin_id': claims.admin_id,
            'role': claims.role,
            'full_name': claims.full_name,
            'exp': datetime.now(timezone.utc) + timedelta(seconds=self._expires_seconds),
        }
        return encode(payload, self._secret.get_secret_value(), algorithm=self._algorithm)

    def decode(self, token: str | None) -> dict[str, Any] | None:
        """Retorna o payload bruto ou None; o cookie é controlado pelo cliente."""
        if not token:
            return None
        try:
            payload = decode(token, self._secret.get_secret_value(), algorithms=[self._algorithm])
        except PyJWTError:
            return None
        return payload if isinstance(payload, dict) else None

    def decode_local_admin(self, token: str | None) -> LocalAdminClaims | None:
        payload = self.decode(token)
        if payload is None or payload.get(LOCAL_ADMIN_CLAIM) is not True:
            return None
        try:
            admin_id = int(payload.get('admin_id'))
        except (TypeError, ValueError):
            return None
        username = payload.get('sub')
        role = payload.get('role')
        if not isinstance(username, str) or not isinstance(role, str):
            return None
        full_name = payload.get('full_name')
        return LocalAdminClaims(
            admin_id=admin_id,
            username=username,
            role=role.lower(),
            full_name=full_name if isinstance(full_name, str) else None,
        )
