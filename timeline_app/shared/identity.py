# caminho: timeline_app/shared/identity.py
# Funções:
# - OAuthPrincipal / LocalAdminPrincipal / Anonymous: identidade resolvida por requisição
# - Identity: variante etiquetada repassada explicitamente aos serviços

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from timeline_app.domain.admins.enums import OAUTH_USER_ROLE_ADMIN, is_local_admin_role, is_superadmin_role


@dataclass(slots=True, frozen=True)
class OAuthPrincipal:
    user_id: int
    open_id: str
    role: str
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == OAUTH_USER_ROLE_ADMIN

    @property
    def is_global_admin(self) -> bool:
        return self.is_admin


@dataclass(slots=True, frozen=True)
class LocalAdminPrincipal:
    """Admin local; `role` vem do cookie e só serve para checagens tolerantes a cache."""

    admin_id: int
    username: str
    role: str
    full_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return is_local_admin_role(self.role)

    @property
    def is_global_admin(self) -> bool:
        return is_superadmin_role(self.role)


@dataclass(slots=True, frozen=True)
class Anonymous:
    is_admin = False
    is_global_admin = False


Identity = Union[OAuthPrincipal, LocalAdminPrincipal, Anonymous]

ANONYMOUS = Anonymous()


def describe(identity: Identity) -> dict[str, str | int]:
    """Resumo da identidade para os logs."""
    if isinstance(identity, LocalAdminPrincipal):
        return {'kind': 'local_admin', 'admin_id': identity.admin_id, 'role': identity.role}
    if isinstance(identity, OAuthPrincipal):
        return {'kind': 'oauth', 'user_id': identity.user_id, 'role': identity.role}
    return {'kind': 'anonymous'}
