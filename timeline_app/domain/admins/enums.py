# caminho: timeline_app/domain/admins/enums.py
# Funções:
# - Define os value objects de papéis dos administradores locais e usuários OAuth.
# - Fornece utilitários para obter escolhas, defaults e checagens de privilégio.

from __future__ import annotations

from typing import Any, Literal, get_args, get_origin


def _choices_from_annotated_literal(annotation: Any) -> tuple[str, ...]:
    """Extrai as opções de um tipo Annotated que contém um Literal."""
    if get_origin(annotation) is Literal:
        literal = annotation
    else:
        literal = next((arg for arg in get_args(annotation) if get_origin(arg) is Literal), None)
    if literal is None:
        msg = f'Annotation {annotation!r} does not include a typing.Literal.'
        raise TypeError(msg)
    return tuple(str(value) for value in get_args(literal))


# ─────────────────────────────────────────────────────────────────────────────
# Papéis do administrador local (usuário/senha)
# Ordem de privilégio: admin < superadmin.
# Apenas superadmin gerencia outros administradores.
# ─────────────────────────────────────────────────────────────────────────────
LocalAdminRole = Literal['admin', 'superadmin']
LOCAL_ADMIN_ROLE_CHOICES: tuple[str, ...] = _choices_from_annotated_literal(LocalAdminRole)
LOCAL_ADMIN_ROLE_DEFAULT: str = 'admin'
LOCAL_ADMIN_ROLE_SUPERUSER: str = 'superadmin'


# ─────────────────────────────────────────────────────────────────────────────
# Papéis do usuário vindo do provedor externo (OAuth)
# 'admin' equivale a superadmin nas checagens de propriedade.
# ─────────────────────────────────────────────────────────────────────────────
OAuthUserRole = Literal['user', 'admin']
OAUTH_USER_ROLE_CHOICES: tuple[str, ...] = _choices_from_annotated_literal(OAuthUserRole)
OAUTH_USER_ROLE_DEFAULT: str = 'user'
OAUTH_USER_ROLE_ADMIN: str = 'admin'


def is_local_admin_role(role: str | None) -> bool:
    """Indica se o papel (vindo do cookie) permite o nível admin."""
    return (role or '').lower() in LOCAL_ADMIN_ROLE_CHOICES


def is_superadmin_role(role: str | None) -> bool:
    return (role or '').lower() == LOCAL_ADMIN_ROLE_SUPERUSER
