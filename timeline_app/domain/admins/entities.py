# caminho: timeline_app/domain/admins/entities.py
# Funções:
# - LocalAdmin: entidade do administrador local (usuário/senha)
# - OAuthUser: usuário resolvido pelo provedor de identidade externo

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class LocalAdmin:
    username: str
    password_hash: str
    role: str
    is_active: bool = True
    email: Optional[str] = None
    full_name: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None


@dataclass(slots=True)
class OAuthUser:
    open_id: str
    role: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    last_signed_in: Optional[datetime] = None
    id: Optional[int] = None
