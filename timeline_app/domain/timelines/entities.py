# caminho: timeline_app/domain/timelines/entities.py
# Funções:
# - Timeline: recurso raiz com dono (LocalAdmin)
# - Gestao: período de gestão pertencente a uma Timeline
# - Member: membro de uma Gestao
# - Permission: concessão explícita de um admin não-dono sobre uma Timeline

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Member:
    gestao_id: int
    name: str
    display_order: int = 0
    role: Optional[str] = None
    photo_url: Optional[str] = None
    id: Optional[int] = None


@dataclass(slots=True)
class Gestao:
    timeline_id: int
    period: str
    start_active: bool = False
    display_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None
    members: list[Member] = field(default_factory=list)


@dataclass(slots=True)
class Timeline:
    name: str
    slug: str
    owner_id: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None


@dataclass(slots=True)
class Permission:
    admin_id: int
    timeline_id: int
    can_edit: bool = False
    can_delete: bool = False
    id: Optional[int] = None
