# caminho: timeline_app/application/gestoes/dto.py
# Funções:
# - DTOs de gestões (criação com membros opcionais, edição, saída e reordenação)

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from timeline_app.application.members.dto import MemberFields, MemberName, MemberOutput, ReorderItem
from timeline_app.config.constants import PERIOD_LENGTH_MAX


class GestaoCreateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    timeline_id: int = Field(gt=0)
    period: str = Field(min_length=1, max_length=PERIOD_LENGTH_MAX)
    start_active: bool = False
    display_order: Optional[int] = Field(default=None, ge=0)
    # Lista de nomes (formato antigo) ou de objetos completos; listas mistas são rejeitadas
    members: Union[list[MemberName], list[MemberFields]] = Field(default_factory=list)


class GestaoUpdateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    period: Optional[str] = Field(default=None, min_length=1, max_length=PERIOD_LENGTH_MAX)
    start_active: Optional[bool] = None
    display_order: Optional[int] = Field(default=None, ge=0)


class GestaoOutput(BaseModel):
    id: int
    timeline_id: int
    period: str
    start_active: bool
    display_order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    members: list[MemberOutput] = Field(default_factory=list)


class GestaoReorderRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    timeline_id: int = Field(gt=0)
    items: list[ReorderItem] = Field(min_length=1)
