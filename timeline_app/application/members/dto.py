# caminho: timeline_app/application/members/dto.py
# Funções:
# - DTOs de membros (criação, edição, saída e reordenação)

from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from timeline_app.config.constants import MEMBER_NAME_LENGTH_MAX, MEMBER_ROLE_LENGTH_MAX, PHOTO_URL_LENGTH_MAX

# Nome simples de membro (formato antigo das listas de membros)
MemberName = Annotated[str, Field(max_length=MEMBER_NAME_LENGTH_MAX)]


class MemberFields(BaseModel):
    """Membro aninhado (criação de gestão)."""

    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=MEMBER_NAME_LENGTH_MAX)
    role: Optional[str] = Field(default=None, max_length=MEMBER_ROLE_LENGTH_MAX)
    photo_url: Optional[str] = Field(default=None, max_length=PHOTO_URL_LENGTH_MAX)
    display_order: Optional[int] = Field(default=None, ge=0)


class MemberCreateInput(MemberFields):
    gestao_id: int = Field(gt=0)


class MemberUpdateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=MEMBER_NAME_LENGTH_MAX)
    role: Optional[str] = Field(default=None, max_length=MEMBER_ROLE_LENGTH_MAX)
    photo_url: Optional[str] = Field(default=None, max_length=PHOTO_URL_LENGTH_MAX)
    display_order: Optional[int] = Field(default=None, ge=0)


class MemberOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    gestao_id: int
    name: str
    role: Optional[str]
    photo_url: Optional[str]
    display_order: int


class ReorderItem(BaseModel):
    model_config = ConfigDict(extra='forbid')

    id: int = Field(gt=0)
    display_order: int = Field(ge=0)


class MemberReorderRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    gestao_id: int = Field(gt=0)
    items: list[ReorderItem] = Field(min_length=1)
