# caminho: timeline_app/application/timelines/dto.py
# Funções:
# - DTOs de timelines (CRUD, listagem, visões públicas)
# - Formatos de arquivo de exportação/importação (legado e completo)

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from timeline_app.application.gestoes.dto import GestaoOutput
from timeline_app.application.members.dto import MemberName
from timeline_app.config.constants import (
    EXPORT_FORMAT_FULL,
    MEMBER_NAME_LENGTH_MAX,
    MEMBER_ROLE_LENGTH_MAX,
    PERIOD_LENGTH_MAX,
    PHOTO_URL_LENGTH_MAX,
    SLUG_LENGTH_MAX,
    SLUG_PATTERN,
    TIMELINE_NAME_LENGTH_MAX,
)

ExportFormat = Literal['full', 'legacy']


class TimelineCreateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=TIMELINE_NAME_LENGTH_MAX)
    slug: str = Field(min_length=1, max_length=SLUG_LENGTH_MAX, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    # Só é lido quando quem cria é um admin global sem conta local
    owner_id: Optional[int] = Field(default=None, gt=0)


class TimelineUpdateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=TIMELINE_NAME_LENGTH_MAX)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=SLUG_LENGTH_MAX, pattern=SLUG_PATTERN)
    description: Optional[str] = None


class TimelineOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: Optional[str]
    owner_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class TimelineListResponse(BaseModel):
    offset: int
    limit: int
    items: list[TimelineOutput]


class PublicTimelineOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: Optional[str]


class PublicTimelineDetail(BaseModel):
    timeline: PublicTimelineOutput
    gestoes: list[GestaoOutput]
    active_gestao_id: Optional[int] = None


# -- Arquivo de exportação/importação ------------------------------------------
# Chaves em camelCase: é o formato de arquivo compartilhado com o painel antigo.


class SnapshotMember(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=MEMBER_NAME_LENGTH_MAX)
    role: Optional[str] = Field(default=None, max_length=MEMBER_ROLE_LENGTH_MAX)
    photo_url: Optional[str] = Field(default=None, alias='photoUrl', max_length=PHOTO_URL_LENGTH_MAX)
    display_order: Optional[int] = Field(default=None, alias='displayOrder', ge=0)


class LegacySnapshotGestao(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period: str
    members: list[str]
    start_active: bool = Field(default=False, alias='startActive')


class FullSnapshotGestao(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period: str
    start_active: bool = Field(default=False, alias='startActive')
    display_order: int = Field(alias='displayOrder')
    members: list[SnapshotMember]


class SnapshotTimeline(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None


class LegacyExport(BaseModel):
    gestoes: list[LegacySnapshotGestao]


class FullExport(BaseModel):
    format: Literal['full'] = EXPORT_FORMAT_FULL
    timeline: SnapshotTimeline
    gestoes: list[FullSnapshotGestao]


class ImportGestao(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    period: str = Field(min_length=1, max_length=PERIOD_LENGTH_MAX)
    start_active: bool = Field(default=False, alias='startActive')
    display_order: Optional[int] = Field(default=None, alias='displayOrder', ge=0)
    # Nomes (legado) ou objetos (completo); detectado pelo tipo dos itens
    members: Union[list[MemberName], list[SnapshotMember]] = Field(default_factory=list)


class ImportRequest(BaseModel):
    """Aceita tanto o arquivo legado quanto o completo; chaves extras são ignoradas."""

    model_config = ConfigDict(extra='ignore')

    gestoes: list[ImportGestao]


class ImportResult(BaseModel):
    timeline_id: int
    format: ExportFormat
    gestoes_created: int
    members_created: int
