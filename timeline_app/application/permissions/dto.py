# caminho: timeline_app/application/permissions/dto.py
# Funções:
# - DTOs de concessões explícitas e transferência de propriedade

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PermissionGrantInput(BaseModel):
    model_config = ConfigDict(extra='forbid')

    admin_id: int = Field(gt=0)
    timeline_id: int = Field(gt=0)
    can_edit: bool = False
    can_delete: bool = False


class PermissionRevokeInput(BaseModel):
    model_config = ConfigDict(extra='forbid')

    admin_id: int = Field(gt=0)
    timeline_id: int = Field(gt=0)


class PermissionOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    admin_id: int
    timeline_id: int
    can_edit: bool
    can_delete: bool


class TransferOwnershipRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    new_owner_id: int = Field(gt=0)
