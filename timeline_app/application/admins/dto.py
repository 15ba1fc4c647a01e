# caminho: timeline_app/application/admins/dto.py
# Funções:
# - DTOs Pydantic para entrada/saída dos casos de uso de administradores locais

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from timeline_app.config.constants import (
    FULL_NAME_LENGTH_MAX,
    PASSWORD_LENGTH_MAX,
    PASSWORD_LENGTH_MIN,
    USERNAME_LENGTH_MAX,
    USERNAME_LENGTH_MIN,
)
from timeline_app.domain.admins.enums import LOCAL_ADMIN_ROLE_DEFAULT, LocalAdminRole


class FirstAdminInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    username: str = Field(min_length=USERNAME_LENGTH_MIN, max_length=USERNAME_LENGTH_MAX)
    password: str = Field(min_length=PASSWORD_LENGTH_MIN, max_length=PASSWORD_LENGTH_MAX)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(default=None, max_length=FULL_NAME_LENGTH_MAX)


class AdminCreateInput(FirstAdminInput):
    role: LocalAdminRole = Field(default=LOCAL_ADMIN_ROLE_DEFAULT)


class AdminUpdateInput(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    username: Optional[str] = Field(default=None, min_length=USERNAME_LENGTH_MIN, max_length=USERNAME_LENGTH_MAX)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(default=None, max_length=FULL_NAME_LENGTH_MAX)
    role: Optional[LocalAdminRole] = None


class AdminSetActiveRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    is_active: bool


class AdminLoginRequest(BaseModel):
    model_config = ConfigDict(extra='forbid', str_strip_whitespace=True)

    username: str = Field(min_length=1, max_length=USERNAME_LENGTH_MAX)
    password: str = Field(min_length=1, max_length=PASSWORD_LENGTH_MAX)


class AdminChangePasswordRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    current_password: str = Field(min_length=1, max_length=PASSWORD_LENGTH_MAX)
    new_password: str = Field(min_length=PASSWORD_LENGTH_MIN, max_length=PASSWORD_LENGTH_MAX)


class AdminSetPasswordRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    new_password: str = Field(min_length=PASSWORD_LENGTH_MIN, max_length=PASSWORD_LENGTH_MAX)


class AdminOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str]
    full_name: Optional[str]
    role: LocalAdminRole
    is_active: bool
    last_login: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class AdminListResponse(BaseModel):
    offset: int
    limit: int
    items: list[AdminOutput]


class HasAdminsResponse(BaseModel):
    has_admins: bool


class LocalSessionOutput(BaseModel):
    is_local_admin: bool = True
    admin_id: int
    username: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: str


class OAuthUserOutput(BaseModel):
    id: int
    open_id: str
    name: Optional[str]
    email: Optional[str]
    role: str


class MessageResponse(BaseModel):
    message: str
