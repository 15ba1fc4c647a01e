# caminho: timeline_app/infrastructure/db/models.py
# Funções:
# - Declarar modelos SQLAlchemy (LocalAdminModel, OAuthUserModel, TimelineModel,
#   GestaoModel, MemberModel, PermissionModel)
#
# As chaves estrangeiras não usam ON DELETE CASCADE: a limpeza de filhos é feita
# manualmente pelos serviços (membros -> gestão -> timeline).

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from timeline_app.infrastructure.db.base import Base


class LocalAdminModel(Base):
    __tablename__ = 'local_admins'

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False, server_default=text("'admin'"), default='admin')
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=text('true'), default=True, nullable=False)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (Index('ix_local_admin_username_ci', func.lower(username), unique=True),)


class OAuthUserModel(Base):
    __tablename__ = 'oauth_users'

    id: Mapped[int] = mapped_column(primary_key=True)
    open_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    login_method: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, server_default=text("'user'"), default='user')

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    last_signed_in: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimelineModel(Base):
    __tablename__ = 'timelines'

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey('local_admins.id'), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class GestaoModel(Base):
    __tablename__ = 'gestoes'

    id: Mapped[int] = mapped_column(primary_key=True)
    timeline_id: Mapped[int] = mapped_column(ForeignKey('timelines.id'), nullable=False, index=True)
    period: Mapped[str] = mapped_column(String(50), nullable=False)
    start_active: Mapped[bool] = mapped_column(Boolean, server_default=text('false'), default=False, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, server_default=text('0'), default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (Index('ix_gestoes_timeline_order', 'timeline_id', 'display_order'),)


class MemberModel(Base):
    __tablename__ = 'members'

    id: Mapped[int] = mapped_column(primary_key=True)
    gestao_id: Mapped[int] = mapped_column(ForeignKey('gestoes.id'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, server_default=text('0'), default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class PermissionModel(Base):
    __tablename__ = 'timeline_permissions'

    id: Mapped[int] = mapped_column(primary_key=True)
    admin_id: Mapped[int] = mapped_column(ForeignKey('local_admins.id'), nullable=False, index=True)
    timeline_id: Mapped[int] = mapped_column(ForeignKey('timelines.id'), nullable=False, index=True)
    can_edit: Mapped[bool] = mapped_column(Boolean, server_default=text('false'), default=False, nullable=False)
    can_delete: Mapped[bool] = mapped_column(Boolean, server_default=text('false'), default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (UniqueConstraint('admin_id', 'timeline_id', name='ux_permission_admin_timeline'),)
