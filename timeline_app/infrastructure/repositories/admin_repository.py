# caminho: timeline_app/infrastructure/repositories/admin_repository.py
# Funções:
# - LocalAdminRepositoryImpl: implementação SQLAlchemy do protocolo LocalAdminRepository
# - OAuthUserRepositoryImpl: implementação para usuários do provedor externo

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from timeline_app.domain.admins.entities import LocalAdmin, OAuthUser
from timeline_app.domain.admins.enums import OAUTH_USER_ROLE_DEFAULT
from timeline_app.domain.admins.repositories import LocalAdminRepository, OAuthUserRepository
from timeline_app.infrastructure.db.models import LocalAdminModel, OAuthUserModel
from timeline_app.infrastructure.db.utils import try_commit

_UPDATABLE_ADMIN_FIELDS = frozenset({'username', 'email', 'full_name', 'role', 'is_active', 'password_hash'})


def _to_domain_admin(model: LocalAdminModel) -> LocalAdmin:
    return LocalAdmin(
        id=model.id,
        username=model.username,
        email=model.email,
        password_hash=model.password_hash,
        full_name=model.full_name,
        role=model.role,
        is_active=model.is_active,
        last_login=model.last_login,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_domain_oauth_user(model: OAuthUserModel) -> OAuthUser:
    return OAuthUser(
        id=model.id,
        open_id=model.open_id,
        name=model.name,
        email=model.email,
        login_method=model.login_method,
        role=model.role,
        last_signed_in=model.last_signed_in,
    )


class LocalAdminRepositoryImpl(LocalAdminRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, admin: LocalAdmin) -> LocalAdmin:
        model = LocalAdminModel(
            username=admin.username,
            email=admin.email,
            password_hash=admin.password_hash,
            full_name=admin.full_name,
            role=admin.role,
            is_active=admin.is_active,
        )
        self._session.add(model)
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_admin(model)

    async def get_by_id(self, admin_id: int) -> Optional[LocalAdmin]:
        stmt = select(LocalAdminModel).where(LocalAdminModel.id == admin_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain_admin(model) if model else None

    async def get_by_username(self, username: str) -> Optional[LocalAdmin]:
        stmt = select(LocalAdminModel).where(func.lower(LocalAdminModel.username) == username.strip().lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain_admin(model) if model else None

    async def list(self, offset: int, limit: int) -> Sequence[LocalAdmin]:
        stmt = select(LocalAdminModel).order_by(LocalAdminModel.id).offset(offset).limit(limit)
        result = await self._session.execute(stmt)
        return [_to_domain_admin(model) for model in result.scalars().all()]

    async def exists_any(self) -> bool:
        stmt = select(LocalAdminModel.id).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update(self, admin_id: int, **values) -> Optional[LocalAdmin]:
        unknown = set(values) - _UPDATABLE_ADMIN_FIELDS
        if unknown:
            raise ValueError(f'Campos não atualizáveis: {sorted(unknown)}')

        stmt = select(LocalAdminModel).where(LocalAdminModel.id == admin_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        for key, value in values.items():
            setattr(model, key, value)
        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_admin(model)

    async def touch_last_login(self, admin_id: int, when: datetime) -> None:
        stmt = update(LocalAdminModel).where(LocalAdminModel.id == admin_id).values(last_login=when)
        await self._session.execute(stmt)
        await try_commit(self._session)

    async def remove(self, admin_id: int) -> bool:
        stmt = select(LocalAdminModel).where(LocalAdminModel.id == admin_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        await try_commit(self._session)
        return True


class OAuthUserRepositoryImpl(OAuthUserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, user: OAuthUser) -> OAuthUser:
        stmt = select(OAuthUserModel).where(OAuthUserModel.open_id == user.open_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        signed_in_at = user.last_signed_in or datetime.now(timezone.utc)

        if model is None:
            model = OAuthUserModel(
                open_id=user.open_id,
                name=user.name,
                email=user.email,
                login_method=user.login_method,
                role=user.role or OAUTH_USER_ROLE_DEFAULT,
                last_signed_in=signed_in_at,
            )
            self._session.add(model)
        else:
            # Campos ausentes (None) não sobrescrevem o que já está salvo
            if user.name is not None:
                model.name = user.name
            if user.email is not None:
                model.email = user.email
            if user.login_method is not None:
                model.login_method = user.login_method
            if user.role is not None:
                model.role = user.role
            model.last_signed_in = signed_in_at

        await self._session.flush()
        await try_commit(self._session)
        await self._session.refresh(model)
        return _to_domain_oauth_user(model)

    async def get_by_open_id(self, open_id: str) -> Optional[OAuthUser]:
        stmt = select(OAuthUserModel).where(OAuthUserModel.open_id == open_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_domain_oauth_user(model) if model else None
