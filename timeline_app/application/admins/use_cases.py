# caminho: timeline_app/application/admins/use_cases.py
# Funções:
# - AdminService: armazenamento de credenciais (hash/verificação), primeiro acesso,
#   login/sessão local e gestão de administradores (somente superadmin)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from pwdlib import PasswordHash

from timeline_app.application.admins.dto import (
    AdminChangePasswordRequest,
    AdminCreateInput,
    AdminOutput,
    AdminUpdateInput,
    FirstAdminInput,
    LocalSessionOutput,
    MessageResponse,
)
from timeline_app.domain.admins.entities import LocalAdmin
from timeline_app.domain.admins.enums import LOCAL_ADMIN_ROLE_SUPERUSER
from timeline_app.domain.admins.repositories import LocalAdminRepository
from timeline_app.domain.timelines.repositories import PermissionRepository, TimelineRepository
from timeline_app.infrastructure.security.session_codec import LocalAdminClaims, SessionCodec
from timeline_app.shared.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)
from timeline_app.shared.identity import Anonymous, Identity, LocalAdminPrincipal, describe
from timeline_app.shared.logging import log_info, log_warning
from timeline_app.shared.rate_limit import LoginRateLimiter, NullLoginRateLimiter


@dataclass(slots=True)
class AdminAdapters:
    admins: LocalAdminRepository
    timelines: TimelineRepository
    permissions: PermissionRepository


class AdminService:
    def __init__(
        self,
        adapters: AdminAdapters,
        password_hasher: PasswordHash,
        session_codec: SessionCodec,
        login_rate_limiter: LoginRateLimiter | None = None,
    ) -> None:
        self._admins = adapters.admins
        self._timelines = adapters.timelines
        self._permissions = adapters.permissions
        self._hasher = password_hasher
        self._codec = session_codec
        self._login_rate_limiter = login_rate_limiter or NullLoginRateLimiter()

    # -- Armazenamento de credenciais ------------------------------------------

    def hash_password(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify_password(self, plaintext: str, password_hash: str) -> bool:
        return self._hasher.verify(plaintext, password_hash)

    async def has_any_admins(self) -> bool:
        return await self._admins.exists_any()

    async def create_admin(self, payload: AdminCreateInput) -> LocalAdmin:
        """Cria o admin; ConflictError se o username já existir."""
        username = payload.username.strip()
        await self._ensure_unique_username(username)

        admin = await self._admins.add(
            LocalAdmin(
                username=username,
                password_hash=self.hash_password(payload.password),
                role=payload.role,
                email=payload.email.lower() if payload.email else None,
                full_name=payload.full_name or None,
                is_active=True,
            )
        )
        log_info('ADMIN_CREATED', {'admin_id': admin.id, 'role': admin.role})
        return admin

    async def verify_credentials(self, username: str, password: str) -> LocalAdmin | None:
        """Retorna o admin ou None, sem distinguir usuário inexistente, inativo ou senha errada."""
        admin = await self._admins.get_by_username(username)
        if admin is None or not admin.is_active:
            return None
        if not self.verify_password(password, admin.password_hash):
            return None
        return admin

    async def set_active(self, admin_id: int, is_active: bool) -> LocalAdmin:
        admin = await self._admins.update(admin_id, is_active=is_active)
        if admin is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Administrador não encontrado.')
        return admin

    async def change_password(self, admin_id: int, new_password: str) -> LocalAdmin:
        admin = await self._admins.update(admin_id, password_hash=self.hash_password(new_password))
        if admin is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Administrador não encontrado.')
        return admin

    async def update_profile(self, admin_id: int, payload: AdminUpdateInput) -> LocalAdmin:
        values = payload.model_dump(exclude_unset=True)
        if 'username' in values:
            if values['username'] is None:
                raise ValidationError('ADMIN_USERNAME_REQUIRED', 'O nome de usuário não pode ser vazio.')
            await self._ensure_unique_username(values['username'], exclude_id=admin_id)
        if 'role' in values and values['role'] is None:
            raise ValidationError('ADMIN_ROLE_REQUIRED', 'O papel não pode ser vazio.')
        if values.get('email'):
            values['email'] = values['email'].lower()

        if not values:
            return await self._require_admin(admin_id)

        admin = await self._admins.update(admin_id, **values)
        if admin is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Administrador não encontrado.')
        return admin

    async def delete_admin(self, admin_id: int) -> None:
        await self._require_admin(admin_id)
        owned = await self._timelines.list_ids_by_owner(admin_id)
        if owned:
            raise ConflictError(
                'ADMIN_OWNS_TIMELINES',
                'Transfira as timelines deste administrador antes de removê-lo.',
                timeline_ids=list(owned),
            )
        await self._permissions.remove_by_admin(admin_id)
        await self._admins.remove(admin_id)

    # -- Primeiro acesso / sessão local -----------------------------------------

    async def create_first_admin(self, payload: FirstAdminInput) -> LocalAdmin:
        if await self.has_any_admins():
            log_warning('FIRST_ADMIN_REJECTED', {'username': payload.username})
            raise ForbiddenError('ADMINS_ALREADY_EXIST', 'Já existem administradores. Use o login.')

        admin = await self.create_admin(
            AdminCreateInput(**payload.model_dump(), role=LOCAL_ADMIN_ROLE_SUPERUSER)
        )
        log_info('FIRST_ADMIN_CREATED', {'admin_id': admin.id})
        return admin

    async def login(self, username: str, password: str) -> tuple[LocalAdmin, str]:
        login_normalized = username.strip().lower()
        allowed, retry_in = await self._login_rate_limiter.acquire(login_normalized)
        if not allowed:
            raise RateLimitedError('LOGIN_RATE_LIMITED', retry_in_seconds=retry_in)

        admin = await self.verify_credentials(login_normalized, password)
        if admin is None:
            log_warning('ADMIN_INVALID_CREDENTIALS', {'login': login_normalized})
            raise UnauthorizedError('ADMIN_INVALID_CREDENTIALS', 'Usuário ou senha inválidos.')

        await self._admins.touch_last_login(admin.id, datetime.now(timezone.utc))
        token = self._codec.encode(
            LocalAdminClaims(
                admin_id=admin.id,
                username=admin.username,
                role=admin.role,
                full_name=admin.full_name,
            )
        )
        log_info('ADMIN_LOGGED_IN', {'admin_id': admin.id})
        return admin, token

    async def current_session(self, principal: LocalAdminPrincipal) -> LocalSessionOutput:
        """Claims do cookie com papel e e-mail relidos do banco."""
        admin = await self._admins.get_by_id(principal.admin_id)
        if admin is None:
            return LocalSessionOutput(
                admin_id=principal.admin_id,
                username=principal.username,
                full_name=principal.full_name,
                role=principal.role,
            )
        return LocalSessionOutput(
            admin_id=admin.id,
            username=admin.username,
            full_name=admin.full_name,
            email=admin.email,
            role=admin.role,
        )

    async def change_own_password(
        self,
        principal: LocalAdminPrincipal,
        payload: AdminChangePasswordRequest,
    ) -> MessageResponse:
        admin = await self._require_admin(principal.admin_id)
        if not self.verify_password(payload.current_password, admin.password_hash):
            log_warning('ADMIN_INVALID_CURRENT_PASSWORD', {'admin_id': admin.id})
            raise ValidationError('ADMIN_INVALID_CURRENT_PASSWORD', 'Senha atual incorreta.')

        await self.change_password(admin.id, payload.new_password)
        log_info('ADMIN_PASSWORD_CHANGED', {'admin_id': admin.id})
        return MessageResponse(message='Senha atualizada com sucesso.')

    # -- Gestão de administradores (superadmin) --------------------------------

    async def require_superadmin(self, identity: Identity) -> LocalAdmin:
        """Relê o papel no banco: o papel guardado no cookie pode estar desatualizado."""
        if isinstance(identity, Anonymous):
            raise UnauthorizedError('NOT_AUTHENTICATED', 'Faça login para continuar.')
        if not isinstance(identity, LocalAdminPrincipal):
            log_warning('SUPERADMIN_REQUIRED', describe(identity))
            raise ForbiddenError('LOCAL_ADMIN_REQUIRED', 'Sessão de administrador local necessária.')

        admin = await self._admins.get_by_id(identity.admin_id)
        if admin is None or not admin.is_active or admin.role != LOCAL_ADMIN_ROLE_SUPERUSER:
            log_warning('SUPERADMIN_FORBIDDEN', describe(identity))
            raise ForbiddenError('SUPERADMIN_REQUIRED', 'Apenas superadmins podem realizar esta ação.')
        return admin

    async def list_admins(self, offset: int, limit: int) -> Sequence[AdminOutput]:
        admins = await self._admins.list(offset, limit)
        return [self.to_output(admin) for admin in admins]

    async def get_admin(self, admin_id: int) -> AdminOutput:
        return self.to_output(await self._require_admin(admin_id))

    async def update_admin(self, admin_id: int, payload: AdminUpdateInput, acting: LocalAdmin) -> AdminOutput:
        if admin_id == acting.id and payload.role is not None and payload.role != acting.role:
            raise ForbiddenError('ADMIN_SELF_ROLE_CHANGE_FORBIDDEN', 'Você não pode alterar o próprio papel.')
        admin = await self.update_profile(admin_id, payload)
        log_info('ADMIN_UPDATED', {'admin_id': admin_id, 'acting_admin_id': acting.id})
        return self.to_output(admin)

    async def toggle_active(self, admin_id: int, is_active: bool, acting: LocalAdmin) -> AdminOutput:
        if admin_id == acting.id and not is_active:
            log_warning('ADMIN_SELF_DEACTIVATE_FORBIDDEN', {'admin_id': admin_id})
            raise ForbiddenError('ADMIN_SELF_DEACTIVATE_FORBIDDEN', 'Você não pode desativar sua própria conta.')
        admin = await self.set_active(admin_id, is_active)
        log_info('ADMIN_ACTIVE_CHANGED', {'admin_id': admin_id, 'is_active': is_active, 'acting_admin_id': acting.id})
        return self.to_output(admin)

    async def reset_password(self, admin_id: int, new_password: str, acting: LocalAdmin) -> MessageResponse:
        await self.change_password(admin_id, new_password)
        log_info('ADMIN_PASSWORD_RESET', {'admin_id': admin_id, 'acting_admin_id': acting.id})
        return MessageResponse(message='Senha atualizada com sucesso.')

    async def remove_admin(self, admin_id: int, acting: LocalAdmin) -> None:
        if admin_id == acting.id:
            log_warning('ADMIN_SELF_DELETE_FORBIDDEN', {'admin_id': admin_id})
            raise ForbiddenError('ADMIN_SELF_DELETE_FORBIDDEN', 'Você não pode remover sua própria conta.')
        await self.delete_admin(admin_id)
        log_info('ADMIN_DELETED', {'admin_id': admin_id, 'acting_admin_id': acting.id})

    # -- Helpers ----------------------------------------------------------------

    async def _require_admin(self, admin_id: int) -> LocalAdmin:
        admin = await self._admins.get_by_id(admin_id)
        if admin is None:
            raise NotFoundError('ADMIN_NOT_FOUND', 'Administrador não encontrado.')
        return admin

    async def _ensure_unique_username(self, username: str, exclude_id: int | None = None) -> None:
        existing = await self._admins.get_by_username(username)
        if existing is not None and existing.id != exclude_id:
            log_warning('ADMIN_ALREADY_EXISTS', {'username': username})
            raise ConflictError('ADMIN_USERNAME_EXISTS', 'Já existe um administrador com este nome de usuário.')

    @staticmethod
    def to_output(admin: LocalAdmin) -> AdminOutput:
        return AdminOutput(
            id=admin.id,
            username=admin.username,
            email=admin.email,
            full_name=admin.full_name,
            role=admin.role,
            is_active=admin.is_active,
            last_login=admin.last_login,
            created_at=admin.created_at,
            updated_at=admin.updated_at,
        )
