# caminho: timeline_app/shared/system_bootstrap.py
# Funções:
# - bootstrap_database(): cria as tabelas na inicialização
# - bootstrap_root_admin(): cria o superadmin root quando configurado e não há nenhum admin

from __future__ import annotations

from pwdlib import PasswordHash

from timeline_app.config import get_settings
from timeline_app.domain.admins.entities import LocalAdmin
from timeline_app.domain.admins.enums import LOCAL_ADMIN_ROLE_SUPERUSER
from timeline_app.infrastructure.db.base import get_sessionmaker, init_models
from timeline_app.infrastructure.repositories.admin_repository import LocalAdminRepositoryImpl
from timeline_app.shared.logging import log_info, log_warning


async def bootstrap_database() -> None:
    await init_models()
    log_info('DATABASE_READY', {'dsn': get_settings().DATABASE_DSN_SAFE})


async def bootstrap_root_admin() -> None:
    """Cria o administrador root padrão caso ainda não exista nenhum admin."""
    settings = get_settings()
    username = (settings.ROOT_AUTH_USER or '').strip().lower()
    email = (settings.ROOT_AUTH_EMAIL or '').strip().lower() or None
    password = settings.ROOT_AUTH_PASSWORD.get_secret_value().strip() if settings.ROOT_AUTH_PASSWORD else ''

    if not username or not password:
        log_info('ROOT_ADMIN_BOOTSTRAP_SKIPPED', {'reason': 'missing_credentials'})
        return

    async with get_sessionmaker()() as session:
        admins = LocalAdminRepositoryImpl(session)
        if await admins.exists_any():
            log_info('ROOT_ADMIN_BOOTSTRAP_SKIPPED', {'reason': 'admins_exist'})
            return

        admin = await admins.add(
            LocalAdmin(
                username=username,
                email=email,
                password_hash=PasswordHash.recommended().hash(password),
                role=LOCAL_ADMIN_ROLE_SUPERUSER,
                is_active=True,
            )
        )
        log_warning('ROOT_ADMIN_BOOTSTRAP_CREATED', {'admin_id': admin.id, 'username': admin.username})
