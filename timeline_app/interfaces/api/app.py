# caminho: timeline_app/interfaces/api/app.py
# Funções:
# - create_application(): configura FastAPI com lifespan, handlers de erro e rotas

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from timeline_app.config import get_settings
from timeline_app.interfaces.api.routers import (
    auth,
    auth_local,
    gestoes,
    members,
    permissions,
    public,
    timelines,
    users,
)
from timeline_app.shared.logging import log_error, log_info, log_warning, setup_logging
from timeline_app.shared.system_bootstrap import bootstrap_database, bootstrap_root_admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    await bootstrap_database()
    await bootstrap_root_admin()
    log_info('APP_STARTUP', {'environment': get_settings().DEPLOYMENT_ENVIRONMENT})

    yield

    log_info('APP_SHUTDOWN', {'reason': 'lifespan'})


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # Corrida em chaves únicas (username, slug, par admin/timeline)
    log_warning('DB_INTEGRITY_ERROR', {'path': request.url.path, 'error': str(exc.orig)})
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={'detail': {'code': 'CONFLICT', 'message': 'Conflito com um registro existente.'}},
    )


async def database_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    log_error('DB_UNAVAILABLE', {'path': request.url.path, 'error': exc.__class__.__name__})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={'detail': {'code': 'INTERNAL', 'message': 'Banco de dados indisponível.'}},
    )


def create_application() -> FastAPI:
    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, to_file=settings.LOG_TO_FILE)

    app = FastAPI(
        title='timeline-app',
        version='1.0.0',
        lifespan=lifespan,
    )

    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(OperationalError, database_error_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)

    app.include_router(auth_local.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(timelines.router)
    app.include_router(permissions.router)
    app.include_router(gestoes.router)
    app.include_router(members.router)
    app.include_router(public.router)

    return app
