# caminho: timeline_app/shared/errors.py
# Funções:
# - AppError: HTTPException com detail padronizado {'code', 'message'}
# - UnauthorizedError, ForbiddenError, NotFoundError, ConflictError,
#   ValidationError, InternalError: taxonomia de erros da aplicação

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from fastapi import HTTPException


class AppError(HTTPException):
    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = 'Erro inesperado.'

    def __init__(self, code: str, message: str | None = None, **extra: Any) -> None:
        detail: dict[str, Any] = {'code': code, 'message': message or self.default_message}
        detail.update(extra)
        super().__init__(status_code=self.status, detail=detail)
        self.code = code


class UnauthorizedError(AppError):
    status = HTTPStatus.UNAUTHORIZED
    default_message = 'Não autenticado.'


class ForbiddenError(AppError):
    status = HTTPStatus.FORBIDDEN
    default_message = 'Acesso negado.'


class NotFoundError(AppError):
    status = HTTPStatus.NOT_FOUND
    default_message = 'Registro não encontrado.'


class ConflictError(AppError):
    status = HTTPStatus.CONFLICT
    default_message = 'Conflito com um registro existente.'


class ValidationError(AppError):
    status = HTTPStatus.UNPROCESSABLE_ENTITY
    default_message = 'Dados inválidos.'


class InternalError(AppError):
    status = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = 'Banco de dados indisponível.'


class RateLimitedError(AppError):
    status = HTTPStatus.TOO_MANY_REQUESTS
    default_message = 'Muitas tentativas. Aguarde e tente novamente.'
