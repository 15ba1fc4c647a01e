# caminho: timeline_app/infrastructure/db/__init__.py
# Funções:
# - expõe Base para create_all/migrations

from __future__ import annotations

from timeline_app.infrastructure.db.base import Base
from timeline_app.infrastructure.db import models  # noqa: F401

__all__ = ['Base']
