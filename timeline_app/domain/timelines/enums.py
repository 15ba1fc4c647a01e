# caminho: timeline_app/domain/timelines/enums.py
# Funções:
# - TimelineAction: ações verificadas pelo serviço de propriedade/permissões

from __future__ import annotations

from typing import Literal

TimelineAction = Literal['read', 'edit', 'delete']

ACTION_READ: str = 'read'
ACTION_EDIT: str = 'edit'
ACTION_DELETE: str = 'delete'
