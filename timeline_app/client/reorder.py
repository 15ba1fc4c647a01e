# caminho: timeline_app/client/reorder.py
# Funções:
# - array_move(): move um item de uma posição para outra (cópia)
# - OptimisticReorder: aplica a nova ordem localmente, envia o lote completo e
#   reconcilia com o servidor (recarrega em caso de sucesso ou de falha)

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence, TypeVar

import httpx

from timeline_app.client.api_client import TimelineApiClient
from timeline_app.shared.logging import log_info, log_warning

T = TypeVar('T')

Item = dict[str, Any]
Fetcher = Callable[[], list[Item]]
Committer = Callable[[list[dict[str, int]]], Any]


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


def restamp(items: Sequence[Item]) -> list[dict[str, int]]:
    """Todos os irmãos recebem display_order = posição, não só o item movido."""
    return [{'id': item['id'], 'display_order': position} for position, item in enumerate(items)]


class ReorderStatus(str, Enum):
    NOOP = 'noop'
    CONFIRMED = 'confirmed'
    ROLLED_BACK = 'rolled_back'


@dataclass(slots=True)
class ReorderResult:
    status: ReorderStatus
    items: list[Item] = field(default_factory=list)
    error: Optional[Exception] = None


class OptimisticReorder:
    """Lista ordenável do painel; a lista do servidor é sempre a fonte da verdade."""

    def __init__(
        self,
        fetch: Fetcher,
        commit: Committer,
        on_change: Optional[Callable[[list[Item]], None]] = None,
    ) -> None:
        self._fetch = fetch
        self._commit = commit
        self._on_change = on_change
        self._items: list[Item] = []
        self._confirmed: list[Item] = []

    @classmethod
    def for_gestoes(cls, client: TimelineApiClient, timeline_id: int, **kwargs: Any) -> OptimisticReorder:
        return cls(
            fetch=lambda: client.list_gestoes(timeline_id),
            commit=lambda items: client.reorder_gestoes(timeline_id, items),
            **kwargs,
        )

    @classmethod
    def for_members(cls, client: TimelineApiClient, gestao_id: int, **kwargs: Any) -> OptimisticReorder:
        return cls(
            fetch=lambda: client.list_members(gestao_id),
            commit=lambda items: client.reorder_members(gestao_id, items),
            **kwargs,
        )

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    def load(self) -> list[Item]:
        self._set_items(self._fetch(), confirmed=True)
        return self.items

    def move(self, from_index: int, to_index: Optional[int]) -> ReorderResult:
        # Soltar fora de um alvo válido ou no mesmo lugar não gera chamada
        if to_index is None or from_index == to_index:
            return ReorderResult(ReorderStatus.NOOP, self.items)
        if not (0 <= from_index < len(self._items)) or not (0 <= to_index < len(self._items)):
            return ReorderResult(ReorderStatus.NOOP, self.items)

        optimistic = array_move(self._items, from_index, to_index)
        self._set_items(optimistic, confirmed=False)

        try:
            self._commit(restamp(optimistic))
        except Exception as exc:
            # Qualquer falha (HTTP, resposta ilegível) descarta a ordem otimista
            log_warning('REORDER_ROLLBACK', {'from': from_index, 'to': to_index, 'error': exc.__class__.__name__})
            self._resync()
            return ReorderResult(ReorderStatus.ROLLED_BACK, self.items, exc)

        try:
            self._set_items(self._fetch(), confirmed=True)
        except httpx.HTTPError as exc:
            # Lote aceito; a ordem otimista passa a ser a confirmada
            log_warning('REORDER_RECONCILE_FAILED', {'error': exc.__class__.__name__})
            self._confirmed = list(optimistic)

        log_info('REORDER_CONFIRMED', {'from': from_index, 'to': to_index, 'count': len(optimistic)})
        return ReorderResult(ReorderStatus.CONFIRMED, self.items)

    def _resync(self) -> None:
        """Descarta a ordem otimista e recarrega; sem servidor, volta ao último estado confirmado."""
        try:
            self._set_items(self._fetch(), confirmed=True)
        except httpx.HTTPError as exc:
            log_warning('REORDER_RESYNC_FAILED', {'error': exc.__class__.__name__})
            self._set_items(self._confirmed, confirmed=True)

    def _set_items(self, items: Sequence[Item], *, confirmed: bool) -> None:
        self._items = list(items)
        if confirmed:
            self._confirmed = list(items)
        if self._on_change is not None:
            self._on_change(self.items)
