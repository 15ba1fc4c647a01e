# caminho: timeline_app/domain/timelines/ordering.py
# Funções:
# - ReorderEntry: par (id, display_order) de um lote de reordenação
# - check_reorder_batch(): valida o lote contra os ids irmãos antes de qualquer escrita

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(slots=True, frozen=True)
class ReorderEntry:
    id: int
    display_order: int


class ReorderBatchError(ValueError):
    def __init__(self, code: str, ids: Sequence[int]) -> None:
        super().__init__(code)
        self.code = code
        self.ids = list(ids)


def check_reorder_batch(entries: Sequence[ReorderEntry], sibling_ids: Iterable[int]) -> None:
    """Todo id deve pertencer ao pai informado e aparecer uma única vez."""
    siblings = set(sibling_ids)
    seen: set[int] = set()
    duplicated: list[int] = []
    foreign: list[int] = []

    for entry in entries:
        if entry.id in seen:
            duplicated.append(entry.id)
        seen.add(entry.id)
        if entry.id not in siblings:
            foreign.append(entry.id)

    if foreign:
        raise ReorderBatchError('REORDER_FOREIGN_ITEM', foreign)
    if duplicated:
        raise ReorderBatchError('REORDER_DUPLICATE_ITEM', duplicated)
