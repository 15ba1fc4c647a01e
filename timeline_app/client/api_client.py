# caminho: timeline_app/client/api_client.py
# Funções:
# - TimelineApiClient: chamadas tipadas do painel à API (httpx)
# - build_client(): cria o httpx.Client com base_url e timeout padrão

from __future__ import annotations

from typing import Any, Sequence

import httpx

DEFAULT_TIMEOUT = httpx.Timeout(15.0, connect=5.0)


def build_client(base_url: str, *, timeout: httpx.Timeout = DEFAULT_TIMEOUT) -> httpx.Client:
    return httpx.Client(base_url=base_url, timeout=timeout)


class TimelineApiClient:
    """Fina camada sobre um httpx.Client; respostas fora de 2xx viram httpx.HTTPStatusError."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    # -- Sessão -------------------------------------------------------------------

    def login_local(self, username: str, password: str) -> dict[str, Any]:
        return self._send('POST', '/auth/local/login', json={'username': username, 'password': password})

    def logout_local(self) -> dict[str, Any]:
        return self._send('POST', '/auth/local/logout')

    # -- Gestões ------------------------------------------------------------------

    def list_gestoes(self, timeline_id: int) -> list[dict[str, Any]]:
        return self._send('GET', '/gestoes/', params={'timeline_id': timeline_id})

    def reorder_gestoes(self, timeline_id: int, items: Sequence[dict[str, int]]) -> list[dict[str, Any]]:
        return self._send('POST', '/gestoes/reorder', json={'timeline_id': timeline_id, 'items': list(items)})

    # -- Membros ------------------------------------------------------------------

    def list_members(self, gestao_id: int) -> list[dict[str, Any]]:
        return self._send('GET', '/members/', params={'gestao_id': gestao_id})

    def reorder_members(self, gestao_id: int, items: Sequence[dict[str, int]]) -> list[dict[str, Any]]:
        return self._send('POST', '/members/reorder', json={'gestao_id': gestao_id, 'items': list(items)})

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        response = self._http.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()
