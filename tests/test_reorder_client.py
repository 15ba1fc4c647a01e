import httpx

from timeline_app.client.api_client import TimelineApiClient
from timeline_app.client.reorder import OptimisticReorder, ReorderStatus, array_move, restamp


class FakeEndpoint:
    """Lista em memória com contadores de chamadas."""

    def __init__(self, items, fail_commit=False, fail_fetch=False):
        self.items = [dict(item) for item in items]
        self.fail_commit = fail_commit
        self.fail_fetch = fail_fetch
        self.fetch_calls = 0
        self.commits = []

    def fetch(self):
        self.fetch_calls += 1
        if self.fail_fetch:
            raise httpx.ConnectError('offline')
        return sorted((dict(item) for item in self.items), key=lambda item: item['display_order'])

    def commit(self, entries):
        self.commits.append(entries)
        if self.fail_commit:
            raise httpx.ConnectError('offline')
        orders = {entry['id']: entry['display_order'] for entry in entries}
        for item in self.items:
            item['display_order'] = orders.get(item['id'], item['display_order'])


def _items(*ids):
    return [{'id': item_id, 'display_order': position} for position, item_id in enumerate(ids)]


def test_array_move_returns_a_new_list():
    original = ['a', 'b', 'c', 'd']

    assert array_move(original, 3, 0) == ['d', 'a', 'b', 'c']
    assert array_move(original, 0, 2) == ['b', 'c', 'a', 'd']
    assert original == ['a', 'b', 'c', 'd']


def test_restamp_covers_every_sibling():
    assert restamp([{'id': 7}, {'id': 3}, {'id': 5}]) == [
        {'id': 7, 'display_order': 0},
        {'id': 3, 'display_order': 1},
        {'id': 5, 'display_order': 2},
    ]


def test_drop_outside_or_in_place_makes_no_call():
    endpoint = FakeEndpoint(_items(1, 2, 3))
    reorder = OptimisticReorder(endpoint.fetch, endpoint.commit)
    reorder.load()

    assert reorder.move(1, None).status is ReorderStatus.NOOP
    assert reorder.move(1, 1).status is ReorderStatus.NOOP
    assert reorder.move(0, 9).status is ReorderStatus.NOOP
    assert endpoint.commits == []
    assert endpoint.fetch_calls == 1


def test_successful_move_sends_full_batch_and_refetches():
    endpoint = FakeEndpoint(_items(1, 2, 3))
    seen = []
    reorder = OptimisticReorder(endpoint.fetch, endpoint.commit, on_change=seen.append)
    reorder.load()

    result = reorder.move(2, 0)

    assert result.status is ReorderStatus.CONFIRMED
    assert endpoint.commits == [_items(3, 1, 2)]
    assert [item['id'] for item in result.items] == [3, 1, 2]
    assert endpoint.fetch_calls == 2
    # carga inicial, ordem otimista e lista reconciliada
    assert len(seen) == 3
    assert [item['id'] for item in seen[1]] == [3, 1, 2]


def test_failed_commit_rolls_back_to_server_list():
    endpoint = FakeEndpoint(_items(1, 2, 3), fail_commit=True)
    reorder = OptimisticReorder(endpoint.fetch, endpoint.commit)
    reorder.load()

    result = reorder.move(0, 2)

    assert result.status is ReorderStatus.ROLLED_BACK
    assert isinstance(result.error, httpx.HTTPError)
    assert [item['id'] for item in result.items] == [1, 2, 3]


def test_rollback_without_server_restores_last_confirmed_order():
    endpoint = FakeEndpoint(_items(1, 2, 3))
    reorder = OptimisticReorder(endpoint.fetch, endpoint.commit)
    reorder.load()
    endpoint.fail_commit = True
    endpoint.fail_fetch = True

    result = reorder.move(0, 2)

    assert result.status is ReorderStatus.ROLLED_BACK
    assert [item['id'] for item in reorder.items] == [1, 2, 3]


def _gestoes(client, timeline_id, periods):
    for period in periods:
        client.post('/gestoes/', json={'timeline_id': timeline_id, 'period': period})


def test_move_against_live_api(client, timeline):
    _gestoes(client, timeline['id'], ('A', 'B', 'C'))
    reorder = OptimisticReorder.for_gestoes(TimelineApiClient(client), timeline['id'])
    reorder.load()

    result = reorder.move(2, 0)

    assert result.status is ReorderStatus.CONFIRMED
    assert [gestao['period'] for gestao in result.items] == ['C', 'A', 'B']
    server = client.get('/gestoes/', params={'timeline_id': timeline['id']}).json()
    assert [gestao['period'] for gestao in server] == ['C', 'A', 'B']


def test_stale_list_is_rolled_back_to_server_state(client, timeline):
    _gestoes(client, timeline['id'], ('A', 'B', 'C'))
    reorder = OptimisticReorder.for_gestoes(TimelineApiClient(client), timeline['id'])
    loaded = reorder.load()

    # Outra aba remove uma gestão depois da carga
    client.delete(f"/gestoes/{loaded[1]['id']}")

    result = reorder.move(0, 2)

    assert result.status is ReorderStatus.ROLLED_BACK
    assert isinstance(result.error, httpx.HTTPStatusError)
    assert result.error.response.status_code == 422
    server = client.get('/gestoes/', params={'timeline_id': timeline['id']}).json()
    assert result.items == server
    assert [gestao['period'] for gestao in server] == ['A', 'C']


def test_member_reorder_against_live_api(client, timeline):
    gestao = client.post(
        '/gestoes/',
        json={'timeline_id': timeline['id'], 'period': '2020', 'members': ['A', 'B', 'C']},
    ).json()
    reorder = OptimisticReorder.for_members(TimelineApiClient(client), gestao['id'])
    reorder.load()

    result = reorder.move(0, 2)

    assert result.status is ReorderStatus.CONFIRMED
    assert [member['name'] for member in result.items] == ['B', 'C', 'A']


def test_unexpected_commit_error_also_rolls_back():
    endpoint = FakeEndpoint(_items(1, 2, 3))

    def broken_commit(entries):
        raise ValueError('resposta sem JSON')

    reorder = OptimisticReorder(endpoint.fetch, broken_commit)
    reorder.load()

    result = reorder.move(0, 2)

    assert result.status is ReorderStatus.ROLLED_BACK
    assert isinstance(result.error, ValueError)
    assert [item['id'] for item in reorder.items] == [1, 2, 3]
    assert endpoint.fetch_calls == 2
