from http import HTTPStatus

import pytest

from timeline_app.domain.timelines.ordering import ReorderBatchError, ReorderEntry, check_reorder_batch


def _create_gestao(client, timeline_id, period, **fields):
    response = client.post('/gestoes/', json={'timeline_id': timeline_id, 'period': period, **fields})
    assert response.status_code == HTTPStatus.CREATED, response.text
    return response.json()


def _periods(client, timeline_id):
    return [gestao['period'] for gestao in client.get('/gestoes/', params={'timeline_id': timeline_id}).json()]


def test_create_with_member_names_assigns_positions(client, timeline):
    gestao = _create_gestao(client, timeline['id'], '2020-2021', members=['A', 'B'])

    assert [(member['name'], member['display_order']) for member in gestao['members']] == [('A', 0), ('B', 1)]
    assert gestao['display_order'] == 0


def test_create_with_member_objects_keeps_details(client, timeline):
    gestao = _create_gestao(
        client,
        timeline['id'],
        '2020',
        members=[
            {'name': 'Ana', 'role': 'Presidente', 'photo_url': 'https://example.com/ana.png'},
            {'name': 'Beto', 'role': 'Tesoureiro', 'display_order': 5},
        ],
    )

    ana, beto = gestao['members']
    assert ana['role'] == 'Presidente'
    assert ana['photo_url'] == 'https://example.com/ana.png'
    assert ana['display_order'] == 0
    assert beto['display_order'] == 5


def test_create_rejects_mixed_member_list(client, timeline):
    response = client.post(
        '/gestoes/',
        json={'timeline_id': timeline['id'], 'period': '2020', 'members': ['A', {'name': 'B'}]},
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.get('/gestoes/', params={'timeline_id': timeline['id']}).json() == []


def test_new_gestoes_go_after_existing_ones(client, timeline):
    for period in ('2018', '2019', '2020'):
        _create_gestao(client, timeline['id'], period)

    gestoes = client.get('/gestoes/', params={'timeline_id': timeline['id']}).json()
    assert [(gestao['period'], gestao['display_order']) for gestao in gestoes] == [
        ('2018', 0),
        ('2019', 1),
        ('2020', 2),
    ]


def test_equal_display_order_falls_back_to_period(client, timeline):
    _create_gestao(client, timeline['id'], '2021', display_order=0)
    _create_gestao(client, timeline['id'], '2019', display_order=0)

    assert _periods(client, timeline['id']) == ['2019', '2021']


def test_only_one_gestao_starts_active(client, timeline):
    first = _create_gestao(client, timeline['id'], '2019', start_active=True)
    second = _create_gestao(client, timeline['id'], '2020', start_active=True)

    assert client.get(f"/gestoes/{first['id']}").json()['start_active'] is False
    assert client.get(f"/gestoes/{second['id']}").json()['start_active'] is True

    response = client.patch(f"/gestoes/{first['id']}", json={'start_active': True})
    assert response.status_code == HTTPStatus.OK

    actives = [
        gestao['id']
        for gestao in client.get('/gestoes/', params={'timeline_id': timeline['id']}).json()
        if gestao['start_active']
    ]
    assert actives == [first['id']]


def test_update_gestao_period(client, timeline):
    gestao = _create_gestao(client, timeline['id'], '2020')

    response = client.patch(f"/gestoes/{gestao['id']}", json={'period': '2020-2022'})

    assert response.status_code == HTTPStatus.OK
    assert response.json()['period'] == '2020-2022'


def test_reads_are_public(client, timeline):
    gestao = _create_gestao(client, timeline['id'], '2020', members=['A'])
    client.cookies.clear()

    assert client.get('/gestoes/', params={'timeline_id': timeline['id']}).status_code == HTTPStatus.OK
    assert client.get(f"/gestoes/{gestao['id']}").status_code == HTTPStatus.OK
    assert client.get('/members/', params={'gestao_id': gestao['id']}).status_code == HTTPStatus.OK


def test_writes_require_admin_and_permission(client, timeline, login_as):
    gestao = _create_gestao(client, timeline['id'], '2020', members=['A'])
    member_id = gestao['members'][0]['id']

    client.cookies.clear()
    response = client.post('/gestoes/', json={'timeline_id': timeline['id'], 'period': '2021'})
    assert response.status_code == HTTPStatus.UNAUTHORIZED

    login_as('bob')
    assert client.patch(f"/gestoes/{gestao['id']}", json={'period': 'X'}).status_code == HTTPStatus.FORBIDDEN
    assert client.delete(f"/gestoes/{gestao['id']}").status_code == HTTPStatus.FORBIDDEN
    assert client.patch(f'/members/{member_id}', json={'name': 'X'}).status_code == HTTPStatus.FORBIDDEN
    response = client.post('/members/', json={'gestao_id': gestao['id'], 'name': 'Intruso'})
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_unknown_gestao_returns_not_found(client, timeline):
    assert client.get('/gestoes/999').status_code == HTTPStatus.NOT_FOUND

    response = client.patch('/gestoes/999', json={'period': 'X'})
    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()['detail']['code'] == 'GESTAO_NOT_FOUND'


def test_reorder_moves_last_to_first(client, timeline):
    ids = [_create_gestao(client, timeline['id'], period)['id'] for period in ('A', 'B', 'C')]
    new_order = [ids[2], ids[0], ids[1]]

    response = client.post(
        '/gestoes/reorder',
        json={
            'timeline_id': timeline['id'],
            'items': [{'id': gestao_id, 'display_order': position} for position, gestao_id in enumerate(new_order)],
        },
    )

    assert response.status_code == HTTPStatus.OK
    assert [gestao['id'] for gestao in response.json()] == new_order
    assert [gestao['display_order'] for gestao in response.json()] == [0, 1, 2]


def test_reorder_with_foreign_id_leaves_other_timeline_untouched(client, timeline):
    own = [_create_gestao(client, timeline['id'], period)['id'] for period in ('A', 'B')]

    other = client.post('/timelines/', json={'name': 'T2', 'slug': 't2'}).json()
    foreign = _create_gestao(client, other['id'], 'Z', display_order=7)

    response = client.post(
        '/gestoes/reorder',
        json={
            'timeline_id': timeline['id'],
            'items': [
                {'id': own[1], 'display_order': 0},
                {'id': own[0], 'display_order': 1},
                {'id': foreign['id'], 'display_order': 2},
            ],
        },
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    detail = response.json()['detail']
    assert detail['code'] == 'REORDER_FOREIGN_ITEM'
    assert detail['ids'] == [foreign['id']]

    # Nada foi gravado em nenhuma das timelines
    assert client.get(f"/gestoes/{foreign['id']}").json()['display_order'] == 7
    assert _periods(client, timeline['id']) == ['A', 'B']


def test_reorder_rejects_duplicate_ids(client, timeline):
    gestao_id = _create_gestao(client, timeline['id'], 'A')['id']

    response = client.post(
        '/gestoes/reorder',
        json={
            'timeline_id': timeline['id'],
            'items': [{'id': gestao_id, 'display_order': 0}, {'id': gestao_id, 'display_order': 1}],
        },
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json()['detail']['code'] == 'REORDER_DUPLICATE_ITEM'


def test_member_crud_through_gestao(client, timeline):
    gestao = _create_gestao(client, timeline['id'], '2020', members=['A'])

    response = client.post('/members/', json={'gestao_id': gestao['id'], 'name': 'B', 'role': 'Vice'})
    assert response.status_code == HTTPStatus.CREATED
    member = response.json()
    assert member['display_order'] == 1

    response = client.patch(f"/members/{member['id']}", json={'role': 'Presidente'})
    assert response.status_code == HTTPStatus.OK
    assert response.json()['role'] == 'Presidente'

    assert client.delete(f"/members/{member['id']}").status_code == HTTPStatus.NO_CONTENT
    assert client.get(f"/members/{member['id']}").status_code == HTTPStatus.NOT_FOUND
    assert [item['name'] for item in client.get('/members/', params={'gestao_id': gestao['id']}).json()] == ['A']


def test_member_reorder_is_scoped_to_gestao(client, timeline):
    first = _create_gestao(client, timeline['id'], '2020', members=['A', 'B'])
    second = _create_gestao(client, timeline['id'], '2021', members=['C'])
    a, b = (member['id'] for member in first['members'])

    response = client.post(
        '/members/reorder',
        json={'gestao_id': first['id'], 'items': [{'id': b, 'display_order': 0}, {'id': a, 'display_order': 1}]},
    )
    assert response.status_code == HTTPStatus.OK
    assert [member['name'] for member in response.json()] == ['B', 'A']

    intruder = second['members'][0]['id']
    response = client.post(
        '/members/reorder',
        json={'gestao_id': first['id'], 'items': [{'id': intruder, 'display_order': 0}]},
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.get(f'/members/{intruder}').json()['gestao_id'] == second['id']


def test_delete_gestao_removes_its_members(client, timeline):
    gestao = _create_gestao(client, timeline['id'], '2020', members=['A', 'B'])
    member_ids = [member['id'] for member in gestao['members']]

    assert client.delete(f"/gestoes/{gestao['id']}").status_code == HTTPStatus.NO_CONTENT

    assert client.get('/members/', params={'gestao_id': gestao['id']}).json() == []
    for member_id in member_ids:
        assert client.get(f'/members/{member_id}').status_code == HTTPStatus.NOT_FOUND


def test_check_reorder_batch_reports_foreign_before_duplicates():
    entries = [ReorderEntry(1, 0), ReorderEntry(1, 1), ReorderEntry(9, 2)]

    with pytest.raises(ReorderBatchError) as exc_info:
        check_reorder_batch(entries, [1, 2])

    assert exc_info.value.code == 'REORDER_FOREIGN_ITEM'
    assert exc_info.value.ids == [9]

    check_reorder_batch([ReorderEntry(2, 0), ReorderEntry(1, 1)], [1, 2, 3])


def test_member_names_are_bounded_in_both_shapes(client, timeline):
    long_name = 'x' * 501

    for members in ([long_name], [{'name': long_name}]):
        response = client.post('/gestoes/', json={'timeline_id': timeline['id'], 'period': '2020', 'members': members})
        assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    response = client.post(
        f"/timelines/{timeline['id']}/import",
        json={'gestoes': [{'period': '2020', 'members': [long_name]}]},
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.get('/gestoes/', params={'timeline_id': timeline['id']}).json() == []
