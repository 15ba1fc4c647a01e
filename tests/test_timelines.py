from http import HTTPStatus

PASSWORD = 'secret123'


def test_creator_becomes_owner(client, admins, timeline):
    assert timeline['owner_id'] == admins['alice']
    assert timeline['slug'] == 't1'


def test_slug_must_be_unique_and_well_formed(client, timeline):
    response = client.post('/timelines/', json={'name': 'Outra', 'slug': 't1'})
    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json()['detail']['code'] == 'TIMELINE_SLUG_EXISTS'

    response = client.post('/timelines/', json={'name': 'Outra', 'slug': 'Com Espaço'})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_admin_tier_rejects_anonymous_and_plain_oauth_users(client, admins, oauth_token):
    client.cookies.clear()
    assert client.get('/timelines/').status_code == HTTPStatus.UNAUTHORIZED

    token = oauth_token('someone', name='Someone')
    response = client.get('/timelines/', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'NOT_ADMIN'


def test_non_owner_without_grant_is_forbidden_until_granted(client, admins, timeline, login_as):
    timeline_id = timeline['id']

    login_as('bob')
    response = client.patch(f'/timelines/{timeline_id}', json={'name': 'X'})
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert client.delete(f'/timelines/{timeline_id}').status_code == HTTPStatus.FORBIDDEN
    assert client.get(f'/timelines/{timeline_id}/export').status_code == HTTPStatus.FORBIDDEN

    login_as('alice')
    response = client.post(
        '/permissions/',
        json={'admin_id': admins['bob'], 'timeline_id': timeline_id, 'can_edit': True},
    )
    assert response.status_code == HTTPStatus.OK

    login_as('bob')
    response = client.patch(f'/timelines/{timeline_id}', json={'name': 'X'})
    assert response.status_code == HTTPStatus.OK
    assert response.json()['name'] == 'X'
    assert client.get(f'/timelines/{timeline_id}/export').status_code == HTTPStatus.OK
    # can_edit não libera a remoção
    assert client.delete(f'/timelines/{timeline_id}').status_code == HTTPStatus.FORBIDDEN


def test_can_delete_grant_allows_removal(client, admins, timeline, login_as):
    client.post(
        '/permissions/',
        json={'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_delete': True},
    )

    login_as('bob')
    assert client.patch(f"/timelines/{timeline['id']}", json={'name': 'X'}).status_code == HTTPStatus.FORBIDDEN
    assert client.delete(f"/timelines/{timeline['id']}").status_code == HTTPStatus.NO_CONTENT


def test_list_is_scoped_to_owned_and_granted(client, admins, timeline, login_as):
    login_as('bob')
    client.post('/timelines/', json={'name': 'Bob', 'slug': 'bob'})
    response = client.get('/timelines/')
    assert [item['slug'] for item in response.json()['items']] == ['bob']

    login_as('alice')
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id']})

    login_as('bob')
    response = client.get('/timelines/')
    assert sorted(item['slug'] for item in response.json()['items']) == ['bob', 't1']

    login_as('root')
    response = client.get('/timelines/')
    assert sorted(item['slug'] for item in response.json()['items']) == ['bob', 't1']


def test_read_grant_allows_get_but_not_edit(client, admins, timeline, login_as):
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id']})

    login_as('bob')
    assert client.get(f"/timelines/{timeline['id']}").status_code == HTTPStatus.OK
    assert client.patch(f"/timelines/{timeline['id']}", json={'name': 'X'}).status_code == HTTPStatus.FORBIDDEN


def test_unknown_timeline_returns_not_found(client, timeline):
    response = client.patch('/timelines/999', json={'name': 'X'})

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()['detail']['code'] == 'TIMELINE_NOT_FOUND'


def test_superadmin_overrides_ownership(client, timeline, login_as):
    login_as('root')

    response = client.patch(f"/timelines/{timeline['id']}", json={'description': 'editada pelo root'})

    assert response.status_code == HTTPStatus.OK
    assert response.json()['description'] == 'editada pelo root'


def test_oauth_admin_is_global_override(client, timeline, oauth_token):
    client.cookies.clear()
    headers = {'Authorization': f"Bearer {oauth_token('owner-open-id', name='Owner')}"}

    response = client.get('/timelines/', headers=headers)
    assert response.status_code == HTTPStatus.OK
    assert [item['slug'] for item in response.json()['items']] == ['t1']

    response = client.patch(f"/timelines/{timeline['id']}", json={'name': 'Via OAuth'}, headers=headers)
    assert response.status_code == HTTPStatus.OK


def test_oauth_admin_must_name_an_owner_when_creating(client, admins, oauth_token):
    client.cookies.clear()
    headers = {'Authorization': f"Bearer {oauth_token('owner-open-id')}"}

    response = client.post('/timelines/', json={'name': 'Sem dono', 'slug': 'sem-dono'}, headers=headers)
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    response = client.post(
        '/timelines/',
        json={'name': 'Com dono', 'slug': 'com-dono', 'owner_id': admins['bob']},
        headers=headers,
    )
    assert response.status_code == HTTPStatus.CREATED
    assert response.json()['owner_id'] == admins['bob']


def test_delete_timeline_cascades_to_gestoes_members_and_grants(client, admins, timeline):
    timeline_id = timeline['id']
    first = client.post('/gestoes/', json={'timeline_id': timeline_id, 'period': '2020', 'members': ['A', 'B']}).json()
    second = client.post('/gestoes/', json={'timeline_id': timeline_id, 'period': '2021', 'members': ['C']}).json()
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline_id, 'can_edit': True})

    response = client.delete(f'/timelines/{timeline_id}')

    assert response.status_code == HTTPStatus.NO_CONTENT
    assert client.get('/gestoes/', params={'timeline_id': timeline_id}).json() == []
    for gestao in (first, second):
        assert client.get('/members/', params={'gestao_id': gestao['id']}).json() == []
        assert client.get(f"/gestoes/{gestao['id']}").status_code == HTTPStatus.NOT_FOUND
    assert client.get(f'/timelines/{timeline_id}').status_code == HTTPStatus.NOT_FOUND


def test_transfer_ownership_keeps_existing_grants(client, admins, timeline, login_as):
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_edit': True})

    response = client.post(f"/timelines/{timeline['id']}/transfer", json={'new_owner_id': admins['root']})
    assert response.status_code == HTTPStatus.OK
    assert response.json()['owner_id'] == admins['root']

    # alice deixou de ser dona e não tem concessão
    assert client.patch(f"/timelines/{timeline['id']}", json={'name': 'X'}).status_code == HTTPStatus.FORBIDDEN

    login_as('bob')
    assert client.patch(f"/timelines/{timeline['id']}", json={'name': 'Y'}).status_code == HTTPStatus.OK


def test_only_owner_or_global_admin_can_transfer(client, admins, timeline, login_as):
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_edit': True})

    login_as('bob')
    response = client.post(f"/timelines/{timeline['id']}/transfer", json={'new_owner_id': admins['bob']})

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'TIMELINE_OWNER_REQUIRED'


def test_transfer_to_unknown_admin_returns_not_found(client, timeline):
    response = client.post(f"/timelines/{timeline['id']}/transfer", json={'new_owner_id': 999})

    assert response.status_code == HTTPStatus.NOT_FOUND


def test_grant_upserts_and_revoke_removes(client, admins, timeline):
    url = '/permissions/'
    body = {'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_edit': True}
    first = client.post(url, json=body).json()
    second = client.post(url, json={**body, 'can_edit': False, 'can_delete': True}).json()

    assert first['id'] == second['id']
    assert second['can_edit'] is False
    assert second['can_delete'] is True

    listed = client.get(url, params={'timeline_id': timeline['id']}).json()
    assert [item['admin_id'] for item in listed] == [admins['bob']]

    revoke = {'admin_id': admins['bob'], 'timeline_id': timeline['id']}
    assert client.post('/permissions/revoke', json=revoke).status_code == HTTPStatus.NO_CONTENT
    assert client.post('/permissions/revoke', json=revoke).status_code == HTTPStatus.NOT_FOUND


def test_grantee_cannot_manage_grants(client, admins, timeline, login_as):
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_edit': True})

    login_as('bob')
    response = client.get('/permissions/', params={'timeline_id': timeline['id']})

    assert response.status_code == HTTPStatus.FORBIDDEN


def test_public_views(client, timeline):
    client.post('/gestoes/', json={'timeline_id': timeline['id'], 'period': '2019', 'members': ['A']})
    active = client.post(
        '/gestoes/',
        json={'timeline_id': timeline['id'], 'period': '2020', 'start_active': True, 'members': ['B', 'C']},
    ).json()
    client.cookies.clear()

    listed = client.get('/public/timelines/').json()
    assert listed == [{'id': timeline['id'], 'name': 'T1', 'slug': 't1', 'description': None}]

    detail = client.get('/public/timelines/t1').json()
    assert detail['timeline']['slug'] == 't1'
    assert [gestao['period'] for gestao in detail['gestoes']] == ['2019', '2020']
    assert [member['name'] for member in detail['gestoes'][1]['members']] == ['B', 'C']
    assert detail['active_gestao_id'] == active['id']

    assert client.get('/public/timelines/missing').status_code == HTTPStatus.NOT_FOUND
