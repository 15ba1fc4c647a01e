from http import HTTPStatus

PASSWORD = 'secret123'


def test_superadmin_lists_admins(client, admins):
    response = client.get('/admin/users/')

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data['offset'] == 0
    assert [item['username'] for item in data['items']] == ['root', 'alice', 'bob']


def test_user_management_requires_superadmin(client, admins, login_as, oauth_token):
    login_as('alice')
    response = client.get('/admin/users/')
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'SUPERADMIN_REQUIRED'

    client.cookies.clear()
    assert client.get('/admin/users/').status_code == HTTPStatus.UNAUTHORIZED

    # Admin OAuth é global para timelines, mas não gerencia contas locais
    token = oauth_token('owner-open-id', name='Owner')
    response = client.get('/admin/users/', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'LOCAL_ADMIN_REQUIRED'


def test_superadmin_check_rereads_role_from_store(client, admins, login_as):
    response = client.post('/admin/users/', json={'username': 'sam', 'password': PASSWORD, 'role': 'superadmin'})
    sam_id = response.json()['id']

    login_as('sam')
    sam_cookie = client.cookies.get('app_session_id')
    assert client.get('/admin/users/').status_code == HTTPStatus.OK

    login_as('root')
    client.patch(f'/admin/users/{sam_id}', json={'role': 'admin'})

    # O cookie de sam ainda diz "superadmin", mas o papel atual no banco é "admin"
    client.cookies.clear()
    response = client.get('/admin/users/', headers={'Cookie': f'app_session_id={sam_cookie}'})
    assert response.status_code == HTTPStatus.FORBIDDEN


def test_create_admin_rejects_duplicate_username(client, admins):
    response = client.post('/admin/users/', json={'username': 'Alice', 'password': PASSWORD})

    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json()['detail']['code'] == 'ADMIN_USERNAME_EXISTS'


def test_create_admin_validates_role_and_password(client, admins):
    response = client.post('/admin/users/', json={'username': 'carol', 'password': PASSWORD, 'role': 'owner'})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    response = client.post('/admin/users/', json={'username': 'carol', 'password': '12345'})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_update_admin_profile(client, admins):
    response = client.patch(
        f"/admin/users/{admins['alice']}",
        json={'full_name': 'Alice Souza', 'email': 'alice@example.com'},
    )

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data['full_name'] == 'Alice Souza'
    assert data['email'] == 'alice@example.com'
    assert data['username'] == 'alice'


def test_update_admin_rechecks_username_uniqueness(client, admins):
    response = client.patch(f"/admin/users/{admins['alice']}", json={'username': 'bob'})

    assert response.status_code == HTTPStatus.CONFLICT


def test_superadmin_cannot_change_own_role(client, admins):
    response = client.patch(f"/admin/users/{admins['root']}", json={'role': 'admin'})

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'ADMIN_SELF_ROLE_CHANGE_FORBIDDEN'


def test_deactivate_blocks_login_and_activate_restores_it(client, admins):
    response = client.patch(f"/admin/users/{admins['alice']}/active", json={'is_active': False})
    assert response.status_code == HTTPStatus.OK
    assert response.json()['is_active'] is False

    alice_login = {'username': 'alice', 'password': PASSWORD}
    root_cookie = client.cookies.get('app_session_id')
    client.cookies.clear()
    assert client.post('/auth/local/login', json=alice_login).status_code == HTTPStatus.UNAUTHORIZED

    client.cookies.clear()
    response = client.patch(
        f"/admin/users/{admins['alice']}/active",
        json={'is_active': True},
        headers={'Cookie': f'app_session_id={root_cookie}'},
    )
    assert response.status_code == HTTPStatus.OK
    assert client.post('/auth/local/login', json=alice_login).status_code == HTTPStatus.OK


def test_cannot_deactivate_or_delete_self(client, admins):
    response = client.patch(f"/admin/users/{admins['root']}/active", json={'is_active': False})
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'ADMIN_SELF_DEACTIVATE_FORBIDDEN'

    response = client.delete(f"/admin/users/{admins['root']}")
    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json()['detail']['code'] == 'ADMIN_SELF_DELETE_FORBIDDEN'


def test_reset_password_of_another_admin(client, admins):
    response = client.patch(f"/admin/users/{admins['bob']}/password", json={'new_password': 'reset-pass'})
    assert response.status_code == HTTPStatus.OK

    client.cookies.clear()
    response = client.post('/auth/local/login', json={'username': 'bob', 'password': 'reset-pass'})
    assert response.status_code == HTTPStatus.OK


def test_delete_admin_removes_grants(client, admins, timeline, login_as):
    client.post('/permissions/', json={'admin_id': admins['bob'], 'timeline_id': timeline['id'], 'can_edit': True})

    login_as('root')
    response = client.delete(f"/admin/users/{admins['bob']}")
    assert response.status_code == HTTPStatus.NO_CONTENT
    assert client.get(f"/admin/users/{admins['bob']}").status_code == HTTPStatus.NOT_FOUND

    response = client.get('/permissions/', params={'timeline_id': timeline['id']})
    assert response.json() == []


def test_delete_admin_refused_while_owning_timelines(client, admins, timeline, login_as):
    login_as('root')

    response = client.delete(f"/admin/users/{admins['alice']}")

    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json()['detail']['timeline_ids'] == [timeline['id']]

    client.post(f"/timelines/{timeline['id']}/transfer", json={'new_owner_id': admins['bob']})
    assert client.delete(f"/admin/users/{admins['alice']}").status_code == HTTPStatus.NO_CONTENT


def test_get_unknown_admin_returns_not_found(client, admins):
    response = client.get('/admin/users/999')

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json()['detail']['code'] == 'ADMIN_NOT_FOUND'
