from http import HTTPStatus

import pytest
from fastapi.testclient import TestClient
from jwt import encode

from timeline_app.config import get_settings
from timeline_app.infrastructure.db.base import get_engine, get_sessionmaker
from timeline_app.interfaces.api.app import create_application

OAUTH_SECRET = 'oauth-provider-secret-used-only-in-tests-0123456789'
OWNER_OPEN_ID = 'owner-open-id'
PASSWORD = 'secret123'


def _clear_caches():
    get_sessionmaker.cache_clear()
    get_engine.cache_clear()
    get_settings.cache_clear()


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv('DATABASE_URL', f'sqlite+aiosqlite:///{tmp_path / "test.db"}')
    monkeypatch.setenv('OAUTH_PROVIDER_SECRET', OAUTH_SECRET)
    monkeypatch.setenv('OAUTH_OWNER_OPEN_ID', OWNER_OPEN_ID)
    monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
    for name in ('REDIS_URL', 'ROOT_AUTH_USER', 'ROOT_AUTH_PASSWORD', 'ROOT_AUTH_EMAIL'):
        monkeypatch.delenv(name, raising=False)
    _clear_caches()

    application = create_application()
    yield application

    application.dependency_overrides.clear()
    _clear_caches()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def login_as(client):
    def _login(username, password=PASSWORD):
        client.cookies.clear()
        response = client.post('/auth/local/login', json={'username': username, 'password': password})
        assert response.status_code == HTTPStatus.OK, response.text
        return response.json()

    return _login


@pytest.fixture
def admins(client, login_as):
    """root (superadmin), alice e bob (admins comuns). Termina logado como root."""
    response = client.post('/auth/local/first-admin', json={'username': 'root', 'password': PASSWORD})
    assert response.status_code == HTTPStatus.CREATED, response.text
    ids = {'root': response.json()['id']}

    login_as('root')
    for username in ('alice', 'bob'):
        response = client.post('/admin/users/', json={'username': username, 'password': PASSWORD, 'role': 'admin'})
        assert response.status_code == HTTPStatus.CREATED, response.text
        ids[username] = response.json()['id']
    return ids


@pytest.fixture
def oauth_token():
    def _token(open_id, **claims):
        return encode({'open_id': open_id, **claims}, OAUTH_SECRET, algorithm='HS256')

    return _token


@pytest.fixture
def timeline(client, admins, login_as):
    """Timeline 't1' criada por alice (dona). Termina logado como alice."""
    login_as('alice')
    response = client.post('/timelines/', json={'name': 'T1', 'slug': 't1'})
    assert response.status_code == HTTPStatus.CREATED, response.text
    return response.json()
