from salesops.services.roles import RoleService
from tests.test_utils_seed import seed_user_with_role, jwt_headers


def test_healthz(client):
    assert client.get('/healthz').get_json() == {'status': 'ok'}


def test_unknown_path_returns_error_json(client):
    resp = client.get('/non-existent-path')
    # Flask default 404 should be wrapped by error handler
    assert resp.status_code == 404
    body = resp.get_json()
    assert 'error' in body
    assert body['error']['status'] == 404
    assert 'detail' in body['error']


def test_domain_error_shape(client, app_instance):
    user, _ = seed_user_with_role('err_domain@example.com', 'err_domain_role', ['roles:create'])
    resp = client.post('/iam/roles', json={'name': ''}, headers=jwt_headers(app_instance, user.id))
    assert resp.status_code == 400
    assert resp.get_json()['error'] == {'status': 400, 'title': 'Bad Request', 'detail': 'Role name is required'}


def test_internal_error_shape(client, app_instance, monkeypatch):
    user, _ = seed_user_with_role('err@example.com', 'err_role', ['roles:view'])
    headers = jwt_headers(app_instance, user.id)

    def boom(self):
        raise RuntimeError('explode')
    monkeypatch.setattr(RoleService, 'list_roles', boom)
    resp = client.get('/iam/roles', headers=headers)
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['error']['status'] == 500
    assert body['error']['title'] == 'Internal Server Error'


def test_modules_expose_their_docstrings():
    from salesops import errors
    from salesops.services import seed, session, stores
    for module in (errors, seed, session, stores):
        assert module.__doc__ and module.__doc__.strip(), module.__name__
