import pytest
from salesops.errors import Conflict, InvalidArgument
from salesops.services.session import build_effective_principal
from salesops.services.users import UserService, user_to_dict


def test_create_user_hashes_password(store):
    user = UserService(store).create_user(' Dana ', 'dana@example.com', 's3cret')
    assert user.id is not None
    assert user_to_dict(user) == {'id': user.id, 'name': 'Dana', 'email': 'dana@example.com'}
    assert user.password_hash and user.password_hash != 's3cret'
    assert user.verify_password('s3cret')
    # a new principal starts with no roles
    p = build_effective_principal(store, user.id)
    assert p.roles == frozenset() and p.permissions == frozenset()


@pytest.mark.parametrize('name,email,password', [
    (None, 'a@example.com', 'pw'),
    ('A', '', 'pw'),
    ('A', 'a@example.com', None),
    ('A', 'a@example.com', ''),
    ('   ', 'a@example.com', 'pw'),
    (5, 'a@example.com', 'pw'),
])
def test_create_user_requires_fields(store, name, email, password):
    with pytest.raises(InvalidArgument):
        UserService(store).create_user(name, email, password)
    assert store.find_user_by_email('a@example.com') is None


def test_create_user_duplicate_email_conflicts(store):
    svc = UserService(store)
    svc.create_user('First', 'dup@example.com', 'pw')
    with pytest.raises(Conflict):
        svc.create_user('Second', 'dup@example.com', 'other')
    rows, total = store.list_users()
    assert total == 1 and rows[0].name == 'First'
