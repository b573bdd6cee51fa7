from salesops import get_db
from salesops.models.authz import User
from salesops.models.sales_rep import SalesRepresentative
from salesops.services.assignments import AssignmentService
from salesops.services.roles import RoleService
from salesops.services.session import build_effective_principal
from salesops.services.stores import SqlAuthzStore
from tests.test_utils_seed import ensure_user, ensure_role, ensure_user_role_assignment, ensure_sales_rep


def test_aggregates_roles_and_unions_permissions(store):
    roles = RoleService(store)
    a = roles.create_role('role_a', permissions=['clients:view', 'sales:view'])
    b = roles.create_role('role_b', permissions=['sales:view', 'products:view'])
    user = store.add_user(User(name='U', email='u@example.com'))
    AssignmentService(store).assign(user.id, a.id)
    AssignmentService(store).assign(user.id, b.id)
    p = build_effective_principal(store, user.id)
    assert p.roles == {'role_a', 'role_b'}
    assert p.permissions == {'clients:view', 'sales:view', 'products:view'}
    assert p.sales_rep_id is None


def test_enrichment_is_deterministic(store):
    roles = RoleService(store)
    r = roles.create_role('r', permissions=['reports:view', 'dashboard:view'])
    u1 = store.add_user(User(name='A', email='a@example.com'))
    u2 = store.add_user(User(name='B', email='b@example.com'))
    for u in (u1, u2):
        AssignmentService(store).assign(u.id, r.id)
    first = build_effective_principal(store, u1.id)
    assert build_effective_principal(store, u1.id) == first
    second = build_effective_principal(store, u2.id)
    assert (second.roles, second.permissions) == (first.roles, first.permissions)


def test_unknown_or_inactive_user_has_no_principal(store):
    assert build_effective_principal(store, 12345) is None
    user = store.add_user(User(name='Off', email='off@example.com', is_active=False))
    assert build_effective_principal(store, user.id) is None


def test_user_without_roles_gets_empty_sets(store):
    user = store.add_user(User(name='Bare', email='bare@example.com'))
    p = build_effective_principal(store, user.id)
    assert p.roles == frozenset() and p.permissions == frozenset()
    assert p.to_dict() == {'id': user.id, 'roles': [], 'permissions': [], 'sales_rep_id': None}


def test_sales_rep_link_by_email(store):
    user = store.add_user(User(name='Rep', email='rep@example.com'))
    rep = store.add_sales_rep(SalesRepresentative(name='Rep', email='rep@example.com'))
    store.add_sales_rep(SalesRepresentative(name='Other', email='REP@example.com.au'))
    assert build_effective_principal(store, user.id).sales_rep_id == rep.id


def test_sql_store_enrichment():
    user = ensure_user('enrich_sql@example.com')
    r1 = ensure_role('enrich_r1', ['clients:view'])
    r2 = ensure_role('enrich_r2', ['clients:view', 'sales:edit'])
    ensure_user_role_assignment(user, r1)
    ensure_user_role_assignment(user, r2)
    rep = ensure_sales_rep('enrich_sql@example.com')
    p = build_effective_principal(SqlAuthzStore(get_db()), user.id)
    assert p.roles == {'enrich_r1', 'enrich_r2'}
    assert p.permissions == {'clients:view', 'sales:edit'}
    assert p.sales_rep_id == rep.id
