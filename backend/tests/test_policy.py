import pytest
from salesops.services.policy import (
    has_role, has_permission, has_any_permission, has_all_permissions, can_edit_sales_rep_profile,
)
from salesops.services.session import EffectivePrincipal


def _p(roles=(), perms=(), sales_rep_id=None):
    return EffectivePrincipal(id=1, roles=frozenset(roles), permissions=frozenset(perms), sales_rep_id=sales_rep_id)


@pytest.mark.parametrize('code', ['clients:edit', 'roles:delete', 'anything', ''])
def test_wildcard_satisfies_every_permission(code):
    p = _p(perms=['*'])
    assert has_permission(p, code)
    assert has_any_permission(p, [code])
    assert has_all_permissions(p, [code, 'other:thing'])


def test_has_role_is_intersection():
    p = _p(roles=['viewer', 'sales_manager'])
    assert has_role(p, ['admin', 'sales_manager'])
    assert not has_role(p, ['admin'])
    assert not has_role(p, [])
    assert not has_role(_p(), ['admin'])
    assert not has_role(None, ['admin'])


def test_sales_rep_scenario():
    p = _p(roles=['sales_rep'], perms=['clients:view', 'sales:view'])
    assert not has_permission(p, 'clients:edit')
    assert has_role(p, ['admin', 'sales_rep'])


def test_any_and_all():
    p = _p(perms=['clients:view', 'sales:view'])
    assert has_any_permission(p, ['clients:edit', 'sales:view'])
    assert not has_any_permission(p, ['clients:edit'])
    assert not has_any_permission(p, [])
    assert has_all_permissions(p, ['clients:view', 'sales:view'])
    assert not has_all_permissions(p, ['clients:view', 'clients:edit'])


def test_missing_principal_is_denied_not_raised():
    assert has_permission(None, 'clients:view') is False
    assert has_any_permission(None, ['clients:view']) is False
    assert has_all_permissions(None, []) is False


def test_sales_rep_profile_ownership():
    rep = _p(roles=['sales_rep'], sales_rep_id=5)
    assert can_edit_sales_rep_profile(rep, 5)
    assert not can_edit_sales_rep_profile(rep, 6)
    assert not can_edit_sales_rep_profile(_p(roles=['sales_rep']), 5)
    assert can_edit_sales_rep_profile(_p(roles=['sales_manager']), 6)
    assert not can_edit_sales_rep_profile(_p(roles=['viewer']), 6)
    assert not can_edit_sales_rep_profile(None, 5)


@pytest.mark.parametrize('bad', [None, 42, object(), 'viewer', [['viewer']], [None, {'r': 1}]])
def test_has_role_malformed_requirement_is_false(bad):
    assert has_role(_p(roles=['viewer']), bad) is False


@pytest.mark.parametrize('bad', [None, 7, ['clients:view'], {'clients:view'}, ('clients:view',)])
def test_has_permission_non_string_is_false(bad):
    p = _p(perms=['clients:view'])
    assert has_permission(p, bad) is False
    # the wildcard still grants everything
    assert has_permission(_p(perms=['*']), bad) is True


@pytest.mark.parametrize('bad', [None, 3, 'clients:view', [['clients:view']], [{'x': 1}]])
def test_any_and_all_malformed_lists_are_false(bad):
    p = _p(perms=['clients:view'])
    assert has_any_permission(p, bad) is False
    assert has_all_permissions(p, bad) is False


def test_non_string_members_are_skipped_or_unmet():
    p = _p(roles=['viewer'], perms=['clients:view'])
    assert has_role(p, [['admin'], 'viewer'])
    assert has_any_permission(p, [['x'], 'clients:view'])
    assert not has_all_permissions(p, ['clients:view', ['clients:view']])
    assert has_all_permissions(_p(perms=['*']), [['x']])
